"""
Documents Router - The caller's knowledge bank.

Example Usage:
    GET /documents/mine - Caller's documents, newest first
    GET /documents/mine?q=term - Same, filtered by a search term
    GET /documents/quota - Today's upload count and remaining uploads
    GET /documents/{document_id}/preview - Viewer descriptor for a document
"""
from typing import List

from fastapi import APIRouter, Depends, Query

from ..api.dto import DocumentDTO, PreviewDTO, QuotaDTO
from ..api.exceptions import DocumentNotFoundError
from ..api.mappers import DocumentMapper, QuotaMapper
from ..core.logging_config import get_logger
from ..domain.entities import DocumentData, UserIdentity
from ..services.quota_service import QuotaService
from ..services.submission_service import SubmissionService
from ..views.preview import DocumentPreview
from .dependencies import (
    get_current_user,
    get_db_service,
    get_quota_service,
    get_submission_service,
)

logger = get_logger(__name__)

router = APIRouter()


@router.get("/documents/mine", response_model=List[DocumentDTO])
async def list_my_documents(
    q: str = Query("", description="Filter over title, summary, category and keywords"),
    user: UserIdentity = Depends(get_current_user),
    submission_service: SubmissionService = Depends(get_submission_service),
):
    """Documents owned by the caller, newest first. Empty on backend errors."""
    documents = await submission_service.list_documents(user.id, q)
    return DocumentMapper.to_dto_list(documents)


@router.get("/documents/quota", response_model=QuotaDTO)
async def get_quota(
    user: UserIdentity = Depends(get_current_user),
    quota_service: QuotaService = Depends(get_quota_service),
):
    """Uploads made today against the daily limit."""
    quota = await quota_service.get_status(user.id)
    return QuotaMapper.to_dto(quota)


@router.get("/documents/{document_id}/preview", response_model=PreviewDTO)
async def preview_document(
    document_id: str,
    user: UserIdentity = Depends(get_current_user),
    db_service=Depends(get_db_service),
):
    """
    Which viewer to use for a stored file.

    `kind` is `video`, `audio` or `document` (generic embedded viewer),
    chosen from the file name extension.
    """
    row = await db_service.get_document(document_id)
    if not row:
        raise DocumentNotFoundError()

    preview = DocumentPreview.open(DocumentData.from_row(row))
    logger.debug(f"Preview of {document_id} for {user.id}: {preview.kind.value}")
    return preview.to_dict()
