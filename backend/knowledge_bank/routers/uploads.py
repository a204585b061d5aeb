"""
Upload Router - Indexes a file into the caller's knowledge bank.

Architecture:
- Router validates the upload, checks the daily quota and the in-flight guard
- SubmissionService runs analysis, storage upload and the database insert

Example Usage:
    POST /upload (multipart form with a `file` field)
"""
from fastapi import APIRouter, Depends, File, Request, UploadFile

from ..api.dto import SubmissionResponseDTO
from ..api.exceptions import QuotaExceededError
from ..api.mappers import SubmissionMapper
from ..core.logging_config import get_logger
from ..domain.entities import UserIdentity
from ..gateway.rate_limit import RATE_LIMIT, limiter
from ..services.quota_service import QuotaService
from ..services.submission_service import (
    IncomingFile,
    SubmissionGuard,
    SubmissionService,
    validate_incoming_file,
)
from .dependencies import (
    get_current_user,
    get_quota_service,
    get_submission_guard,
    get_submission_service,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post("/upload", response_model=SubmissionResponseDTO)
@limiter.limit(RATE_LIMIT)
async def upload_file(
    request: Request,
    file: UploadFile = File(...),
    user: UserIdentity = Depends(get_current_user),
    submission_service: SubmissionService = Depends(get_submission_service),
    quota_service: QuotaService = Depends(get_quota_service),
    guard: SubmissionGuard = Depends(get_submission_guard),
):
    """
    Upload and index a file.

    Documents (PDF, plain text, Markdown) are analyzed by the AI provider;
    audio and video files get a placeholder analysis. The raw file is stored
    under the caller's folder and a documents row is inserted.

    Returns:
        The new document, its analysis (null for audio/video), the refreshed
        list of the caller's documents and the refreshed quota

    Errors:
        415 unsupported type, 413 too large, 429 daily limit reached,
        409 another upload in progress, 502 analysis/upload/insert failure
    """
    incoming = IncomingFile(
        content=await file.read(),
        file_name=file.filename or "document",
        content_type=file.content_type or "",
    )
    validate_incoming_file(incoming)

    async with guard.hold(user.id):
        quota = await quota_service.get_status(user.id)
        if quota.reached:
            logger.info(f"Upload refused for {user.id}: daily limit of {quota.limit} reached")
            raise QuotaExceededError()

        result = await submission_service.submit(incoming, user.id)

    return SubmissionMapper.to_dto(result)
