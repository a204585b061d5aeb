"""
Submission Service - Indexes an uploaded file into the user's knowledge bank.

Workflow:
1. Classify the file by its declared media type
2. Audio/video: build a placeholder analysis locally
   Documents: analyze with the AI service
3. Upload the raw file to object storage under the user's folder
4. Insert the documents row
5. Refresh the user's document list and quota

Any failure aborts the sequence. A file uploaded before a failed insert is
left in storage (logged as orphaned).

Example Usage:
    service = SubmissionService(ai_service, storage, db_service, quota_service)
    result = await service.submit(IncomingFile(content, "report.pdf", "application/pdf"), user_id)
"""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import List, Optional, Set

from ..api.exceptions import (
    FileTooLargeError,
    InsertError,
    SubmissionInProgressError,
    UnsupportedFileError,
    UploadError,
)
from ..core.config import MAX_FILE_SIZE_BYTES, SUPPORTED_DOCUMENT_TYPES
from ..core.logging_config import get_logger
from ..domain.entities import DocumentData, IndexingResult, NewDocument, SubmissionResult
from ..domain.value_objects import MediaKind
from ..utils.filenames import build_storage_path, strip_extension
from .ai_service import AIService
from .quota_service import QuotaService
from .storage import FileStorageInterface

logger = get_logger(__name__)


@dataclass
class IncomingFile:
    """A file received from the client."""
    content: bytes
    file_name: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


def validate_incoming_file(
    file: IncomingFile,
    max_size_bytes: int = MAX_FILE_SIZE_BYTES,
    supported_types: List[str] = SUPPORTED_DOCUMENT_TYPES,
) -> None:
    """
    Check the declared type and size of an upload.

    Raises:
        UnsupportedFileError: Not a supported document, audio or video type
        FileTooLargeError: Larger than the configured maximum
    """
    kind = MediaKind.from_mime_type(file.content_type)
    if kind == MediaKind.DOCUMENT and (file.content_type or "").lower() not in supported_types:
        raise UnsupportedFileError()
    if file.size > max_size_bytes:
        raise FileTooLargeError(
            f"The file is too large. The maximum size is {max_size_bytes / (1024 * 1024):g} MB."
        )


def placeholder_analysis(file_name: str, kind: MediaKind) -> IndexingResult:
    """
    Indexing result for audio and video files, which skip AI analysis.

    The only keyword is the file name without its last extension and the
    relevance score is always 0.
    """
    label = "Audio" if kind == MediaKind.AUDIO else "Video"
    return IndexingResult(
        title=file_name,
        summary=f"{label} file: {file_name}.",
        category=label,
        keywords=[strip_extension(file_name)],
        relevance_score=0,
    )


class SubmissionGuard:
    """
    Allows one submission per user at a time within this process.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._in_flight: Set[str] = set()

    def is_busy(self, user_id: str) -> bool:
        return user_id in self._in_flight

    @asynccontextmanager
    async def hold(self, user_id: str):
        async with self._lock:
            if user_id in self._in_flight:
                raise SubmissionInProgressError()
            self._in_flight.add(user_id)
        try:
            yield
        finally:
            async with self._lock:
                self._in_flight.discard(user_id)


class SubmissionService:
    """
    Orchestrates analysis, upload and persistence of one file.

    Attributes:
        ai_service: AIService used for document analysis
        storage: Object storage adapter
        db_service: Database adapter
        quota_service: QuotaService used to refresh the counter
    """

    def __init__(
        self,
        ai_service: AIService,
        storage: FileStorageInterface,
        db_service,
        quota_service: QuotaService,
    ):
        self.ai_service = ai_service
        self.storage = storage
        self.db_service = db_service
        self.quota_service = quota_service

    async def analyze(self, file: IncomingFile) -> Optional[IndexingResult]:
        """
        Run AI analysis for documents.

        Returns:
            The AI result, or None for audio/video files
        """
        kind = MediaKind.from_mime_type(file.content_type)
        if kind != MediaKind.DOCUMENT:
            logger.info(f"Skipping AI analysis for {kind.value} file {file.file_name}")
            return None
        return await self.ai_service.analyze_document(file.content, file.content_type, file.file_name)

    async def store_file(self, file: IncomingFile, user_id: str, timestamp_ms: Optional[int] = None) -> str:
        """
        Upload the raw file to `{user_id}/{timestamp}-{sanitized name}`.

        Returns:
            Public URL of the stored file

        Raises:
            UploadError: If storage fails or returns no URL
        """
        path = build_storage_path(user_id, file.file_name, timestamp_ms)
        try:
            public_url = await self.storage.upload(path, file.content, file.content_type)
        except Exception as e:
            logger.error(f"Error uploading file to {path}: {e}", exc_info=True)
            raise UploadError() from e
        if not public_url:
            raise UploadError("Could not get public URL for uploaded file.")
        logger.info(f"Stored {file.file_name} at {path}")
        return public_url

    async def persist(self, new_document: NewDocument) -> DocumentData:
        """
        Insert the documents row.

        Raises:
            InsertError: If the insert fails
        """
        try:
            row = await self.db_service.insert_document(new_document.to_row())
        except Exception as e:
            logger.error(f"Error adding document: {e}", exc_info=True)
            raise InsertError() from e
        return DocumentData.from_row(row)

    async def list_documents(self, user_id: str, term: str = "") -> List[DocumentData]:
        """
        The user's knowledge bank, newest first.

        A non-blank `term` keeps only documents whose title, summary,
        category or keywords contain it (case-insensitive).
        A backend error is logged and yields an empty list.
        """
        try:
            rows = await self.db_service.list_documents_by_owner(user_id)
        except Exception as e:
            logger.error(f"Error fetching documents for {user_id}: {e}")
            return []
        documents = [DocumentData.from_row(row) for row in rows]
        if term.strip():
            documents = [doc for doc in documents if doc.matches(term)]
        return documents

    async def submit(self, file: IncomingFile, user_id: str) -> SubmissionResult:
        """
        Index and persist one file.

        Args:
            file: The uploaded file
            user_id: Owner of the new document

        Returns:
            SubmissionResult with the persisted document, the AI analysis
            (None for audio/video), the refreshed documents and quota

        Raises:
            AnalysisError, UploadError, InsertError
        """
        kind = MediaKind.from_mime_type(file.content_type)
        logger.info(f"Submitting {file.file_name} ({file.content_type}, {file.size} bytes) for {user_id}")

        analysis = await self.analyze(file)
        indexing = analysis or placeholder_analysis(file.file_name, kind)

        file_url = await self.store_file(file, user_id)

        try:
            document = await self.persist(NewDocument(
                analysis=indexing,
                file_url=file_url,
                file_name=file.file_name,
                user_id=user_id,
            ))
        except InsertError:
            logger.warning(f"Uploaded file left orphaned after failed insert: {file_url}")
            raise

        documents = await self.list_documents(user_id)
        quota = await self.quota_service.get_status(user_id)
        logger.info(f"Document {document.id} indexed ({indexing.category}); {quota.remaining} uploads left today")

        return SubmissionResult(
            document=document,
            analysis=analysis,
            documents=documents,
            quota=quota,
        )
