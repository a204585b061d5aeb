"""
Custom exceptions for API layer.
Separates business exceptions from HTTP exceptions.

Every business exception carries the message that is shown to the user.
"""
from fastapi import HTTPException, status


class KnowledgeBankError(Exception):
    """Base class for errors surfaced to the user as a single message."""
    default_message = "An unexpected error occurred."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class ConfigurationError(KnowledgeBankError):
    """Raised when required credentials are missing (fatal at startup)."""
    default_message = "The service is not configured."


class AuthenticationError(KnowledgeBankError):
    """Raised when sign-in fails or a request carries no valid session."""
    default_message = "You must sign in to continue."


class AnalysisError(KnowledgeBankError):
    """Raised when the AI response is missing or malformed."""
    default_message = "Failed to analyze document. Please try again."


class UploadError(KnowledgeBankError):
    """Raised when the file cannot be stored."""
    default_message = "Failed to upload file."


class InsertError(KnowledgeBankError):
    """Raised when the document row cannot be inserted."""
    default_message = "Failed to add document to the database."


class SearchError(KnowledgeBankError):
    """Raised when a search query fails."""
    default_message = "The search failed."


class QuotaExceededError(KnowledgeBankError):
    """Raised when the daily upload limit has been reached."""
    default_message = "You have reached your daily upload limit."


class UnsupportedFileError(KnowledgeBankError):
    """Raised when the declared media type is not accepted."""
    default_message = "Unsupported file type. Please upload a .pdf, .txt, .md, audio or video file."


class FileTooLargeError(KnowledgeBankError):
    """Raised when the uploaded file exceeds the size limit."""
    default_message = "The file is too large."


class SubmissionInProgressError(KnowledgeBankError):
    """Raised when the user already has a submission being processed."""
    default_message = "A file is already being processed. Please wait."


class DocumentNotFoundError(KnowledgeBankError):
    """Raised when document is not found."""
    default_message = "Document not found."


_STATUS_CODES = {
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AnalysisError: status.HTTP_502_BAD_GATEWAY,
    UploadError: status.HTTP_502_BAD_GATEWAY,
    InsertError: status.HTTP_502_BAD_GATEWAY,
    SearchError: status.HTTP_502_BAD_GATEWAY,
    QuotaExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    UnsupportedFileError: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    FileTooLargeError: status.HTTP_413_CONTENT_TOO_LARGE,
    SubmissionInProgressError: status.HTTP_409_CONFLICT,
    DocumentNotFoundError: status.HTTP_404_NOT_FOUND,
}


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    for exc_type, status_code in _STATUS_CODES.items():
        if isinstance(e, exc_type):
            return HTTPException(status_code=status_code, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
