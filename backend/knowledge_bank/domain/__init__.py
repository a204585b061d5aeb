from .entities import (
    DocumentData,
    IndexingResult,
    NewDocument,
    QuotaStatus,
    Session,
    SubmissionResult,
    UserIdentity,
)
from .value_objects import MediaKind, PreviewKind, SearchMode, UserId

__all__ = [
    "DocumentData",
    "IndexingResult",
    "NewDocument",
    "QuotaStatus",
    "Session",
    "SubmissionResult",
    "UserIdentity",
    "MediaKind",
    "PreviewKind",
    "SearchMode",
    "UserId",
]
