"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import NewType

UserId = NewType("UserId", str)


class MediaKind(str, Enum):
    """How a submitted file is indexed, decided by its declared media type."""
    DOCUMENT = "document"
    AUDIO = "audio"
    VIDEO = "video"

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "MediaKind":
        mime_type = (mime_type or "").lower()
        if mime_type.startswith("audio/"):
            return cls.AUDIO
        if mime_type.startswith("video/"):
            return cls.VIDEO
        return cls.DOCUMENT


class PreviewKind(str, Enum):
    """Viewer used to preview a stored file."""
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"


class SearchMode(str, Enum):
    TOPIC = "topic"
    AUTHOR = "author"
