"""
Abstract base class for file storage adapters.
All storage implementations must inherit from this class.
"""
from abc import ABC, abstractmethod


class FileStorageInterface(ABC):
    """
    Abstract interface for object storage operations.
    This allows plug-and-play storage support (Supabase, in-memory) without
    changing business logic.
    """

    @abstractmethod
    async def upload(self, file_path: str, content: bytes, content_type: str) -> str:
        """
        Store raw bytes under a storage key and return its public URL.

        Args:
            file_path: Storage key, e.g. "{user_id}/{timestamp}-report.pdf"
            content: File contents
            content_type: Declared media type

        Returns:
            Public URL of the stored object
        """
        pass

    @abstractmethod
    async def get_public_url(self, file_path: str) -> str:
        """Public URL of a stored object."""
        pass

    @abstractmethod
    async def initialize(self):
        """Initialize storage (verify buckets, connections, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Close storage connection."""
        pass
