"""
File Storage Factory for creating storage adapters.
Implements Factory Pattern for plug-and-play storage support.
"""
from typing import Optional

from ...core import config
from ...core.logging_config import get_logger
from .base import FileStorageInterface
from .memory_storage import MemoryFileStorage

logger = get_logger(__name__)


class FileStorageFactory:
    """
    Factory for creating file storage adapters.
    Supports Supabase Storage and an in-memory store.
    """

    @staticmethod
    def create(storage_type: Optional[str] = None, **kwargs) -> FileStorageInterface:
        """
        Create a storage adapter instance.

        Args:
            storage_type: 'supabase', 'memory', or None to read STORAGE_TYPE
            **kwargs: Additional arguments for specific storage adapters

        Examples:
            storage = FileStorageFactory.create('memory')
            storage = FileStorageFactory.create('supabase', bucket_name='documentos')
        """
        storage_type = (storage_type or config.STORAGE_TYPE).lower()

        if storage_type == "supabase":
            return FileStorageFactory._create_supabase(**kwargs)
        elif storage_type == "memory":
            return MemoryFileStorage(
                bucket_name=kwargs.get("bucket_name", config.SUPABASE_STORAGE_BUCKET)
            )
        else:
            raise ValueError(
                f"Unsupported storage type: {storage_type}. "
                f"Supported types: 'supabase', 'memory'"
            )

    @staticmethod
    def _create_supabase(**kwargs):
        """Create Supabase Storage adapter."""
        from ...core.supabase_client import get_supabase_client
        from .supabase_storage import SupabaseFileStorage

        return SupabaseFileStorage(
            supabase=kwargs.get("supabase") or get_supabase_client(),
            bucket_name=kwargs.get("bucket_name", config.SUPABASE_STORAGE_BUCKET)
        )

    @staticmethod
    async def create_and_initialize(storage_type: Optional[str] = None, **kwargs) -> FileStorageInterface:
        """Create storage adapter and initialize it."""
        storage = FileStorageFactory.create(storage_type, **kwargs)
        await storage.initialize()
        return storage
