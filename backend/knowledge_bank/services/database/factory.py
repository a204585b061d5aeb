"""
Database Factory for creating database adapters.
Implements Factory Pattern for plug-and-play database support.
"""
from typing import Optional

from ...core import config
from ...core.logging_config import get_logger
from .base import DatabaseInterface
from .memory_adapter import MemoryAdapter

logger = get_logger(__name__)


class DatabaseFactory:
    """
    Factory for creating database adapters.
    Supports Supabase (Postgres via PostgREST) and Memory (in-memory) backends.
    """

    @staticmethod
    def create(database_type: Optional[str] = None, **kwargs) -> DatabaseInterface:
        """
        Create a database adapter instance.

        Args:
            database_type: 'supabase', 'memory', or None to read DATABASE_TYPE
            **kwargs: Additional arguments for specific database adapters

        Examples:
            db = DatabaseFactory.create('memory')
            db = DatabaseFactory.create('supabase')
        """
        database_type = (database_type or config.DATABASE_TYPE).lower()

        if database_type == "supabase":
            return DatabaseFactory._create_supabase(**kwargs)
        elif database_type == "memory":
            return MemoryAdapter()
        else:
            raise ValueError(
                f"Unsupported database type: {database_type}. "
                f"Supported types: 'supabase', 'memory'"
            )

    @staticmethod
    def _create_supabase(**kwargs):
        from ...core.supabase_client import get_supabase_client
        from .supabase_adapter import SupabaseAdapter

        return SupabaseAdapter(supabase=kwargs.get("supabase") or get_supabase_client())

    @staticmethod
    async def create_and_initialize(database_type: Optional[str] = None, **kwargs) -> DatabaseInterface:
        """Create database adapter and initialize it."""
        db = DatabaseFactory.create(database_type, **kwargs)
        await db.initialize()
        return db
