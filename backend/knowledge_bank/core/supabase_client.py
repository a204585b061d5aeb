"""
Process-wide Supabase client shared by the storage, database and auth adapters.
"""
from typing import Optional

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from . import config
from .logging_config import get_logger

logger = get_logger(__name__)

_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the shared Supabase client, creating it on first use.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_KEY is missing
    """
    global _client
    if _client is None:
        if not (config.SUPABASE_URL and config.SUPABASE_KEY):
            from ..api.exceptions import ConfigurationError
            raise ConfigurationError(
                "Supabase URL and key are not configured. "
                "Set SUPABASE_URL and SUPABASE_KEY in the environment or .env file."
            )
        _client = create_client(
            config.SUPABASE_URL,
            config.SUPABASE_KEY,
            options=ClientOptions(
                auto_refresh_token=True,
                persist_session=False
            )
        )
        logger.info("Supabase client created")
    return _client


def reset_supabase_client() -> None:
    """Drop the shared client (used on shutdown)."""
    global _client
    _client = None
