"""
Auth Factory for creating auth adapters.
"""
from typing import Optional

from ...core import config
from ...core.logging_config import get_logger
from .base import AuthInterface
from .memory_auth import MemoryAuth

logger = get_logger(__name__)


class AuthFactory:
    """Creates the Supabase or in-memory auth adapter."""

    @staticmethod
    def create(auth_type: Optional[str] = None, **kwargs) -> AuthInterface:
        """
        Create an auth adapter.

        Args:
            auth_type: 'supabase', 'memory', or None to read AUTH_TYPE
            **kwargs: profile_hook for the memory adapter
        """
        auth_type = (auth_type or config.AUTH_TYPE).lower()

        if auth_type == "supabase":
            return AuthFactory._create_supabase()
        elif auth_type == "memory":
            return MemoryAuth(profile_hook=kwargs.get("profile_hook"))
        else:
            raise ValueError(
                f"Unsupported auth type: {auth_type}. "
                f"Supported types: 'supabase', 'memory'"
            )

    @staticmethod
    def _create_supabase():
        from supabase import create_client
        from supabase.lib.client_options import ClientOptions

        from ...api.exceptions import ConfigurationError
        from .supabase_auth import SupabaseAuth

        if not (config.SUPABASE_URL and config.SUPABASE_KEY):
            raise ConfigurationError("Supabase URL and key are not configured.")

        # Dedicated client: a signed-in session must not replace the data client's key
        client = create_client(
            config.SUPABASE_URL,
            config.SUPABASE_KEY,
            options=ClientOptions(
                auto_refresh_token=False,
                persist_session=False
            )
        )
        return SupabaseAuth(client)
