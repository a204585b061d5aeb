"""
Abstract base class for auth adapters.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ...domain.entities import Session, UserIdentity

# callback(event, session) where event is e.g. "SIGNED_IN" or "SIGNED_OUT"
AuthStateCallback = Callable[[str, Optional[Session]], None]


class AuthSubscription(ABC):
    """Handle returned by on_auth_state_change."""

    @abstractmethod
    def unsubscribe(self) -> None:
        pass


class AuthInterface(ABC):
    """
    Abstract interface for authentication operations.

    Failures raise AuthenticationError carrying the message shown on the
    login form.
    """

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """Sign in with email and password."""
        pass

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> Optional[Session]:
        """
        Register a new user.

        Returns:
            The new session, or None when email confirmation is pending
        """
        pass

    @abstractmethod
    async def sign_in_with_oauth(self, provider: str, redirect_to: Optional[str] = None) -> str:
        """Start an OAuth flow and return the provider authorization URL."""
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Invalidate a session."""
        pass

    @abstractmethod
    async def get_user(self, access_token: str) -> UserIdentity:
        """Resolve the user owning an access token."""
        pass

    @abstractmethod
    async def get_session(self) -> Optional[Session]:
        """Session currently held by the auth client, if any."""
        pass

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        """Subscribe to sign-in/sign-out events."""
        pass
