"""
Session state holder.

One explicit object owns the auth subscription and the current session of
this process. It is attached when the application starts, injected into the
routers, and detached on shutdown.
"""
from typing import Callable, List, Optional

from ...api.exceptions import AuthenticationError
from ...core.logging_config import get_logger
from ...domain.entities import Session, UserIdentity
from .base import AuthInterface, AuthSubscription

logger = get_logger(__name__)

SessionListener = Callable[[str, Optional[Session]], None]


class SessionState:
    """
    Holds the current session and forwards auth state changes to listeners.

    Usage:
        state = SessionState()
        await state.attach(auth)
        unsubscribe = state.subscribe(lambda event, session: ...)
        ...
        state.detach()
    """

    def __init__(self):
        self.auth: Optional[AuthInterface] = None
        self.current: Optional[Session] = None
        self._subscription: Optional[AuthSubscription] = None
        self._listeners: List[SessionListener] = []

    @property
    def attached(self) -> bool:
        return self._subscription is not None

    async def attach(self, auth: AuthInterface) -> None:
        """Load the current session and start listening to auth state changes."""
        if self.attached:
            self.detach()
        self.auth = auth
        self.current = await auth.get_session()
        self._subscription = auth.on_auth_state_change(self._on_auth_state_change)
        logger.debug("Session state attached")

    def detach(self) -> None:
        """Stop listening and drop the current session and listeners."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()
        self.current = None
        self.auth = None
        logger.debug("Session state detached")

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _on_auth_state_change(self, event: str, session: Optional[Session]) -> None:
        logger.info(f"Auth state changed: {event}")
        self.current = session
        for listener in list(self._listeners):
            listener(event, session)

    async def resolve_user(self, access_token: str) -> UserIdentity:
        """
        User owning an access token.

        Raises:
            AuthenticationError: If no auth backend is attached or the token is invalid
        """
        if self.auth is None:
            raise AuthenticationError()
        return await self.auth.get_user(access_token)
