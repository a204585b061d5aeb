"""
In-memory auth adapter implementing AuthInterface.
For demos and tests - users and sessions are lost on restart.
"""
import hashlib
import secrets
import uuid
from typing import Awaitable, Callable, Dict, List, Optional
from urllib.parse import urlencode

from ...api.exceptions import AuthenticationError
from ...domain.entities import Session, UserIdentity
from .base import AuthInterface, AuthStateCallback, AuthSubscription

MIN_PASSWORD_LENGTH = 6

# Called with (user_id, email) after sign-up, e.g. to create the profile row
ProfileHook = Callable[[str, str], Awaitable[object]]


def _hash_password(password: str, salt: str) -> str:
    return hashlib.sha256(f"{salt}:{password}".encode("utf-8")).hexdigest()


class _MemorySubscription(AuthSubscription):
    def __init__(self, listeners: List[AuthStateCallback], callback: AuthStateCallback):
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class MemoryAuth(AuthInterface):
    """Email/password auth kept in dicts; OAuth returns a fake authorization URL."""

    def __init__(self, profile_hook: Optional[ProfileHook] = None):
        self._users: Dict[str, Dict[str, str]] = {}  # email -> user record
        self._tokens: Dict[str, UserIdentity] = {}
        self._listeners: List[AuthStateCallback] = []
        self._current: Optional[Session] = None
        self.profile_hook = profile_hook

    def _emit(self, event: str, session: Optional[Session]) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    def _open_session(self, user: UserIdentity) -> Session:
        session = Session(
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
            user=user,
        )
        self._tokens[session.access_token] = user
        self._current = session
        self._emit("SIGNED_IN", session)
        return session

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        record = self._users.get(email.strip().lower())
        if record is None or record["password_hash"] != _hash_password(password, record["salt"]):
            raise AuthenticationError("Invalid login credentials")
        return self._open_session(UserIdentity(id=record["id"], email=record["email"]))

    async def sign_up(self, email: str, password: str) -> Optional[Session]:
        email = email.strip().lower()
        if not email or "@" not in email:
            raise AuthenticationError("Unable to validate email address: invalid format")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthenticationError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters.")
        if email in self._users:
            raise AuthenticationError("User already registered")

        salt = secrets.token_hex(8)
        user_id = str(uuid.uuid4())
        self._users[email] = {
            "id": user_id,
            "email": email,
            "salt": salt,
            "password_hash": _hash_password(password, salt),
        }
        if self.profile_hook is not None:
            await self.profile_hook(user_id, email)
        return self._open_session(UserIdentity(id=user_id, email=email))

    async def sign_in_with_oauth(self, provider: str, redirect_to: Optional[str] = None) -> str:
        params = {"provider": provider}
        if redirect_to:
            params["redirect_to"] = redirect_to
        return f"memory://auth/v1/authorize?{urlencode(params)}"

    async def sign_out(self, access_token: str) -> None:
        self._tokens.pop(access_token, None)
        if self._current is not None and self._current.access_token == access_token:
            self._current = None
        self._emit("SIGNED_OUT", None)

    async def get_user(self, access_token: str) -> UserIdentity:
        user = self._tokens.get(access_token)
        if user is None:
            raise AuthenticationError()
        return user

    async def get_session(self) -> Optional[Session]:
        return self._current

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        self._listeners.append(callback)
        return _MemorySubscription(self._listeners, callback)
