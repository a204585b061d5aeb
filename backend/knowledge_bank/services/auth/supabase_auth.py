"""
Supabase Auth adapter implementing AuthInterface.
"""
import asyncio
from typing import Any, Optional

from supabase import Client

from ...api.exceptions import AuthenticationError
from ...core.logging_config import get_logger
from ...domain.entities import Session, UserIdentity
from .base import AuthInterface, AuthStateCallback, AuthSubscription

logger = get_logger(__name__)


def _to_session(session: Any) -> Optional[Session]:
    if session is None:
        return None
    return Session(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user=UserIdentity(id=session.user.id, email=session.user.email),
    )


def _auth_message(e: Exception) -> str:
    return getattr(e, "message", None) or str(e) or AuthenticationError.default_message


class _SupabaseSubscription(AuthSubscription):
    def __init__(self, subscription):
        self._subscription = subscription

    def unsubscribe(self) -> None:
        self._subscription.unsubscribe()


class SupabaseAuth(AuthInterface):
    """
    Auth adapter on a dedicated Supabase client.

    The auth client is kept apart from the data client so that signing a
    user in never changes the credentials used for database queries.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def _run(self, func):
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, func)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        try:
            response = await self._run(
                lambda: self.supabase.auth.sign_in_with_password({"email": email, "password": password})
            )
        except Exception as e:
            logger.info(f"Sign-in failed for {email}: {e}")
            raise AuthenticationError(_auth_message(e)) from e
        session = _to_session(response.session)
        if session is None:
            raise AuthenticationError()
        return session

    async def sign_up(self, email: str, password: str) -> Optional[Session]:
        try:
            response = await self._run(
                lambda: self.supabase.auth.sign_up({"email": email, "password": password})
            )
        except Exception as e:
            logger.info(f"Sign-up failed for {email}: {e}")
            raise AuthenticationError(_auth_message(e)) from e
        return _to_session(response.session)

    async def sign_in_with_oauth(self, provider: str, redirect_to: Optional[str] = None) -> str:
        credentials = {"provider": provider}
        if redirect_to:
            credentials["options"] = {"redirect_to": redirect_to}
        try:
            response = await self._run(lambda: self.supabase.auth.sign_in_with_oauth(credentials))
        except Exception as e:
            raise AuthenticationError(_auth_message(e)) from e
        return response.url

    async def sign_out(self, access_token: str) -> None:
        try:
            await self._run(lambda: self.supabase.auth.admin.sign_out(access_token))
        except Exception as e:
            raise AuthenticationError(_auth_message(e)) from e

    async def get_user(self, access_token: str) -> UserIdentity:
        try:
            response = await self._run(lambda: self.supabase.auth.get_user(access_token))
        except Exception as e:
            raise AuthenticationError() from e
        if response is None or response.user is None:
            raise AuthenticationError()
        return UserIdentity(id=response.user.id, email=response.user.email)

    async def get_session(self) -> Optional[Session]:
        return _to_session(await self._run(self.supabase.auth.get_session))

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        def _listener(event, session):
            callback(str(event), _to_session(session))

        subscription = self.supabase.auth.on_auth_state_change(_listener)
        return _SupabaseSubscription(subscription)
