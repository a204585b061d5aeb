from types import SimpleNamespace

import pytest

from knowledge_bank.api.exceptions import AuthenticationError
from knowledge_bank.services.auth.supabase_auth import SupabaseAuth


class FakeAuthApiError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


def make_session(token="tok-1", user_id="u1", email="ana@example.com"):
    return SimpleNamespace(
        access_token=token,
        refresh_token="refresh-1",
        user=SimpleNamespace(id=user_id, email=email),
    )


class FakeAdmin:
    def __init__(self, error=None):
        self.error = error
        self.signed_out = []

    def sign_out(self, jwt):
        if self.error:
            raise self.error
        self.signed_out.append(jwt)


class FakeGoTrue:
    """Stands in for `client.auth`."""

    def __init__(self, session=None, user=None, error=None):
        self.session = session
        self.user = user
        self.error = error
        self.admin = FakeAdmin(error)
        self.credentials = []
        self.listeners = []

    def _respond(self, credentials):
        self.credentials.append(credentials)
        if self.error:
            raise self.error
        return SimpleNamespace(session=self.session, user=self.user)

    def sign_in_with_password(self, credentials):
        return self._respond(credentials)

    def sign_up(self, credentials):
        return self._respond(credentials)

    def sign_in_with_oauth(self, credentials):
        self.credentials.append(credentials)
        if self.error:
            raise self.error
        return SimpleNamespace(provider=credentials["provider"], url="https://auth.example.com/authorize")

    def get_user(self, jwt=None):
        if self.error:
            raise self.error
        return SimpleNamespace(user=self.user) if self.user else None

    def get_session(self):
        return self.session

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return SimpleNamespace(unsubscribe=lambda: self.listeners.remove(callback))


def auth_for(**kwargs):
    gotrue = FakeGoTrue(**kwargs)
    return gotrue, SupabaseAuth(SimpleNamespace(auth=gotrue))


@pytest.mark.asyncio
async def test_sign_in_maps_session():
    gotrue, auth = auth_for(session=make_session())

    session = await auth.sign_in_with_password("ana@example.com", "secret123")

    assert session.access_token == "tok-1"
    assert session.refresh_token == "refresh-1"
    assert session.user.id == "u1"
    assert session.user.email == "ana@example.com"
    assert gotrue.credentials == [{"email": "ana@example.com", "password": "secret123"}]


@pytest.mark.asyncio
async def test_sign_in_without_session_is_rejected():
    _, auth = auth_for(session=None)

    with pytest.raises(AuthenticationError, match="You must sign in to continue."):
        await auth.sign_in_with_password("ana@example.com", "secret123")


@pytest.mark.asyncio
async def test_sign_in_error_keeps_backend_message():
    _, auth = auth_for(error=FakeAuthApiError("Invalid login credentials"))

    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        await auth.sign_in_with_password("ana@example.com", "wrong")


@pytest.mark.asyncio
async def test_sign_up_pending_confirmation_has_no_session():
    _, auth = auth_for(session=None)

    assert await auth.sign_up("new@example.com", "secret123") is None


@pytest.mark.asyncio
async def test_sign_up_error():
    _, auth = auth_for(error=FakeAuthApiError("User already registered"))

    with pytest.raises(AuthenticationError, match="User already registered"):
        await auth.sign_up("ana@example.com", "secret123")


@pytest.mark.asyncio
async def test_oauth_passes_redirect():
    gotrue, auth = auth_for()

    url = await auth.sign_in_with_oauth("google", redirect_to="http://localhost:3000")

    assert url == "https://auth.example.com/authorize"
    assert gotrue.credentials == [
        {"provider": "google", "options": {"redirect_to": "http://localhost:3000"}}
    ]


@pytest.mark.asyncio
async def test_oauth_without_redirect():
    gotrue, auth = auth_for()

    await auth.sign_in_with_oauth("github")

    assert gotrue.credentials == [{"provider": "github"}]


@pytest.mark.asyncio
async def test_sign_out_revokes_token():
    gotrue, auth = auth_for()

    await auth.sign_out("tok-1")

    assert gotrue.admin.signed_out == ["tok-1"]


@pytest.mark.asyncio
async def test_sign_out_error():
    _, auth = auth_for(error=FakeAuthApiError("Session not found"))

    with pytest.raises(AuthenticationError, match="Session not found"):
        await auth.sign_out("tok-1")


@pytest.mark.asyncio
async def test_get_user():
    _, auth = auth_for(user=SimpleNamespace(id="u1", email="ana@example.com"))

    user = await auth.get_user("tok-1")

    assert (user.id, user.email) == ("u1", "ana@example.com")


@pytest.mark.asyncio
async def test_get_user_with_invalid_token():
    _, auth = auth_for(error=FakeAuthApiError("invalid JWT"))

    with pytest.raises(AuthenticationError, match="You must sign in to continue."):
        await auth.get_user("nope")


@pytest.mark.asyncio
async def test_get_user_without_user():
    _, auth = auth_for(user=None)

    with pytest.raises(AuthenticationError):
        await auth.get_user("tok-1")


@pytest.mark.asyncio
async def test_get_session():
    _, auth = auth_for(session=make_session(token="tok-9"))

    session = await auth.get_session()

    assert session.access_token == "tok-9"


@pytest.mark.asyncio
async def test_get_session_when_signed_out():
    _, auth = auth_for(session=None)

    assert await auth.get_session() is None


def test_auth_state_change_subscription():
    gotrue, auth = auth_for()
    events = []

    subscription = auth.on_auth_state_change(lambda event, session: events.append((event, session)))
    gotrue.listeners[0]("SIGNED_IN", make_session())
    subscription.unsubscribe()

    assert events[0][0] == "SIGNED_IN"
    assert events[0][1].user.id == "u1"
    assert gotrue.listeners == []
