"""
Auth Router - Email/password and OAuth sign-in.

Example Usage:
    POST /auth/sign-in {"email": "...", "password": "..."}
    POST /auth/sign-up {"email": "...", "password": "..."}
    POST /auth/sign-out (Bearer token)
    GET /auth/oauth/google
    GET /auth/session (Bearer token)
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..api.dto import CredentialsDTO, OAuthDTO, SignUpResponseDTO, SessionDTO, UserDTO
from ..api.mappers import SessionMapper
from ..core.config import OAUTH_REDIRECT_URL
from ..core.logging_config import get_logger
from ..domain.entities import UserIdentity
from .dependencies import get_access_token, get_auth_service, get_current_user

logger = get_logger(__name__)

router = APIRouter()


@router.post("/auth/sign-in", response_model=SessionDTO)
async def sign_in(credentials: CredentialsDTO, auth=Depends(get_auth_service)):
    """Sign in with email and password. 401 with the backend message on failure."""
    session = await auth.sign_in_with_password(credentials.email.strip(), credentials.password)
    logger.info(f"User {session.user.id} signed in")
    return SessionMapper.to_dto(session)


@router.post("/auth/sign-up", response_model=SignUpResponseDTO)
async def sign_up(credentials: CredentialsDTO, auth=Depends(get_auth_service)):
    """
    Register a new account.

    When the backend requires email confirmation no session is returned
    and `confirmation_required` is true.
    """
    session = await auth.sign_up(credentials.email.strip(), credentials.password)
    return SignUpResponseDTO(
        session=SessionMapper.to_dto(session),
        confirmation_required=session is None,
    )


@router.post("/auth/sign-out")
async def sign_out(access_token: str = Depends(get_access_token), auth=Depends(get_auth_service)):
    await auth.sign_out(access_token)
    return {"signed_out": True}


@router.get("/auth/oauth/{provider}", response_model=OAuthDTO)
async def oauth_url(
    provider: str,
    redirect_to: Optional[str] = Query(None, description="Where the provider sends the user back"),
    auth=Depends(get_auth_service),
):
    """Authorization URL that starts the provider's OAuth flow."""
    url = await auth.sign_in_with_oauth(provider, redirect_to or OAUTH_REDIRECT_URL)
    return OAuthDTO(provider=provider, url=url)


@router.get("/auth/session", response_model=UserDTO)
async def current_session(user: UserIdentity = Depends(get_current_user)):
    """User owning the bearer token."""
    return UserDTO(id=user.id, email=user.email)
