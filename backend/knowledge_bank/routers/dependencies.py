"""
Shared dependencies for routers.
Provides adapter and service initialization.

Services are created once on startup and shared across all request handlers.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..api.exceptions import AuthenticationError
from ..core import config
from ..core.supabase_client import reset_supabase_client
from ..core.logging_config import get_logger
from ..domain.entities import UserIdentity
from ..services.ai_service import AIService
from ..services.auth import AuthFactory, SessionState
from ..services.database import DatabaseFactory, MemoryAdapter
from ..services.quota_service import QuotaService
from ..services.search_service import SearchService
from ..services.storage import FileStorageFactory
from ..services.submission_service import SubmissionGuard, SubmissionService

logger = get_logger(__name__)

# Global services (initialized on startup)
db_service = None
storage_service = None
auth_service = None
session_state: Optional[SessionState] = None
ai_service: Optional[AIService] = None
quota_service: Optional[QuotaService] = None
submission_service: Optional[SubmissionService] = None
search_service: Optional[SearchService] = None
submission_guard: Optional[SubmissionGuard] = None

bearer_scheme = HTTPBearer(auto_error=False)


async def initialize_adapters():
    """Create the database, storage and auth adapters from configuration."""
    global db_service, storage_service, auth_service

    logger.info(f"Initializing database: {config.DATABASE_TYPE}")
    db_service = await DatabaseFactory.create_and_initialize(config.DATABASE_TYPE)
    logger.info("  ✅ Database initialized")

    logger.info(f"Initializing storage: {config.STORAGE_TYPE}")
    storage_service = await FileStorageFactory.create_and_initialize(config.STORAGE_TYPE)
    logger.info(f"  ✅ Storage initialized (bucket: {config.SUPABASE_STORAGE_BUCKET})")

    logger.info(f"Initializing auth: {config.AUTH_TYPE}")
    profile_hook = db_service.upsert_profile if isinstance(db_service, MemoryAdapter) else None
    auth_service = AuthFactory.create(config.AUTH_TYPE, profile_hook=profile_hook)
    logger.info("  ✅ Auth initialized")


async def initialize_services():
    """
    Initialize all services after the adapters are ready.

    - Session state holder attached to the auth adapter
    - AI service for document analysis and keyword suggestion
    - Quota, submission and search services
    """
    global session_state, ai_service, quota_service, submission_service, search_service, submission_guard

    if db_service is None:
        await initialize_adapters()

    logger.info("Initializing services...")

    session_state = SessionState()
    await session_state.attach(auth_service)
    logger.info("  ✅ Session state attached")

    logger.info(f"  → AI Provider: {config.AI_PROVIDER}")
    ai_service = AIService()

    quota_service = QuotaService(db_service, limit=config.UPLOAD_LIMIT_PER_DAY)
    submission_service = SubmissionService(ai_service, storage_service, db_service, quota_service)
    search_service = SearchService(ai_service, db_service)
    submission_guard = SubmissionGuard()

    logger.info("✅ All services initialized successfully")


async def shutdown_services():
    """Detach the session state and close adapters."""
    global db_service, storage_service, auth_service, session_state
    global ai_service, quota_service, submission_service, search_service, submission_guard

    if session_state is not None:
        session_state.detach()
    if storage_service is not None:
        await storage_service.close()
    if db_service is not None:
        await db_service.close()
    reset_supabase_client()

    db_service = storage_service = auth_service = session_state = None
    ai_service = quota_service = submission_service = search_service = submission_guard = None


def _require(service, name: str):
    if service is None:
        raise RuntimeError(f"{name} not initialized")
    return service


def get_db_service():
    """Get database service (dependency injection)."""
    return _require(db_service, "Database service")


def get_session_state() -> SessionState:
    return _require(session_state, "Session state")


def get_auth_service():
    return _require(auth_service, "Auth service")


def get_quota_service() -> QuotaService:
    return _require(quota_service, "Quota service")


def get_submission_service() -> SubmissionService:
    return _require(submission_service, "Submission service")


def get_submission_guard() -> SubmissionGuard:
    return _require(submission_guard, "Submission guard")


def get_search_service() -> SearchService:
    return _require(search_service, "Search service")


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Bearer token of the request."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return credentials.credentials


async def get_current_user(
    access_token: str = Depends(get_access_token),
    state: SessionState = Depends(get_session_state),
) -> UserIdentity:
    """Authenticated user of the request (401 when missing or invalid)."""
    return await state.resolve_user(access_token)
