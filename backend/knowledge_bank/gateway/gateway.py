"""
API Gateway

Main gateway class that orchestrates routing, middleware, and API versioning.
Acts as the single entry point for all API requests.
"""
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from ..api.exceptions import KnowledgeBankError, handle_business_exception
from ..core.config import CORS_ORIGINS, ENVIRONMENT
from ..core.logging_config import get_logger
from .middleware import ErrorHandlingMiddleware, RequestIDMiddleware, RequestLoggingMiddleware
from .rate_limit import limiter
from .versioning import APIVersion, VersionRouter

logger = get_logger(__name__)


def error_response(request: Request, status_code: int, message, **extra) -> JSONResponse:
    """Standard error body shared by the exception handlers and the middleware."""
    content = {
        "error": message,
        "status_code": status_code,
        "path": request.url.path,
        "request_id": getattr(request.state, "request_id", None),
    }
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def business_exception_handler(request: Request, exc: KnowledgeBankError) -> JSONResponse:
    http_exception = handle_business_exception(exc)
    logger.warning(
        f"Business exception for {request.method} {request.url.path}: "
        f"{type(exc).__name__} - {http_exception.detail}"
    )
    return error_response(request, http_exception.status_code, http_exception.detail)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.debug(f"HTTP exception for {request.method} {request.url.path}: {exc.status_code} - {exc.detail}")
    response = error_response(request, exc.status_code, exc.detail)
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Validation error for {request.method} {request.url.path}: {exc.errors()}")
    return error_response(request, 422, "Validation Error", detail=jsonable_encoder(exc.errors()))


class APIGateway:
    """
    API Gateway that manages routing, middleware, and API versioning.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Register exception handlers for business exceptions
    - Register routes and routers
    - Provide health check endpoints
    """

    def __init__(
        self,
        title: str = "Knowledge Bank API",
        description: str = "AI-indexed document knowledge bank",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None,
        lifespan=None
    ):
        """
        Initialize API Gateway.

        Args:
            title: API title
            description: API description
            version: API version
            enable_docs: Enable API docs (auto-detected from ENVIRONMENT if None)
            lifespan: Application lifespan context manager
        """
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else ENVIRONMENT != "production"

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None,
            lifespan=lifespan
        )

        self.version_router = VersionRouter()

        self.limiter = limiter
        self.app.state.limiter = self.limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

        self.app.add_exception_handler(KnowledgeBankError, business_exception_handler)
        self.app.add_exception_handler(StarletteHTTPException, http_exception_handler)
        self.app.add_exception_handler(RequestValidationError, validation_exception_handler)

        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware."""
        logger.info("Setting up middleware...")

        # Error handling (innermost, catches everything the handlers don't)
        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        self.app.add_middleware(
            RequestLoggingMiddleware,
            skip_paths=["/health", "/ready", "/docs", "/redoc", "/openapi.json"]
        )
        logger.debug("  → Request logging middleware added")

        # Request ID wraps logging so every log line can carry it
        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("✅ All middleware configured")

    def register_router(
        self,
        router: APIRouter,
        prefix: str = "",
        tags: Optional[List[str]] = None,
        version: Optional[APIVersion] = None
    ):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router (e.g., "/api")
            tags: OpenAPI tags for documentation
            version: API version (if None, registered without a version segment)
        """
        if version:
            full_prefix = f"{prefix}/{version.value}"
            self.app.include_router(router, prefix=full_prefix, tags=tags or [])
            self.version_router.register(version, router, prefix=full_prefix)
            logger.info(f"Registered router with version {version.value} at prefix '{full_prefix}'")
        else:
            self.app.include_router(router, prefix=prefix, tags=tags or [])
            logger.info(f"Registered router at prefix '{prefix}'")

    def register_health_endpoints(self):
        """Register health check endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy",
                "api_versions": [v.value for v in self.version_router.get_all_versions()]
            }

        @self.app.get("/health")
        async def health_check(response: Response):
            """
            Liveness probe.

            Returns 200 when the adapters and services are initialized, 503 otherwise.
            """
            from ..routers import dependencies

            if dependencies.db_service is None:
                logger.warning("Health check failed: Database not initialized")
                response.status_code = 503
                return {"status": "unhealthy", "reason": "Database not initialized"}

            if dependencies.submission_service is None or dependencies.search_service is None:
                logger.warning("Health check failed: Services not initialized")
                response.status_code = 503
                return {"status": "unhealthy", "reason": "Services not initialized"}

            return {
                "status": "healthy",
                "database": "connected",
                "services": "initialized"
            }

        @self.app.get("/ready")
        async def readiness_check(response: Response):
            """
            Readiness probe.

            Runs a cheap query to verify the database can serve traffic.
            """
            from ..routers import dependencies

            if dependencies.db_service is None:
                logger.warning("Readiness check failed: Database not initialized")
                response.status_code = 503
                return {"ready": False, "reason": "Database not initialized"}

            try:
                await dependencies.db_service.ping()
            except Exception as e:
                logger.error(f"Readiness check failed: {e}", exc_info=True)
                response.status_code = 503
                return {"ready": False, "reason": str(e)}

            return {"ready": True}

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app
