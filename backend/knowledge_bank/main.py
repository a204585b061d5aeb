from contextlib import asynccontextmanager

from .core import config
from .core.config import validate_config
from .core.logging_config import get_logger, setup_logging
from .gateway import APIGateway, APIVersion
from .routers import auth, documents, explore, uploads
from .routers.dependencies import initialize_services, shutdown_services

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app):
    """Initialize adapters and services on startup, release them on shutdown."""
    logger.info("=" * 60)
    logger.info("Starting Knowledge Bank Backend...")
    logger.info("=" * 60)

    validate_config()

    logger.info("API Gateway Configuration:")
    logger.info(f"  → API Title: {app.title}")
    logger.info(f"  → API Version: {app.version}")
    logger.info(f"  → Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")
    logger.info(f"  → Environment: {config.ENVIRONMENT}")

    logger.info("Rate Limiting:")
    logger.info(f"  → Enabled: {config.RATE_LIMIT_ENABLED}")
    if config.RATE_LIMIT_ENABLED:
        logger.info(f"  → Limit: {config.RATE_LIMIT_PER_MINUTE} requests/minute on upload and search")

    logger.info("CORS Configuration:")
    logger.info(f"  → Allowed Origins: {', '.join(config.CORS_ORIGINS)}")

    logger.info("Submission Limits:")
    logger.info(f"  → Uploads per day: {config.UPLOAD_LIMIT_PER_DAY}")
    logger.info(f"  → Max file size: {config.MAX_FILE_SIZE_MB} MB")

    logger.info("External Service Integrations:")
    logger.info(f"  → Database Backend: {config.DATABASE_TYPE.upper()}")
    logger.info(f"  → Storage Backend: {config.STORAGE_TYPE.upper()} (bucket: {config.SUPABASE_STORAGE_BUCKET})")
    logger.info(f"  → Auth Backend: {config.AUTH_TYPE.upper()}")
    logger.info(f"  → AI Provider: {config.AI_PROVIDER}")

    await initialize_services()

    logger.info("=" * 60)
    logger.info("✅ Knowledge Bank Backend initialized successfully")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down Knowledge Bank Backend...")
    await shutdown_services()
    logger.info("Knowledge Bank Backend shutdown complete")


# Initialize API Gateway
gateway = APIGateway(
    title="Knowledge Bank API",
    description="Upload files, index them with AI and search everyone's knowledge bank",
    version="1.0.0",
    lifespan=lifespan
)

# Setup middleware (CORS, logging, request IDs, error handling)
gateway.setup_middleware()

# Register routers with API versioning
gateway.register_router(uploads.router, prefix="/api", tags=["Uploads"], version=APIVersion.V1)
gateway.register_router(documents.router, prefix="/api", tags=["Documents"], version=APIVersion.V1)
gateway.register_router(explore.router, prefix="/api", tags=["Explore"], version=APIVersion.V1)
gateway.register_router(auth.router, prefix="/api", tags=["Auth"], version=APIVersion.V1)

# Also register without version prefix for backward compatibility
gateway.register_router(uploads.router, tags=["Uploads"])
gateway.register_router(documents.router, tags=["Documents"])
gateway.register_router(explore.router, tags=["Explore"])
gateway.register_router(auth.router, tags=["Auth"])

gateway.register_health_endpoints()

app = gateway.get_app()
