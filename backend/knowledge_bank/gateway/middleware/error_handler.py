"""
Error Handling Middleware

Last line of defense for exceptions no exception handler converted.
"""
import traceback

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ...api.exceptions import KnowledgeBankError, handle_business_exception
from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Converts uncaught exceptions to standardized JSON error responses:
    - Business exceptions → their mapped HTTP status code
    - Unexpected exceptions → 500 (details only outside production)
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except KnowledgeBankError as e:
            http_exception = handle_business_exception(e)
            logger.warning(
                f"Business exception for {request.method} {request.url.path}: {http_exception.detail}"
            )
            return JSONResponse(
                status_code=http_exception.status_code,
                content={
                    "error": http_exception.detail,
                    "status_code": http_exception.status_code,
                    "path": request.url.path,
                    "request_id": getattr(request.state, "request_id", None)
                }
            )

        except Exception as e:
            is_development = ENVIRONMENT != "production"

            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)

            content = {
                "error": str(e) if is_development else "Internal server error",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "path": request.url.path,
                "request_id": getattr(request.state, "request_id", None)
            }
            if is_development:
                content["traceback"] = traceback.format_exc()

            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)
