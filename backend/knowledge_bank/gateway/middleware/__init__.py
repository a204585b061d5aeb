"""
Gateway Middleware Module

Custom middleware for request tracing, logging, and error handling.
"""
from .error_handler import ErrorHandlingMiddleware
from .request_id import RequestIDMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware"
]
