"""
API Gateway Module

This module provides a centralized gateway layer for the API that handles:
- Request routing and versioning
- Middleware management
- Error handling and rate limiting

The gateway acts as the single entry point for all API requests.
"""
from .gateway import APIGateway
from .rate_limit import limiter
from .versioning import APIVersion, VersionRouter

__all__ = ["APIGateway", "APIVersion", "VersionRouter", "limiter"]
