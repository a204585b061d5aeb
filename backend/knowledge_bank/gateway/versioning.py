"""
API Versioning Module

URL-based versioning (e.g., /api/v1/documents/mine). Every versioned router
is also served without the prefix.
"""
from enum import Enum
from typing import Dict, List, Optional

from fastapi import APIRouter

from ..core.logging_config import get_logger

logger = get_logger(__name__)


class APIVersion(str, Enum):
    """Supported API versions."""
    V1 = "v1"

    @classmethod
    def default(cls) -> "APIVersion":
        """Get the default API version."""
        return cls.V1


class VersionRouter:
    """
    Keeps track of the routers registered per API version.

    Usage:
        version_router = VersionRouter()
        version_router.register(APIVersion.V1, documents_router)
    """

    def __init__(self):
        self._routers: Dict[APIVersion, List[APIRouter]] = {}

    def register(self, version: APIVersion, router: APIRouter, prefix: str = ""):
        self._routers.setdefault(version, []).append(router)
        logger.debug(f"Registered router for API version {version.value} with prefix '{prefix}'")

    def get_routers(self, version: Optional[APIVersion] = None) -> List[APIRouter]:
        return list(self._routers.get(version or APIVersion.default(), []))

    def get_all_versions(self) -> List[APIVersion]:
        """Get all registered API versions."""
        return list(self._routers.keys())
