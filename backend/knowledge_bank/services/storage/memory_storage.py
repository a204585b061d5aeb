"""
In-memory storage adapter implementing FileStorageInterface.
Perfect for demos and testing - objects are lost on restart.
"""
from typing import Dict, Optional, Tuple

from .base import FileStorageInterface


class MemoryFileStorage(FileStorageInterface):
    """Keeps uploaded objects in a dict keyed by storage path."""

    def __init__(self, base_url: str = "memory://storage", bucket_name: str = "documentos"):
        self.base_url = base_url.rstrip("/")
        self.bucket_name = bucket_name
        self._objects: Dict[str, Tuple[bytes, str]] = {}

    async def initialize(self):
        self._objects.clear()

    async def close(self):
        pass

    async def upload(self, file_path: str, content: bytes, content_type: str) -> str:
        if file_path in self._objects:
            raise ValueError(f"Object already exists: {file_path}")
        self._objects[file_path] = (bytes(content), content_type)
        return await self.get_public_url(file_path)

    async def get_public_url(self, file_path: str) -> str:
        return f"{self.base_url}/{self.bucket_name}/{file_path}"

    def get_object(self, file_path: str) -> Optional[Tuple[bytes, str]]:
        """Stored bytes and content type, or None."""
        return self._objects.get(file_path)

    @property
    def paths(self):
        return list(self._objects)
