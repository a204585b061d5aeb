"""
File storage adapters for plug-and-play object storage.
"""
from .base import FileStorageInterface
from .factory import FileStorageFactory
from .memory_storage import MemoryFileStorage

__all__ = ["FileStorageInterface", "FileStorageFactory", "MemoryFileStorage"]
