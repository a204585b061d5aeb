"""
Database adapters for the documents and profiles tables.
"""
from .base import DatabaseInterface
from .factory import DatabaseFactory
from .memory_adapter import MemoryAdapter

__all__ = ["DatabaseInterface", "DatabaseFactory", "MemoryAdapter"]
