"""
Abstract base class for database adapters.
All database implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional


class DatabaseInterface(ABC):
    """
    Abstract interface for the documents and profiles tables.
    Rows are plain dicts with the snake_case column names.
    """

    # Document operations
    @abstractmethod
    async def insert_document(self, row: Dict) -> Dict:
        """Insert a documents row and return it with `id` and `created_at`."""
        pass

    @abstractmethod
    async def get_document(self, doc_id: str) -> Optional[Dict]:
        """Get a document by ID."""
        pass

    @abstractmethod
    async def list_documents_by_owner(self, user_id: str) -> List[Dict]:
        """Documents owned by a user, newest first."""
        pass

    @abstractmethod
    async def count_documents_created_between(self, user_id: str, start: datetime, end: datetime) -> int:
        """Count a user's documents with start <= created_at < end."""
        pass

    @abstractmethod
    async def search_documents(self, keywords: List[str]) -> List[Dict]:
        """Full-text OR search across all documents for any of the keywords."""
        pass

    @abstractmethod
    async def list_documents_by_category(self, category: str) -> List[Dict]:
        """Documents with exactly this category, newest first."""
        pass

    @abstractmethod
    async def list_categories(self) -> List[str]:
        """Category column of every document (may contain duplicates)."""
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Cheapest round trip to the documents table; raises when unreachable."""
        pass

    # Profile operations
    @abstractmethod
    async def get_profiles_by_ids(self, user_ids: List[str]) -> List[Dict]:
        """Profiles (`id`, `email`) whose id is in user_ids."""
        pass

    @abstractmethod
    async def find_profile_by_email(self, email: str) -> Optional[Dict]:
        """Profile whose email matches exactly, ignoring case."""
        pass

    @abstractmethod
    async def initialize(self):
        """Initialize database (verify connectivity, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Close database connection."""
        pass
