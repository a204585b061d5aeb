"""
Supabase (PostgREST) adapter implementing DatabaseInterface.
All queries run through the synchronous client in the default executor.
"""
import asyncio
from datetime import datetime
from typing import Callable, Dict, List, Optional, TypeVar

from postgrest.exceptions import APIError
from supabase import Client

from ...core import config
from ...core.logging_config import get_logger
from ...utils.keywords import build_websearch_query
from .base import DatabaseInterface

logger = get_logger(__name__)

T = TypeVar("T")

# Postgres invalid_text_representation, e.g. a malformed uuid
INVALID_TEXT_REPRESENTATION = "22P02"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so ilike performs an exact, case-insensitive match.

    PostgREST reads `*` as `%` in like patterns, so it is escaped too.
    """
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
        .replace("*", "\\*")
    )


class SupabaseAdapter(DatabaseInterface):
    """
    Database adapter for the Supabase Postgres tables:
    - documents: title, summary, keywords, relevance_score, category,
      file_url, user_id, file_name, id, created_at, fts (tsvector)
    - profiles: id, email
    """

    def __init__(
        self,
        supabase: Client,
        documents_table: str = config.DOCUMENTS_TABLE,
        profiles_table: str = config.PROFILES_TABLE,
        fts_column: str = config.FTS_COLUMN,
        fts_config: str = config.FTS_CONFIG,
    ):
        self.supabase = supabase
        self.documents_table = documents_table
        self.profiles_table = profiles_table
        self.fts_column = fts_column
        self.fts_config = fts_config

    async def _run(self, query: Callable[[], T]) -> T:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, query)

    def _documents(self):
        return self.supabase.table(self.documents_table)

    def _profiles(self):
        return self.supabase.table(self.profiles_table)

    async def initialize(self):
        """Verify the documents table is reachable."""
        try:
            await self.ping()
        except Exception as e:
            logger.warning(f"Could not reach '{self.documents_table}' table: {e}")

    async def close(self):
        pass

    # Document operations
    async def insert_document(self, row: Dict) -> Dict:
        response = await self._run(lambda: self._documents().insert(row).execute())
        if not response.data:
            raise ValueError("Insert returned no row")
        return response.data[0]

    async def get_document(self, doc_id: str) -> Optional[Dict]:
        try:
            response = await self._run(
                lambda: self._documents().select("*").eq("id", doc_id).limit(1).execute()
            )
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                logger.debug(f"Malformed document id {doc_id!r}: {e.message}")
                return None
            raise
        return response.data[0] if response.data else None

    async def list_documents_by_owner(self, user_id: str) -> List[Dict]:
        response = await self._run(
            lambda: self._documents()
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    async def count_documents_created_between(self, user_id: str, start: datetime, end: datetime) -> int:
        response = await self._run(
            lambda: self._documents()
            .select("*", count="exact", head=True)
            .eq("user_id", user_id)
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .execute()
        )
        return response.count or 0

    async def search_documents(self, keywords: List[str]) -> List[Dict]:
        query = build_websearch_query(keywords)
        if not query:
            return []
        logger.debug(f"Full-text search ({self.fts_config}): {query}")
        response = await self._run(
            lambda: self._documents()
            .select("*")
            .text_search(
                self.fts_column,
                query,
                options={"type": "websearch", "config": self.fts_config},
            )
            .execute()
        )
        return response.data or []

    async def list_documents_by_category(self, category: str) -> List[Dict]:
        response = await self._run(
            lambda: self._documents()
            .select("*")
            .eq("category", category)
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    async def list_categories(self) -> List[str]:
        response = await self._run(lambda: self._documents().select("category").execute())
        return [row.get("category") for row in response.data or []]

    async def ping(self) -> None:
        await self._run(lambda: self._documents().select("id").limit(1).execute())

    # Profile operations
    async def get_profiles_by_ids(self, user_ids: List[str]) -> List[Dict]:
        if not user_ids:
            return []
        response = await self._run(
            lambda: self._profiles().select("id, email").in_("id", user_ids).execute()
        )
        return response.data or []

    async def find_profile_by_email(self, email: str) -> Optional[Dict]:
        response = await self._run(
            lambda: self._profiles()
            .select("id, email")
            .ilike("email", _escape_like(email))
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None
