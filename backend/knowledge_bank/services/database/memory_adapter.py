"""
In-memory adapter implementing DatabaseInterface.
Perfect for demos and testing - stores all data in memory using Python dicts/lists.
Data is lost on restart.
"""
import copy
import re
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .base import DatabaseInterface

_TOKEN = re.compile(r"\w+", re.UNICODE)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


class MemoryAdapter(DatabaseInterface):
    """
    In-memory database adapter.

    Full-text search is approximated by matching each keyword (or phrase)
    against the words of title, summary, category and keywords.
    """

    def __init__(self):
        self._documents: List[Dict] = []
        self._profiles: Dict[str, Dict] = {}

    async def initialize(self):
        """Clear any existing data (useful for testing)."""
        self._documents.clear()
        self._profiles.clear()

    async def close(self):
        pass

    def _newest_first(self, rows: List[Dict]) -> List[Dict]:
        # Stable sort keeps later inserts first for equal timestamps
        ordered = sorted(
            reversed(rows),
            key=lambda row: _parse_timestamp(row["created_at"]),
            reverse=True,
        )
        return [copy.deepcopy(row) for row in ordered]

    # Document operations
    async def insert_document(self, row: Dict) -> Dict:
        stored = copy.deepcopy(row)
        stored["id"] = stored.get("id") or str(uuid.uuid4())
        stored.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self._documents.append(stored)
        return copy.deepcopy(stored)

    async def get_document(self, doc_id: str) -> Optional[Dict]:
        for row in self._documents:
            if row["id"] == doc_id:
                return copy.deepcopy(row)
        return None

    async def list_documents_by_owner(self, user_id: str) -> List[Dict]:
        return self._newest_first([r for r in self._documents if r.get("user_id") == user_id])

    async def count_documents_created_between(self, user_id: str, start: datetime, end: datetime) -> int:
        return sum(
            1 for row in self._documents
            if row.get("user_id") == user_id
            and start <= _parse_timestamp(row["created_at"]) < end
        )

    async def search_documents(self, keywords: List[str]) -> List[Dict]:
        phrases = [k.lower().split() for k in keywords if k and k.strip()]
        results = []
        for row in self._documents:
            text = " ".join([
                row.get("title") or "",
                row.get("summary") or "",
                row.get("category") or "",
                " ".join(row.get("keywords") or []),
            ]).lower()
            tokens = " ".join(_TOKEN.findall(text))
            padded = f" {tokens} "
            if any(f" {' '.join(words)} " in padded for words in phrases):
                results.append(copy.deepcopy(row))
        return results

    async def list_documents_by_category(self, category: str) -> List[Dict]:
        return self._newest_first([r for r in self._documents if r.get("category") == category])

    async def list_categories(self) -> List[str]:
        return [row.get("category") for row in self._documents]

    async def ping(self) -> None:
        pass

    # Profile operations
    async def upsert_profile(self, user_id: str, email: str) -> Dict:
        """Create or replace a profile (a database trigger does this in Supabase)."""
        self._profiles[user_id] = {"id": user_id, "email": email}
        return dict(self._profiles[user_id])

    async def get_profiles_by_ids(self, user_ids: List[str]) -> List[Dict]:
        return [dict(self._profiles[uid]) for uid in user_ids if uid in self._profiles]

    async def find_profile_by_email(self, email: str) -> Optional[Dict]:
        email = email.lower()
        for profile in self._profiles.values():
            if (profile.get("email") or "").lower() == email:
                return dict(profile)
        return None
