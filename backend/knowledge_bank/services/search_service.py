"""
Search Service - Cross-user search for the explore view.

Supports:
- Topic search: AI-suggested keywords merged with the literal query terms,
  run as a full-text OR query
- Author search: exact, case-insensitive email match
- Category search and category listing
"""
from typing import Dict, List

from ..api.exceptions import SearchError
from ..core.config import UNKNOWN_AUTHOR
from ..core.logging_config import get_logger
from ..domain.entities import DocumentData
from ..utils.keywords import literal_terms, merge_keywords
from .ai_service import AIService

logger = get_logger(__name__)


class SearchService:
    """
    Service for document search operations.
    """

    def __init__(self, ai_service: AIService, db_service, unknown_author: str = UNKNOWN_AUTHOR):
        """
        Initialize search service.

        Args:
            ai_service: AIService instance used for keyword suggestion
            db_service: Database service instance
            unknown_author: Label used when a document owner cannot be resolved
        """
        self.ai_service = ai_service
        self.db_service = db_service
        self.unknown_author = unknown_author

    async def topic_keywords(self, topic: str) -> List[str]:
        """
        Keyword set for a topic search.

        Union of the AI-suggested keywords and the literal query terms longer
        than two characters, without duplicates.
        """
        ai_keywords = await self.ai_service.keywords_for_topic(topic)
        return merge_keywords(ai_keywords, literal_terms(topic))

    async def search_by_topic(self, topic: str) -> List[DocumentData]:
        """
        Full-text search for a free-text topic.

        Raises:
            SearchError: If the full-text query fails
        """
        if not topic or not topic.strip():
            return []
        keywords = await self.topic_keywords(topic.strip())
        logger.info(f"Topic search '{topic}' with keywords: {keywords}")
        if not keywords:
            return []

        try:
            rows = await self.db_service.search_documents(keywords)
        except Exception as e:
            logger.error(f"Error searching documents by keywords: {e}", exc_info=True)
            raise SearchError("The keyword search failed.") from e
        return await self.with_author_emails(rows)

    async def search_by_author(self, email: str) -> List[DocumentData]:
        """
        Documents of the author with this email, newest first.

        An unknown email yields an empty list. The supplied email is used as
        the author label.

        Raises:
            SearchError: If the documents query fails
        """
        email = (email or "").strip()
        if not email:
            return []

        try:
            profile = await self.db_service.find_profile_by_email(email)
        except Exception as e:
            logger.error(f"Error looking up author profile {email}: {e}")
            profile = None
        if not profile or not profile.get("id"):
            logger.info(f"No profile for {email}")
            return []

        try:
            rows = await self.db_service.list_documents_by_owner(profile["id"])
        except Exception as e:
            logger.error(f"Error searching documents by author: {e}", exc_info=True)
            raise SearchError("The author search failed.") from e
        return [DocumentData.from_row(row, author_email=email) for row in rows]

    async def search_by_category(self, category: str) -> List[DocumentData]:
        """
        Documents with exactly this category, newest first.

        Raises:
            SearchError: If the query fails
        """
        try:
            rows = await self.db_service.list_documents_by_category(category)
        except Exception as e:
            logger.error(f"Error searching documents by category: {e}", exc_info=True)
            raise SearchError("The category search failed.") from e
        return await self.with_author_emails(rows)

    async def list_categories(self) -> List[str]:
        """Distinct non-empty categories in first-seen order; [] on error."""
        try:
            categories = await self.db_service.list_categories()
        except Exception as e:
            logger.error(f"Error fetching unique categories: {e}")
            return []
        return list(dict.fromkeys(c for c in categories if isinstance(c, str) and c))

    async def with_author_emails(self, rows: List[Dict]) -> List[DocumentData]:
        """
        Attach the owner's email to each row.

        Owners without a profile, rows without an owner and a failed
        profiles lookup all get the unknown-author label.
        """
        if not rows:
            return []

        user_ids = list(dict.fromkeys(row.get("user_id") for row in rows if row.get("user_id")))
        emails: Dict[str, str] = {}
        if user_ids:
            try:
                profiles = await self.db_service.get_profiles_by_ids(user_ids)
                emails = {p["id"]: p.get("email") for p in profiles if p.get("id")}
            except Exception as e:
                logger.error(f"Error fetching profiles for search results: {e}")

        return [
            DocumentData.from_row(row, author_email=emails.get(row.get("user_id")) or self.unknown_author)
            for row in rows
        ]
