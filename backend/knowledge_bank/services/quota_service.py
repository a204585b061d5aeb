"""
Quota Service - Daily per-user upload limit.

The count is recomputed from the documents table for the current local
calendar day. It is checked before a submission starts; nothing enforces
it on the database side.
"""
from datetime import datetime, time, timedelta
from typing import Optional, Tuple

from ..core.config import UPLOAD_LIMIT_PER_DAY
from ..core.logging_config import get_logger
from ..domain.entities import QuotaStatus

logger = get_logger(__name__)


def local_day_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Aware [local midnight today, local midnight tomorrow) bounds."""
    now = (now or datetime.now()).astimezone()
    start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    return start, start + timedelta(days=1)


class QuotaService:
    """Counts today's uploads of a user against the daily limit."""

    def __init__(self, db_service, limit: int = UPLOAD_LIMIT_PER_DAY):
        self.db_service = db_service
        self.limit = limit

    async def uploads_today(self, user_id: str, now: Optional[datetime] = None) -> int:
        """
        Number of documents the user created today.

        A failed count is logged and treated as zero uploads.
        """
        start, end = local_day_bounds(now)
        try:
            return await self.db_service.count_documents_created_between(user_id, start, end)
        except Exception as e:
            logger.error(f"Error fetching today's upload count for {user_id}: {e}")
            return 0

    async def get_status(self, user_id: str, now: Optional[datetime] = None) -> QuotaStatus:
        count = await self.uploads_today(user_id, now)
        return QuotaStatus(count=count, limit=self.limit)
