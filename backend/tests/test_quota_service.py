from datetime import datetime, timedelta, timezone

import pytest

from knowledge_bank.domain.entities import QuotaStatus
from knowledge_bank.services.database import MemoryAdapter
from knowledge_bank.services.quota_service import QuotaService, local_day_bounds

USER_ID = "user-1"


async def add_upload(db, created_at, user_id=USER_ID):
    await db.insert_document({"user_id": user_id, "title": "t", "created_at": created_at.isoformat()})


def test_local_day_bounds_span_one_local_day():
    now = datetime(2024, 6, 12, 15, 30).astimezone()

    start, end = local_day_bounds(now)

    assert start.tzinfo is not None
    assert (start.hour, start.minute, start.second) == (0, 0, 0)
    assert start.date() == now.date()
    assert start <= now < end
    assert end - start == timedelta(days=1)


@pytest.mark.asyncio
async def test_uploads_today_ignores_other_days_and_users():
    db = MemoryAdapter()
    start, end = local_day_bounds()
    await add_upload(db, start - timedelta(seconds=1))
    await add_upload(db, start)
    await add_upload(db, end - timedelta(seconds=1))
    await add_upload(db, end)
    await add_upload(db, start + timedelta(hours=1), user_id="someone-else")

    assert await QuotaService(db).uploads_today(USER_ID) == 2


@pytest.mark.asyncio
async def test_quota_reached_at_limit():
    db = MemoryAdapter()
    for _ in range(5):
        await add_upload(db, datetime.now(timezone.utc))

    status = await QuotaService(db, limit=5).get_status(USER_ID)

    assert status.count == 5
    assert status.remaining == 0
    assert status.reached


@pytest.mark.asyncio
async def test_count_error_is_treated_as_zero():
    class BrokenAdapter(MemoryAdapter):
        async def count_documents_created_between(self, user_id, start, end):
            raise RuntimeError("timeout")

    status = await QuotaService(BrokenAdapter(), limit=5).get_status(USER_ID)

    assert status.count == 0
    assert not status.reached


def test_remaining_is_never_negative():
    status = QuotaStatus(count=7, limit=5)
    assert status.remaining == 0
    assert status.reached
    assert QuotaStatus(count=2, limit=5).remaining == 3
