from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select, text

from app.db.models import GeneratedContent, UsageRecord
from services import content_store
from services.content_store import (
    ContentDraft,
    ContentNotFoundError,
    ContentStoreService,
    month_key,
)

DRAFT = ContentDraft(
    content_type="whatsapp_message",
    product_service="Holi Colours",
    tone="friendly",
    language="Marathi",
    generated_text="होळीच्या शुभेच्छा!",
    key_message="Organic colours",
    festival_context="Holi",
)


class TickingClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return TickingClock(datetime(2026, 3, 14, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(session, clock):
    return ContentStoreService(session, clock=clock)


@pytest.mark.asyncio
async def test_create_persists_all_fields(store):
    record = await store.create("user-1", DRAFT)

    listed = await store.list_content("user-1")
    assert [item.id for item in listed] == [record.id]
    saved = listed[0]
    assert saved.product_service == DRAFT.product_service
    assert saved.content_type == DRAFT.content_type
    assert saved.language == DRAFT.language
    assert saved.tone == DRAFT.tone
    assert saved.generated_text == DRAFT.generated_text
    assert saved.key_message == DRAFT.key_message
    assert saved.target_audience is None
    assert saved.festival_context == DRAFT.festival_context
    assert saved.is_favorite is False
    assert saved.created_at is not None


@pytest.mark.asyncio
async def test_saves_in_same_month_share_one_usage_record(store, session):
    await store.create("user-1", DRAFT)
    await store.create("user-1", DRAFT)
    await store.create("user-1", DRAFT)

    rows = (await session.execute(select(UsageRecord))).scalars().all()
    assert len(rows) == 1
    assert rows[0].month_year == "2026-03"
    assert rows[0].generation_count == 3
    assert rows[0].subscription_tier == "free"


@pytest.mark.asyncio
async def test_usage_is_per_user_and_per_month(session, clock):
    store = ContentStoreService(session, clock=clock)
    await store.create("user-1", DRAFT)
    await store.create("user-2", DRAFT)
    clock.now = datetime(2026, 4, 1, tzinfo=timezone.utc)
    await store.create("user-1", DRAFT)

    count = await session.scalar(select(func.count()).select_from(UsageRecord))
    assert count == 3
    march = await store.get_usage("user-1", "2026-03")
    april = await store.get_usage("user-1", "2026-04")
    assert march.generation_count == 1
    assert april.generation_count == 1


@pytest.mark.asyncio
async def test_usage_upsert_keeps_existing_tier(store, session):
    await store.create("user-1", DRAFT)
    usage = await store.get_usage("user-1")
    usage.subscription_tier = "premium"
    await session.commit()

    await store.create("user-1", DRAFT)

    await session.refresh(usage)
    assert usage.subscription_tier == "premium"
    assert usage.generation_count == 2


@pytest.mark.asyncio
async def test_content_is_kept_when_usage_write_is_unavailable(store, session, monkeypatch):
    monkeypatch.setattr(content_store, "_UPSERT_INSERTS", {})

    record = await store.create("user-1", DRAFT)

    assert (await store.get("user-1", record.id)).id == record.id
    assert await store.get_usage("user-1") is None


@pytest.mark.asyncio
async def test_list_orders_newest_first_and_filters(store):
    first = await store.create("user-1", DRAFT)
    second = await store.create(
        "user-1",
        ContentDraft(
            content_type="email_campaign",
            product_service="Eid Hampers",
            tone="warm",
            language="Bengali",
            generated_text="ঈদ মোবারক!",
        ),
    )
    third = await store.create("user-1", DRAFT)
    await store.set_favorite("user-1", first.id, True)

    assert [item.id for item in await store.list_content("user-1")] == [
        third.id,
        second.id,
        first.id,
    ]
    assert [item.id for item in await store.list_content("user-1", limit=2)] == [
        third.id,
        second.id,
    ]
    assert [item.id for item in await store.list_content("user-1", language="Bengali")] == [
        second.id
    ]
    assert [
        item.id for item in await store.list_content("user-1", content_type="whatsapp_message")
    ] == [third.id, first.id]
    assert [item.id for item in await store.list_content("user-1", favorites_only=True)] == [
        first.id
    ]


@pytest.mark.asyncio
async def test_records_are_scoped_to_owner(store):
    record = await store.create("user-1", DRAFT)

    assert await store.list_content("user-2") == []
    with pytest.raises(ContentNotFoundError):
        await store.get("user-2", record.id)
    with pytest.raises(ContentNotFoundError):
        await store.set_favorite("user-2", record.id, True)
    with pytest.raises(ContentNotFoundError):
        await store.delete("user-2", record.id)


@pytest.mark.asyncio
async def test_toggling_favorite_twice_restores_original(store):
    record = await store.create("user-1", DRAFT)
    original = record.is_favorite

    await store.set_favorite("user-1", record.id, not original)
    toggled = await store.get("user-1", record.id)
    await store.set_favorite("user-1", record.id, not toggled.is_favorite)

    assert (await store.get("user-1", record.id)).is_favorite == original


@pytest.mark.asyncio
async def test_delete_is_permanent(store, session):
    record = await store.create("user-1", DRAFT)

    await store.delete("user-1", record.id)

    assert await store.list_content("user-1") == []
    remaining = await session.scalar(
        select(func.count()).select_from(GeneratedContent).where(GeneratedContent.id == record.id)
    )
    assert remaining == 0
    with pytest.raises(ContentNotFoundError):
        await store.delete("user-1", record.id)


@pytest.mark.asyncio
async def test_count_content(store):
    first = await store.create("user-1", DRAFT)
    await store.create("user-1", DRAFT)
    await store.set_favorite("user-1", first.id, True)

    counts = await store.count_content("user-1")

    assert counts.total == 2
    assert counts.favorites == 1
    assert (await store.count_content("nobody")).total == 0


def test_month_key_format():
    assert month_key(datetime(2026, 1, 5)) == "2026-01"


@pytest.mark.asyncio
async def test_failed_usage_write_keeps_saved_record_readable(store, engine):
    async with engine.begin() as connection:
        await connection.execute(text("DROP TABLE usage_analytics"))

    record = await store.create("user-1", DRAFT)

    assert record.product_service == DRAFT.product_service
    assert record.generated_text == DRAFT.generated_text
    assert (await store.get("user-1", record.id)).id == record.id
