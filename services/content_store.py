from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, case, delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import GeneratedContent, UsageRecord, generate_id, utcnow

logger = logging.getLogger(__name__)

DEFAULT_TIER = "free"

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ContentStoreError(RuntimeError):
    """Raised when a content store operation fails at the database layer."""


class ContentNotFoundError(ContentStoreError):
    """Raised when a record does not exist or belongs to another user."""


@dataclass(frozen=True)
class ContentDraft:
    content_type: str
    product_service: str
    tone: str
    language: str
    generated_text: str
    key_message: str | None = None
    target_audience: str | None = None
    festival_context: str | None = None


@dataclass(frozen=True)
class ContentCounts:
    total: int
    favorites: int


def month_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m")


class ContentStoreService:
    """User-scoped CRUD over saved content plus the monthly usage counter."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session = session
        self._clock = clock

    def current_month(self) -> str:
        return month_key(self._clock())

    async def create(self, user_id: str, draft: ContentDraft) -> GeneratedContent:
        record = GeneratedContent(
            user_id=user_id,
            content_type=draft.content_type,
            product_service=draft.product_service,
            key_message=draft.key_message,
            target_audience=draft.target_audience,
            tone=draft.tone,
            language=draft.language,
            generated_text=draft.generated_text,
            festival_context=draft.festival_context,
            is_favorite=False,
            created_at=self._clock(),
        )
        self._session.add(record)
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise ContentStoreError("Failed to save content.") from exc

        logger.info("Saved content %s for user %s", record.id, user_id)

        # Detached so a rollback of the usage write cannot expire the saved row.
        self._session.expunge(record)
        await self.record_usage(user_id)
        return record

    async def record_usage(self, user_id: str) -> bool:
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            logger.warning("Usage upsert not supported for dialect %s", dialect)
            return False

        now = self._clock()
        statement = insert(UsageRecord).values(
            id=generate_id(),
            user_id=user_id,
            month_year=month_key(now),
            generation_count=1,
            subscription_tier=DEFAULT_TIER,
            created_at=now,
            updated_at=now,
        )
        statement = statement.on_conflict_do_update(
            index_elements=[UsageRecord.user_id, UsageRecord.month_year],
            set_={
                "generation_count": UsageRecord.generation_count + 1,
                "updated_at": now,
            },
        )

        try:
            await self._session.execute(statement)
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            logger.exception("Failed to update usage for user %s", user_id)
            return False
        return True

    def _owned(self, user_id: str) -> Select[tuple[GeneratedContent]]:
        return select(GeneratedContent).where(GeneratedContent.user_id == user_id)

    async def list_content(
        self,
        user_id: str,
        limit: int | None = None,
        language: str | None = None,
        content_type: str | None = None,
        favorites_only: bool = False,
    ) -> list[GeneratedContent]:
        statement = self._owned(user_id)
        if language:
            statement = statement.where(GeneratedContent.language == language)
        if content_type:
            statement = statement.where(GeneratedContent.content_type == content_type)
        if favorites_only:
            statement = statement.where(GeneratedContent.is_favorite.is_(True))
        statement = statement.order_by(
            GeneratedContent.created_at.desc(),
            GeneratedContent.id.desc(),
        )
        if limit is not None:
            statement = statement.limit(limit)

        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as exc:
            raise ContentStoreError("Failed to load content.") from exc
        return list(result.scalars().all())

    async def get(self, user_id: str, content_id: str) -> GeneratedContent:
        statement = self._owned(user_id).where(GeneratedContent.id == content_id)
        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as exc:
            raise ContentStoreError("Failed to load content.") from exc

        record = result.scalar_one_or_none()
        if record is None:
            raise ContentNotFoundError(f"Content {content_id} not found.")
        return record

    async def set_favorite(
        self,
        user_id: str,
        content_id: str,
        is_favorite: bool,
    ) -> GeneratedContent:
        record = await self.get(user_id, content_id)
        record.is_favorite = is_favorite
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise ContentStoreError("Failed to update favorite status.") from exc
        return record

    async def delete(self, user_id: str, content_id: str) -> None:
        statement = delete(GeneratedContent).where(
            GeneratedContent.user_id == user_id,
            GeneratedContent.id == content_id,
        )
        try:
            result = await self._session.execute(statement)
            if result.rowcount == 0:
                await self._session.rollback()
                raise ContentNotFoundError(f"Content {content_id} not found.")
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise ContentStoreError("Failed to delete content.") from exc

        logger.info("Deleted content %s for user %s", content_id, user_id)

    async def count_content(self, user_id: str) -> ContentCounts:
        favorite_count = func.sum(case((GeneratedContent.is_favorite.is_(True), 1), else_=0))
        statement = select(func.count(), favorite_count).where(
            GeneratedContent.user_id == user_id
        )
        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as exc:
            raise ContentStoreError("Failed to count content.") from exc
        total, favorites = result.one()
        return ContentCounts(total=total or 0, favorites=favorites or 0)

    async def get_usage(self, user_id: str, month_year: str | None = None) -> UsageRecord | None:
        statement = select(UsageRecord).where(
            UsageRecord.user_id == user_id,
            UsageRecord.month_year == (month_year or self.current_month()),
        )
        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as exc:
            raise ContentStoreError("Failed to load usage.") from exc
        return result.scalar_one_or_none()
