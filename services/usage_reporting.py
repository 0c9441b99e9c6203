from __future__ import annotations

import logging
from dataclasses import dataclass

from app.db.models import GeneratedContent, UsageRecord
from services.content_store import DEFAULT_TIER, ContentStoreService

logger = logging.getLogger(__name__)

PREMIUM_TIER = "premium"


@dataclass(frozen=True)
class UsageSummary:
    user_id: str
    month_year: str
    generation_count: int
    subscription_tier: str
    generation_limit: int | None


@dataclass(frozen=True)
class DashboardSummary:
    usage: UsageSummary
    recent_content: list[GeneratedContent]
    total_content: int
    favorite_count: int


class UsageReportingService:
    """Read-side view of the usage counter and the dashboard numbers.

    The monthly limit is informational only: nothing rejects a save once the
    count passes it.
    """

    def __init__(
        self,
        store: ContentStoreService,
        free_tier_limit: int = 10,
        recent_limit: int = 5,
    ) -> None:
        self._store = store
        self._free_tier_limit = free_tier_limit
        self._recent_limit = recent_limit

    def generation_limit(self, subscription_tier: str) -> int | None:
        if subscription_tier == PREMIUM_TIER:
            return None
        return self._free_tier_limit

    def _summarize(
        self,
        user_id: str,
        month_year: str,
        record: UsageRecord | None,
    ) -> UsageSummary:
        if record is None:
            return UsageSummary(
                user_id=user_id,
                month_year=month_year,
                generation_count=0,
                subscription_tier=DEFAULT_TIER,
                generation_limit=self.generation_limit(DEFAULT_TIER),
            )
        return UsageSummary(
            user_id=user_id,
            month_year=record.month_year,
            generation_count=record.generation_count,
            subscription_tier=record.subscription_tier,
            generation_limit=self.generation_limit(record.subscription_tier),
        )

    async def get_usage(self, user_id: str, month_year: str | None = None) -> UsageSummary:
        resolved_month = month_year or self._store.current_month()
        record = await self._store.get_usage(user_id, resolved_month)
        return self._summarize(user_id, resolved_month, record)

    async def get_dashboard(self, user_id: str) -> DashboardSummary:
        recent = await self._store.list_content(user_id, limit=self._recent_limit)
        counts = await self._store.count_content(user_id)
        usage = await self.get_usage(user_id)
        logger.debug(
            "Dashboard for %s: %s recent, %s total, %s used",
            user_id,
            len(recent),
            counts.total,
            usage.generation_count,
        )
        return DashboardSummary(
            usage=usage,
            recent_content=recent,
            total_content=counts.total,
            favorite_count=counts.favorites,
        )
