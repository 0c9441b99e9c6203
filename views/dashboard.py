from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from views.api_client import ApiError, ContentApiClient
from views.common import (
    FAVORITE_FAILED,
    ContentItem,
    Notice,
    ViewStatus,
    favorite_notice,
    find_item,
    with_favorite,
)

logger = logging.getLogger(__name__)

UNLIMITED = "Unlimited"


@dataclass(frozen=True)
class UsageInfo:
    month_year: str
    generation_count: int
    subscription_tier: str
    generation_limit: int | None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> UsageInfo:
        return cls(
            month_year=payload["month_year"],
            generation_count=int(payload.get("generation_count") or 0),
            subscription_tier=payload.get("subscription_tier") or "free",
            generation_limit=payload.get("generation_limit"),
        )


@dataclass(frozen=True)
class DashboardState:
    recent: tuple[ContentItem, ...] = ()
    usage: UsageInfo | None = None
    total_content: int = 0
    favorite_count: int = 0
    status: ViewStatus = ViewStatus.idle
    notice: Notice | None = None

    @property
    def generations_used(self) -> int:
        return self.usage.generation_count if self.usage else 0

    @property
    def generations_limit_label(self) -> str:
        if self.usage is None:
            return ""
        if self.usage.generation_limit is None:
            return UNLIMITED
        return str(self.usage.generation_limit)


def dashboard_loaded(state: DashboardState, payload: dict[str, Any]) -> DashboardState:
    return replace(
        state,
        recent=tuple(ContentItem.from_payload(item) for item in payload["recent_content"]),
        usage=UsageInfo.from_payload(payload["usage"]),
        total_content=int(payload["total_content"]),
        favorite_count=int(payload["favorite_count"]),
        status=ViewStatus.populated,
        notice=None,
    )


def load_failed(state: DashboardState) -> DashboardState:
    return replace(
        state,
        status=ViewStatus.error,
        notice=Notice("Error", "Failed to load dashboard", destructive=True),
    )


def favorite_toggled(state: DashboardState, content_id: str, is_favorite: bool) -> DashboardState:
    delta = 1 if is_favorite else -1
    return replace(
        state,
        recent=with_favorite(state.recent, content_id, is_favorite),
        favorite_count=max(state.favorite_count + delta, 0),
        notice=favorite_notice(is_favorite),
    )


async def load(state: DashboardState, client: ContentApiClient) -> DashboardState:
    state = replace(state, status=ViewStatus.loading)
    try:
        payload = await client.get_dashboard()
    except ApiError as exc:
        logger.error("Dashboard fetch error: %s", exc)
        return load_failed(state)
    return dashboard_loaded(state, payload)


async def toggle_favorite(
    state: DashboardState,
    client: ContentApiClient,
    content_id: str,
) -> DashboardState:
    item = find_item(state.recent, content_id)
    if item is None:
        return state

    target = not item.is_favorite
    try:
        await client.set_favorite(content_id, target)
    except ApiError as exc:
        logger.error("Toggle favorite error: %s", exc)
        return replace(state, notice=FAVORITE_FAILED)
    return favorite_toggled(state, content_id, target)
