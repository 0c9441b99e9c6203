from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from views.api_client import ApiError, ContentApiClient
from views.common import (
    FAVORITE_FAILED,
    ContentItem,
    Notice,
    ViewStatus,
    copy_to_clipboard,
    favorite_notice,
    find_item,
    whatsapp_share_url,
    with_favorite,
)

logger = logging.getLogger(__name__)

ALL = "all"


@dataclass(frozen=True)
class LibraryFilters:
    search_query: str = ""
    language: str = ALL
    content_type: str = ALL
    favorites_only: bool = False


@dataclass(frozen=True)
class LibraryState:
    items: tuple[ContentItem, ...] = ()
    filters: LibraryFilters = field(default_factory=LibraryFilters)
    status: ViewStatus = ViewStatus.idle
    notice: Notice | None = None


def matches(item: ContentItem, filters: LibraryFilters) -> bool:
    query = filters.search_query.strip().lower()
    if query:
        haystacks = (item.product_service, item.generated_text, item.key_message or "")
        if not any(query in text.lower() for text in haystacks):
            return False
    if filters.language != ALL and item.language != filters.language:
        return False
    if filters.content_type != ALL and item.content_type != filters.content_type:
        return False
    if filters.favorites_only and not item.is_favorite:
        return False
    return True


def visible_items(state: LibraryState) -> list[ContentItem]:
    return [item for item in state.items if matches(item, state.filters)]


def summary_line(state: LibraryState) -> str:
    return f"Showing {len(visible_items(state))} of {len(state.items)} content pieces"


def set_filters(state: LibraryState, **changes: object) -> LibraryState:
    return replace(state, filters=replace(state.filters, **changes))


def start_loading(state: LibraryState) -> LibraryState:
    return replace(state, status=ViewStatus.loading, notice=None)


def content_loaded(state: LibraryState, items: list[ContentItem]) -> LibraryState:
    return replace(state, items=tuple(items), status=ViewStatus.populated)


def load_failed(state: LibraryState) -> LibraryState:
    return replace(
        state,
        status=ViewStatus.error,
        notice=Notice("Error", "Failed to load content library", destructive=True),
    )


def favorite_toggled(state: LibraryState, content_id: str, is_favorite: bool) -> LibraryState:
    return replace(
        state,
        items=with_favorite(state.items, content_id, is_favorite),
        notice=favorite_notice(is_favorite),
    )


def content_deleted(state: LibraryState, content_id: str) -> LibraryState:
    return replace(
        state,
        items=tuple(item for item in state.items if item.id != content_id),
        notice=Notice("Content Deleted", "Content has been permanently removed"),
    )


def action_failed(state: LibraryState, notice: Notice) -> LibraryState:
    return replace(state, notice=notice)


def copy_item(
    state: LibraryState,
    content_id: str,
    write_clipboard: Callable[[str], None],
) -> LibraryState:
    item = find_item(state.items, content_id)
    if item is None:
        return state
    return replace(state, notice=copy_to_clipboard(item.generated_text, write_clipboard))


def share_url(state: LibraryState, content_id: str) -> str | None:
    item = find_item(state.items, content_id)
    if item is None:
        return None
    return whatsapp_share_url(item.generated_text)


async def load(state: LibraryState, client: ContentApiClient) -> LibraryState:
    state = start_loading(state)
    try:
        payloads = await client.list_content()
    except ApiError as exc:
        logger.error("Fetch content error: %s", exc)
        return load_failed(state)
    return content_loaded(state, [ContentItem.from_payload(payload) for payload in payloads])


async def toggle_favorite(
    state: LibraryState,
    client: ContentApiClient,
    content_id: str,
) -> LibraryState:
    item = find_item(state.items, content_id)
    if item is None:
        return state

    target = not item.is_favorite
    try:
        await client.set_favorite(content_id, target)
    except ApiError as exc:
        logger.error("Toggle favorite error: %s", exc)
        return action_failed(state, FAVORITE_FAILED)
    return favorite_toggled(state, content_id, target)


async def delete(
    state: LibraryState,
    client: ContentApiClient,
    content_id: str,
    confirm: Callable[[], bool],
) -> LibraryState:
    if not confirm():
        return state

    try:
        await client.delete_content(content_id)
    except ApiError as exc:
        logger.error("Delete content error: %s", exc)
        return action_failed(
            state,
            Notice("Error", "Failed to delete content", destructive=True),
        )
    return content_deleted(state, content_id)
