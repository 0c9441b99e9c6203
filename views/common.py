from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)

WHATSAPP_SHARE_URL = "https://wa.me/?text={text}"


class ViewStatus(str, Enum):
    idle = "idle"
    loading = "loading"
    error = "error"
    populated = "populated"


@dataclass(frozen=True)
class Notice:
    """Short message shown to the user after an action."""

    title: str
    description: str
    destructive: bool = False


@dataclass(frozen=True)
class ContentItem:
    id: str
    content_type: str
    product_service: str
    language: str
    tone: str
    generated_text: str
    is_favorite: bool
    created_at: datetime
    key_message: str | None = None
    target_audience: str | None = None
    festival_context: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ContentItem:
        return cls(
            id=str(payload["id"]),
            content_type=payload["content_type"],
            product_service=payload["product_service"],
            language=payload["language"],
            tone=payload["tone"],
            generated_text=payload["generated_text"],
            is_favorite=bool(payload.get("is_favorite", False)),
            created_at=datetime.fromisoformat(payload["created_at"]),
            key_message=payload.get("key_message"),
            target_audience=payload.get("target_audience"),
            festival_context=payload.get("festival_context"),
        )


def with_favorite(
    items: tuple[ContentItem, ...],
    content_id: str,
    is_favorite: bool,
) -> tuple[ContentItem, ...]:
    return tuple(
        replace(item, is_favorite=is_favorite) if item.id == content_id else item
        for item in items
    )


def find_item(items: tuple[ContentItem, ...], content_id: str) -> ContentItem | None:
    return next((item for item in items if item.id == content_id), None)


def favorite_notice(is_favorite: bool) -> Notice:
    if is_favorite:
        return Notice("Added to Favorites", "Content saved to your favorites")
    return Notice("Removed from Favorites", "Content removed from favorites")


FAVORITE_FAILED = Notice("Error", "Failed to update favorite status", destructive=True)

COPIED = Notice("Copied!", "Content copied to clipboard.")
COPY_FAILED = Notice("Copy Failed", "Failed to copy content.", destructive=True)


def copy_to_clipboard(text: str, write_clipboard: Callable[[str], None]) -> Notice:
    try:
        write_clipboard(text)
    except Exception:  # noqa: BLE001 - any clipboard backend failure is reported the same way
        logger.exception("Copy to clipboard failed")
        return COPY_FAILED
    return COPIED


def whatsapp_share_url(text: str) -> str:
    return WHATSAPP_SHARE_URL.format(text=quote(text, safe=""))
