"""ORM models for saved marketing content and monthly usage counters."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class GeneratedContent(Base):
    """A generated piece of copy, persisted only when the user saves it."""

    __tablename__ = "generated_content"
    __table_args__ = (
        Index("ix_generated_content_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    content_type: Mapped[str] = mapped_column(String(64), nullable=False)
    product_service: Mapped[str] = mapped_column(String(255), nullable=False)
    key_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_audience: Mapped[str | None] = mapped_column(Text, nullable=True)
    tone: Mapped[str] = mapped_column(String(32), nullable=False)
    language: Mapped[str] = mapped_column(String(32), nullable=False)
    generated_text: Mapped[str] = mapped_column(Text, nullable=False)
    festival_context: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class UsageRecord(Base):
    """Per-user tally of saves for one calendar month (``YYYY-MM``)."""

    __tablename__ = "usage_analytics"
    __table_args__ = (
        UniqueConstraint("user_id", "month_year", name="uq_usage_analytics_user_month"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    month_year: Mapped[str] = mapped_column(String(7), nullable=False)
    generation_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    subscription_tier: Mapped[str] = mapped_column(String(16), nullable=False, default="free")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
