from __future__ import annotations

from pydantic import BaseModel, Field

from schemas.content_library import ContentResponse


class UsageResponse(BaseModel):
    user_id: str
    month_year: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    generation_count: int
    subscription_tier: str
    generation_limit: int | None = None


class DashboardResponse(BaseModel):
    usage: UsageResponse
    recent_content: list[ContentResponse]
    total_content: int
    favorite_count: int
