from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ContentCreateRequest(BaseModel):
    content_type: str = Field(min_length=1, max_length=64)
    product_service: str = Field(min_length=1, max_length=255)
    key_message: str | None = Field(default=None, max_length=1000)
    target_audience: str | None = Field(default=None, max_length=500)
    tone: str = Field(min_length=1, max_length=32)
    language: str = Field(min_length=1, max_length=32)
    generated_text: str = Field(min_length=1)
    festival_context: str | None = Field(default=None, max_length=64)


class FavoriteUpdateRequest(BaseModel):
    is_favorite: bool


class ContentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    content_type: str
    product_service: str
    key_message: str | None = None
    target_audience: str | None = None
    tone: str
    language: str
    generated_text: str
    festival_context: str | None = None
    is_favorite: bool
    created_at: datetime


class ContentListResponse(BaseModel):
    items: list[ContentResponse]
    count: int
