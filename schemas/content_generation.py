from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.prompt_builder import ContentRequest


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_service: str = Field(alias="productService", min_length=1, max_length=255)
    key_message: str | None = Field(default=None, alias="keyMessage", max_length=1000)
    target_audience: str | None = Field(default=None, alias="targetAudience", max_length=500)
    content_type: str = Field(alias="contentType", min_length=1, max_length=64)
    language: str = Field(min_length=1, max_length=32)
    tone: str = Field(min_length=1, max_length=32)
    festival_context: str | None = Field(default=None, alias="festivalContext", max_length=64)

    @field_validator("product_service", "content_type", "language", "tone")
    @classmethod
    def _require_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned

    def to_content_request(self) -> ContentRequest:
        return ContentRequest(
            product_service=self.product_service,
            content_type=self.content_type,
            language=self.language,
            tone=self.tone,
            key_message=self.key_message,
            target_audience=self.target_audience,
            festival_context=self.festival_context,
        )


class GenerateContentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_text: str = Field(alias="generatedText")


class GenerationErrorResponse(BaseModel):
    error: str
    details: str


class OptionItem(BaseModel):
    value: str
    label: str


class ContentOptionsResponse(BaseModel):
    content_types: list[OptionItem]
    languages: list[OptionItem]
    tones: list[OptionItem]
    festivals: list[str]
