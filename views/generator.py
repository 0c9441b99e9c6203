"""Generator view: form fields, one generation call, then save, copy or share.

Transitions are pure functions returning a new :class:`GeneratorState`; the
``generate`` and ``save`` coroutines wrap them around the network calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, fields, replace
from typing import Any

from services.prompt_builder import format_content_type
from views.api_client import ApiError, ContentApiClient
from views.common import Notice, ViewStatus, copy_to_clipboard, whatsapp_share_url

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("product_service", "content_type", "language", "tone")


@dataclass(frozen=True)
class GeneratorForm:
    product_service: str = ""
    key_message: str = ""
    target_audience: str = ""
    content_type: str = ""
    language: str = ""
    tone: str = ""
    festival_context: str = ""

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]

    def to_generation_payload(self) -> dict[str, Any]:
        return {
            "productService": self.product_service,
            "keyMessage": self.key_message,
            "targetAudience": self.target_audience,
            "contentType": self.content_type,
            "language": self.language,
            "tone": self.tone,
            "festivalContext": self.festival_context,
        }


@dataclass(frozen=True)
class GeneratorState:
    form: GeneratorForm = field(default_factory=GeneratorForm)
    generated_text: str = ""
    status: ViewStatus = ViewStatus.idle
    is_generating: bool = False
    is_saving: bool = False
    saved_content_id: str | None = None
    notice: Notice | None = None

    @property
    def can_generate(self) -> bool:
        return not self.is_generating and not self.form.missing_fields()

    @property
    def can_save(self) -> bool:
        return bool(self.generated_text) and not self.is_saving


_FORM_FIELDS = {item.name for item in fields(GeneratorForm)}


def update_field(state: GeneratorState, name: str, value: str) -> GeneratorState:
    if name not in _FORM_FIELDS:
        raise ValueError(f"Unknown form field: {name}")
    return replace(state, form=replace(state.form, **{name: value}))


def start_generation(state: GeneratorState) -> GeneratorState:
    if state.is_generating:
        return state
    if state.form.missing_fields():
        return replace(
            state,
            notice=Notice(
                "Missing Information",
                "Please fill in all required fields",
                destructive=True,
            ),
        )
    return replace(state, status=ViewStatus.loading, is_generating=True, notice=None)


def generation_succeeded(state: GeneratorState, generated_text: str) -> GeneratorState:
    form = state.form
    return replace(
        state,
        generated_text=generated_text,
        status=ViewStatus.populated,
        is_generating=False,
        saved_content_id=None,
        notice=Notice(
            "Content Generated!",
            f"Your {form.language} {format_content_type(form.content_type).lower()} is ready!",
        ),
    )


def generation_failed(state: GeneratorState) -> GeneratorState:
    return replace(
        state,
        status=ViewStatus.error,
        is_generating=False,
        notice=Notice(
            "Generation Failed",
            "Failed to generate content. Please try again.",
            destructive=True,
        ),
    )


def edit_generated_text(state: GeneratorState, text: str) -> GeneratorState:
    return replace(state, generated_text=text)


def start_save(state: GeneratorState) -> GeneratorState:
    if not state.can_save:
        return state
    return replace(state, is_saving=True, notice=None)


def save_succeeded(state: GeneratorState, content_id: str) -> GeneratorState:
    return replace(
        state,
        is_saving=False,
        saved_content_id=content_id,
        notice=Notice(
            "Content Saved!",
            "Your generated content has been saved to your library.",
        ),
    )


def save_failed(state: GeneratorState) -> GeneratorState:
    return replace(
        state,
        is_saving=False,
        notice=Notice("Save Failed", "Failed to save content. Please try again.", destructive=True),
    )


def save_payload(state: GeneratorState) -> dict[str, Any]:
    form = state.form
    return {
        "content_type": form.content_type,
        "product_service": form.product_service,
        "key_message": form.key_message,
        "target_audience": form.target_audience,
        "tone": form.tone,
        "language": form.language,
        "generated_text": state.generated_text,
        "festival_context": form.festival_context,
    }


def copy_text(state: GeneratorState, write_clipboard: Callable[[str], None]) -> GeneratorState:
    return replace(state, notice=copy_to_clipboard(state.generated_text, write_clipboard))


async def generate(state: GeneratorState, client: ContentApiClient) -> GeneratorState:
    if state.is_generating:
        return state
    state = start_generation(state)
    if not state.is_generating:
        return state

    try:
        generated_text = await client.generate(state.form.to_generation_payload())
    except ApiError as exc:
        logger.error("Generation error: %s", exc)
        return generation_failed(state)
    return generation_succeeded(state, generated_text)


async def save(state: GeneratorState, client: ContentApiClient) -> GeneratorState:
    if state.is_saving or not state.can_save:
        return state
    state = start_save(state)

    try:
        record = await client.save_content(save_payload(state))
    except ApiError as exc:
        logger.error("Save error: %s", exc)
        return save_failed(state)
    return save_succeeded(state, str(record["id"]))


def share_url(state: GeneratorState) -> str:
    return whatsapp_share_url(state.generated_text)
