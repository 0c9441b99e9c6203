from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from app.core.config import Settings, get_settings
from schemas.content_generation import (
    ContentOptionsResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationErrorResponse,
    OptionItem,
)
from services.content_generator import ContentGenerationError, MarketingContentGenerator
from services.prompt_builder import (
    CONTENT_TYPE_LABELS,
    LANGUAGE_LABELS,
    TONE_LABELS,
    Festival,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generation"])

GENERATION_FAILED = "Failed to generate content"


def get_content_generator(
    settings: Settings = Depends(get_settings),
) -> MarketingContentGenerator | None:
    if not settings.openai_api_key:
        return None
    return MarketingContentGenerator(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        max_completion_tokens=settings.max_completion_tokens,
    )


def _failure(exc: Exception) -> JSONResponse:
    payload = GenerationErrorResponse(error=GENERATION_FAILED, details=str(exc))
    return JSONResponse(status_code=500, content=payload.model_dump())


@router.post(
    "/generate-marketing-content",
    response_model=GenerateContentResponse,
    responses={500: {"model": GenerationErrorResponse}},
)
async def generate_marketing_content(
    payload: GenerateContentRequest,
    generator: MarketingContentGenerator | None = Depends(get_content_generator),
) -> GenerateContentResponse | JSONResponse:
    logger.info(
        "Received request: product=%s type=%s language=%s tone=%s",
        payload.product_service,
        payload.content_type,
        payload.language,
        payload.tone,
    )
    if generator is None:
        logger.error("OpenAI API key is not configured")
        return _failure(ContentGenerationError("OpenAI API key is not configured."))

    try:
        generated_text = await generator.generate(payload.to_content_request())
    except ContentGenerationError as exc:
        logger.error("Error in generate-marketing-content: %s", exc)
        return _failure(exc)

    return GenerateContentResponse(generated_text=generated_text)


@router.get("/options", response_model=ContentOptionsResponse)
async def get_content_options() -> ContentOptionsResponse:
    return ContentOptionsResponse(
        content_types=[
            OptionItem(value=value, label=label) for value, label in CONTENT_TYPE_LABELS.items()
        ],
        languages=[OptionItem(value=value, label=label) for value, label in LANGUAGE_LABELS.items()],
        tones=[OptionItem(value=value, label=label) for value, label in TONE_LABELS.items()],
        festivals=[festival.value for festival in Festival],
    )
