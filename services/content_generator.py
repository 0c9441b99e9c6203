from __future__ import annotations

import logging

from openai import AsyncOpenAI

from services.prompt_builder import SYSTEM_PROMPT, ContentRequest, build_prompt

logger = logging.getLogger(__name__)


class ContentGenerationError(RuntimeError):
    """Raised when the LLM call fails or returns no usable text."""


class MarketingContentGenerator:
    """Generate regional-language marketing copy with the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-5-mini-2025-08-07",
        max_completion_tokens: int = 500,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key)
        self._model = model
        self._max_completion_tokens = max_completion_tokens

    async def generate(self, request: ContentRequest) -> str:
        prompt = build_prompt(request)
        logger.info(
            "Generating %s in %s (tone=%s)",
            request.content_type,
            request.language,
            request.tone,
        )
        logger.debug("Prompt: %s", prompt)

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_completion_tokens=self._max_completion_tokens,
            )
        except Exception as exc:  # noqa: BLE001 - every provider failure is one error kind
            logger.error("OpenAI API error: %s", exc)
            raise ContentGenerationError(f"OpenAI API error: {exc}") from exc

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            raise ContentGenerationError("OpenAI returned empty response.")

        logger.info("OpenAI response received successfully")
        return content.strip()
