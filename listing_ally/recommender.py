from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from openai import APIError, APIStatusError, AsyncOpenAI

from .config import Settings
from .models import FailureReason, GenerationOutcome, PipelineFailure, ProductRecord
from .prompt_builder import (
    build_brand_voice_prompt,
    build_bullets_prompt,
    build_description_prompt,
    build_optimization_prompt,
    system_prompt,
)
from .suggestion_parser import parse

logger = logging.getLogger(__name__)

MAX_TOKENS = 2000
TEMPERATURE = 0.7
FALLBACK_ERROR = "OpenAI API request failed"


def _error_message(exc: Exception) -> str:
    """Upstream error payload message, else the exception text, else a fallback."""
    body: Any = getattr(exc, "body", None)
    if isinstance(body, dict):
        err = body.get("error", body)
        if isinstance(err, dict):
            msg = err.get("message")
            if isinstance(msg, str) and msg.strip():
                return msg.strip()
    return str(exc).strip() or FALLBACK_ERROR


class OptimizationRequester:
    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self._owns_client = client is None
        self.client = client or AsyncOpenAI(
            api_key=settings.generation_api_key,
            base_url=settings.generation_base_url,
            timeout=settings.generation_timeout,
            max_retries=0,
        )

    async def aclose(self) -> None:
        """Close the underlying client, unless it was handed in by the caller."""
        if self._owns_client:
            await self.client.close()

    async def _complete(self, prompt: str) -> Union[str, PipelineFailure]:
        try:
            resp = await self.client.chat.completions.create(
                model=self.settings.generation_model,
                messages=[
                    {"role": "system", "content": system_prompt()},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except APIError as exc:
            status = exc.status_code if isinstance(exc, APIStatusError) else None
            message = _error_message(exc)
            logger.warning("Generation request failed (%s): %s", status or "transport", message)
            return PipelineFailure(FailureReason.GENERATION_FAILED, message, status_code=status)

        if not resp.choices:
            logger.warning("Generation response had no choices")
            return PipelineFailure(FailureReason.GENERATION_FAILED, "Generation service returned no choices")
        return resp.choices[0].message.content or ""

    async def request_optimizations(self, product: ProductRecord) -> GenerationOutcome:
        reply = await self._complete(build_optimization_prompt(product))
        if isinstance(reply, PipelineFailure):
            return reply
        bundle = parse(reply)
        logger.debug(
            "Parsed %d suggestions for %s (seo=%d)",
            len(bundle.suggestions), product.identifier or "(no id)", bundle.seo_score,
        )
        return bundle

    # Single-field rewrites, sharing the request path above.

    async def optimize_brand_voice(self, current_voice: str, product_context: str) -> Union[str, PipelineFailure]:
        reply = await self._complete(build_brand_voice_prompt(current_voice, product_context))
        return reply if isinstance(reply, PipelineFailure) else reply.strip()

    async def optimize_bullets(self, current_bullets: List[str], product_context: str) -> Union[List[str], PipelineFailure]:
        reply = await self._complete(build_bullets_prompt(current_bullets, product_context))
        if isinstance(reply, PipelineFailure):
            return reply
        return [line.strip() for line in reply.splitlines() if line.strip()]

    async def optimize_description(self, current_description: str, product_context: str) -> Union[str, PipelineFailure]:
        reply = await self._complete(build_description_prompt(current_description, product_context))
        return reply if isinstance(reply, PipelineFailure) else reply.strip()
