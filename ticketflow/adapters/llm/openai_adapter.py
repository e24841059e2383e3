"""OpenAI adapter — implements ModelPort using the OpenAI chat completions API."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from ticketflow.application.ports.model_port import ModelPort, ModelRequest
from ticketflow.config import settings
from ticketflow.domain.errors import ModelInvocationError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a customer support triage assistant. "
    "Always answer with a single JSON object and nothing else."
)


class OpenAIAdapter(ModelPort):
    """OpenAI implementation of ModelPort.

    Retries on throttling and transient errors are delegated to the SDK
    (``max_retries``); whatever still fails surfaces as ModelInvocationError.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self._model = model or settings.openai_model
        if client is not None:
            self._client = client
            return

        key = api_key if api_key is not None else settings.openai_api_key
        if not (key or "").strip():
            logger.warning("OPENAI_API_KEY is not set. Every ticket will get fallback analytics.")
            self._client = None
            return

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or settings.openai_base_url,
            timeout=timeout if timeout is not None else settings.model_timeout_seconds,
            max_retries=max_retries if max_retries is not None else settings.model_max_retries,
        )

    @property
    def model_id(self) -> str:
        return self._model

    async def complete(self, request: ModelRequest) -> str:
        if self._client is None:
            raise ModelInvocationError("OpenAI client is not configured (missing OPENAI_API_KEY)")

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": request.prompt},
                ],
                max_tokens=request.max_tokens,
                temperature=request.temperature,
                top_p=request.top_p,
            )
        except OpenAIError as e:
            raise ModelInvocationError(
                f"OpenAI request failed: {e}", {"model": self._model}
            ) from e

        if not response.choices:
            raise ModelInvocationError("OpenAI response has no choices", {"model": self._model})

        text = (response.choices[0].message.content or "").strip()
        if not text:
            raise ModelInvocationError("OpenAI response is empty", {"model": self._model})
        return text
