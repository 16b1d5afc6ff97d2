"""Gemini adapter for the ``TextGenerator`` protocol (google-genai SDK)."""

from __future__ import annotations

import time

from google import genai
from google.genai import types

from augment_engine.exceptions import ProviderError
from augment_engine.observability.logger import get_logger

logger = get_logger("gemini")


class GeminiProvider:
    def __init__(self, api_key: str, model: str = "gemini-2.0-flash") -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 4096,
    ) -> str:
        """Return the model's text reply; an empty or blocked reply yields ``""``."""
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            system_instruction=system,
        )
        started = time.monotonic()
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model, contents=prompt, config=config
            )
        except Exception as e:
            logger.warning("gemini_request_failed", model=self._model, error=str(e))
            raise ProviderError(f"Gemini request failed: {e}") from e

        text = (response.text or "").strip()
        logger.debug(
            "gemini_reply",
            model=self._model,
            latency_ms=round((time.monotonic() - started) * 1000, 1),
            empty=not text,
        )
        return text
