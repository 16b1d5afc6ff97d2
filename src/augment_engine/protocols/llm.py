"""Protocol for the LLM classification collaborator."""

from __future__ import annotations

from typing import Protocol

from augment_engine.models.domain import DetailLevel


class IntentLLM(Protocol):
    async def needs_web_search(self, query: str) -> bool: ...

    async def classify_response_detail(self, query: str) -> DetailLevel: ...


class TextGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 4096,
    ) -> str: ...
