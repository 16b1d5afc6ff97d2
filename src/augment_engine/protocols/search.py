"""Protocol for web search backends."""

from __future__ import annotations

from typing import Protocol

from augment_engine.models.domain import SearchResult


class SearchBackend(Protocol):
    async def search(
        self,
        query: str,
        api_key: str,
        count: int = 5,
        freshness: str | None = "pw",
    ) -> list[SearchResult]: ...
