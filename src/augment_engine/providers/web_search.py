"""General web search as a Provider, keyed by the sanitized query text."""

from __future__ import annotations

from collections.abc import Hashable

from augment_engine.exceptions import APIKeyMissing
from augment_engine.formatting.renderers import search_context
from augment_engine.models.domain import ExternalContext
from augment_engine.protocols.search import SearchBackend
from augment_engine.protocols.settings_store import SettingsStore


class WebSearchProvider:
    name = "Brave Search"

    def __init__(
        self,
        backend: SearchBackend,
        settings_store: SettingsStore,
        count: int = 5,
        freshness: str | None = "pw",
        max_sources: int = 3,
        priority: int = 0,
    ) -> None:
        self._backend = backend
        self._store = settings_store
        self._count = count
        self._freshness = freshness
        self._max_sources = max_sources
        self.priority = priority

    def supports(self, key: Hashable) -> bool:
        return isinstance(key, str) and bool(key.strip())

    async def is_available(self) -> bool:
        return await self._store.has_api_key()

    async def fetch(self, key: Hashable) -> ExternalContext:
        api_key = await self._store.get_api_key()
        if not api_key:
            raise APIKeyMissing()
        results = await self._backend.search(
            str(key), api_key, count=self._count, freshness=self._freshness
        )
        return search_context(results, self._max_sources)
