"""Tests for the web search provider adapter."""

from __future__ import annotations

import pytest

from augment_engine.exceptions import APIKeyMissing
from augment_engine.models.domain import ContextCategory, QueryDomain, SearchResult
from augment_engine.providers.web_search import WebSearchProvider


class FakeKeyStore:
    def __init__(self, key: str | None) -> None:
        self.key = key

    async def get_api_key(self) -> str | None:
        return self.key

    async def has_api_key(self) -> bool:
        return bool(self.key)


class FakeBackend:
    """Fake search backend that records its calls."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def search(self, query, api_key, count=5, freshness="pw"):
        self.calls.append((query, api_key, count, freshness))
        return [
            SearchResult("Answer", "https://a", "42", answer_type="infobox", is_instant_answer=True),
            SearchResult("Page", "https://b", "text"),
        ]


async def test_fetch_passes_key_and_options():
    backend = FakeBackend()
    provider = WebSearchProvider(backend, FakeKeyStore("k1"), count=7, freshness="pm", max_sources=1)

    context = await provider.fetch("Boston news")

    assert backend.calls == [("Boston news", "k1", 7, "pm")]
    assert context.domain == QueryDomain.GENERAL
    assert context.items[0].category == ContextCategory.DIRECT_ANSWER
    assert context.source_labels == ["https://a"]


async def test_availability_follows_api_key():
    assert await WebSearchProvider(FakeBackend(), FakeKeyStore("k")).is_available()
    assert not await WebSearchProvider(FakeBackend(), FakeKeyStore(None)).is_available()


async def test_fetch_without_key():
    backend = FakeBackend()
    with pytest.raises(APIKeyMissing):
        await WebSearchProvider(backend, FakeKeyStore("")).fetch("q")
    assert backend.calls == []


def test_supports_non_blank_text():
    provider = WebSearchProvider(FakeBackend(), FakeKeyStore("k"))
    assert provider.name == "Brave Search"
    assert provider.supports("python")
    assert not provider.supports("   ")
    assert not provider.supports(42)
