"""Brave Search API client."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from augment_engine.exceptions import (
    InvalidAPIKey,
    NetworkUnavailable,
    NoResults,
    ParseError,
    ProviderError,
    RateLimited,
)
from augment_engine.models.domain import SearchResult
from augment_engine.models.schemas import BraveResponse
from augment_engine.observability.logger import get_logger
from augment_engine.providers.rate_limiter import MinIntervalRateLimiter

logger = get_logger("brave")

DEFAULT_URL = "https://api.search.brave.com/res/v1/web/search"


class BraveSearchService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_URL,
        rate_limiter: MinIntervalRateLimiter | None = None,
    ) -> None:
        self._client = client
        self._base_url = base_url
        self._rate_limiter = rate_limiter or MinIntervalRateLimiter()

    async def search(
        self,
        query: str,
        api_key: str,
        count: int = 5,
        freshness: str | None = "pw",
    ) -> list[SearchResult]:
        await self._rate_limiter.acquire()

        params = {"q": query, "count": str(count), "safesearch": "moderate"}
        if freshness:
            params["freshness"] = freshness
        headers = {"Accept": "application/json", "X-Subscription-Token": api_key}

        try:
            response = await self._client.get(self._base_url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise NetworkUnavailable("Search request timed out") from e
        except httpx.TransportError as e:
            raise NetworkUnavailable() from e

        if response.status_code == 401:
            raise InvalidAPIKey()
        if response.status_code == 429:
            raise RateLimited()
        if response.status_code != 200:
            raise ProviderError(f"HTTP {response.status_code}")

        try:
            payload = BraveResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ParseError(str(e)) from e

        results = self.parse_results(payload, count)
        if not results:
            raise NoResults()

        logger.info("brave_search_ok", results=len(results))
        return results

    @staticmethod
    def parse_results(payload: BraveResponse, count: int = 5) -> list[SearchResult]:
        """Flatten every answer section, instant answers first."""
        results: list[SearchResult] = []

        if payload.infobox:
            for box in payload.infobox.results[:1]:
                results.append(
                    SearchResult(
                        title=box.title,
                        url=box.url,
                        description=box.long_desc or box.description,
                        answer_type="infobox",
                        is_instant_answer=True,
                    )
                )
        if payload.faq:
            for faq in payload.faq.results[:2]:
                results.append(
                    SearchResult(
                        title=faq.question,
                        url=faq.url,
                        description=faq.answer,
                        answer_type="faq",
                        is_instant_answer=True,
                    )
                )
        if payload.news:
            for item in payload.news.results[:3]:
                results.append(
                    SearchResult(
                        title=item.title,
                        url=item.url,
                        description=item.description,
                        age=item.age,
                        answer_type="news",
                    )
                )
        if payload.locations:
            for loc in payload.locations.results[:2]:
                results.append(
                    SearchResult(
                        title=loc.title,
                        url=loc.url,
                        description=loc.description,
                        answer_type="location",
                    )
                )
        if payload.discussions:
            for disc in payload.discussions.results[:2]:
                results.append(
                    SearchResult(
                        title=disc.title,
                        url=disc.url,
                        description=disc.description,
                        answer_type="discussion",
                    )
                )
        if payload.web:
            for web in payload.web.results[:count]:
                results.append(
                    SearchResult(
                        title=web.title,
                        url=web.url,
                        description=web.description,
                        age=web.age,
                    )
                )
        return results
