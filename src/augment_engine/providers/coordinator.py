"""Priority-ordered provider fallback with a lazily-expired TTL cache."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Hashable, Iterable

from augment_engine.exceptions import AugmentEngineError, NoDataAvailable
from augment_engine.models.domain import CacheEntry, ExternalContext, QueryDomain
from augment_engine.observability.logger import get_logger
from augment_engine.protocols.provider import Provider

logger = get_logger("provider_coordinator")


class ProviderFallbackCoordinator:
    """Tries registered providers in priority order, caching the first success.

    One instance serves one domain. Cache reads, cache writes and registry
    changes are serialized by an instance lock, so concurrent ``fetch`` calls
    for the same key hit the providers once.
    """

    def __init__(
        self,
        domain: QueryDomain,
        providers: Iterable[Provider] = (),
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._domain = domain
        self._providers: list[Provider] = sorted(providers, key=lambda p: p.priority)
        self._ttl = ttl_seconds
        self._clock = clock
        self._cache: dict[tuple[QueryDomain, Hashable], CacheEntry] = {}
        self._lock = asyncio.Lock()

    @property
    def domain(self) -> QueryDomain:
        return self._domain

    @property
    def providers(self) -> list[Provider]:
        return list(self._providers)

    def register(self, provider: Provider) -> None:
        self._providers.append(provider)
        self._providers.sort(key=lambda p: p.priority)
        # A cached result may come from a provider that now ranks lower.
        self._cache.clear()
        logger.info(
            "provider_registered",
            domain=self._domain.value,
            provider=provider.name,
            priority=provider.priority,
        )

    async def fetch(self, key: Hashable) -> ExternalContext:
        context, _ = await self.fetch_with_status(key)
        return context

    async def fetch_with_status(self, key: Hashable) -> tuple[ExternalContext, bool]:
        """Like ``fetch``, but also report whether the result came from the cache."""
        async with self._lock:
            cache_key = (self._domain, key)
            entry = self._cache.get(cache_key)
            if entry is not None and self._clock() - entry.timestamp < self._ttl:
                logger.debug("provider_cache_hit", domain=self._domain.value)
                return entry.value, True

            last_error: Exception | None = None
            for provider in self._providers:
                if not provider.supports(key):
                    continue
                if not await provider.is_available():
                    logger.info(
                        "provider_unavailable", domain=self._domain.value, provider=provider.name
                    )
                    continue

                try:
                    result = await provider.fetch(key)
                except AugmentEngineError as e:
                    logger.warning(
                        "provider_failed",
                        domain=self._domain.value,
                        provider=provider.name,
                        error_kind=e.kind,
                        reason=e.reason,
                    )
                    last_error = e
                    continue
                except Exception as e:
                    logger.warning(
                        "provider_failed",
                        domain=self._domain.value,
                        provider=provider.name,
                        error=str(e),
                    )
                    last_error = e
                    continue

                self._cache[cache_key] = CacheEntry(value=result, timestamp=self._clock())
                logger.info(
                    "provider_fetch_ok",
                    domain=self._domain.value,
                    provider=provider.name,
                    items=len(result.items),
                )
                return result, False

            if last_error is not None:
                raise last_error
            raise NoDataAvailable(f"No {self._domain.value} data available")

    def clear_cache(self, key: Hashable | None = None) -> None:
        if key is None:
            self._cache.clear()
        else:
            self._cache.pop((self._domain, key), None)
