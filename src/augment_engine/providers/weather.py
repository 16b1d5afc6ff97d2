"""Weather Provider wrapping an injected WeatherService."""

from __future__ import annotations

from collections.abc import Hashable

from augment_engine.formatting.renderers import weather_context
from augment_engine.models.domain import ExternalContext
from augment_engine.protocols.weather import WeatherService


class WeatherProvider:
    def __init__(
        self,
        service: WeatherService,
        use_celsius: bool = True,
        name: str = "Weather",
        priority: int = 0,
    ) -> None:
        self._service = service
        self._use_celsius = use_celsius
        self.name = name
        self.priority = priority

    def supports(self, key: Hashable) -> bool:
        return isinstance(key, str) and len(key.strip()) > 1

    async def is_available(self) -> bool:
        return True

    async def fetch(self, key: Hashable) -> ExternalContext:
        snapshot = await self._service.fetch_weather(str(key), use_celsius=self._use_celsius)
        return weather_context(snapshot, self.name)
