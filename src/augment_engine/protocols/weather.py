"""Protocol for weather services."""

from __future__ import annotations

from typing import Protocol

from augment_engine.models.domain import WeatherSnapshot


class WeatherService(Protocol):
    async def fetch_weather(
        self, location: str, use_celsius: bool = True
    ) -> WeatherSnapshot: ...
