"""WeatherService backed by the Open-Meteo geocoding and forecast APIs."""

from __future__ import annotations

from datetime import date

import httpx

from augment_engine.exceptions import (
    LocationNotFound,
    NetworkUnavailable,
    ParseError,
    ProviderError,
)
from augment_engine.models.domain import DailyForecast, WeatherSnapshot
from augment_engine.observability.logger import get_logger

logger = get_logger("open_meteo")

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# WMO weather interpretation codes
WMO_CONDITIONS = {
    0: "Clear",
    1: "Mostly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Freezing Fog",
    51: "Light Drizzle",
    53: "Drizzle",
    55: "Heavy Drizzle",
    61: "Light Rain",
    63: "Rain",
    65: "Heavy Rain",
    66: "Freezing Rain",
    67: "Freezing Rain",
    71: "Light Snow",
    73: "Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Rain Showers",
    81: "Rain Showers",
    82: "Violent Rain Showers",
    85: "Snow Showers",
    86: "Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm with Hail",
    99: "Thunderstorm with Hail",
}


def describe_code(code: int | None) -> str:
    return WMO_CONDITIONS.get(code, "Unknown") if code is not None else "Unknown"


class OpenMeteoWeatherService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        geocoding_url: str = GEOCODING_URL,
        forecast_url: str = FORECAST_URL,
    ) -> None:
        self._client = client
        self._geocoding_url = geocoding_url
        self._forecast_url = forecast_url

    async def fetch_weather(self, location: str, use_celsius: bool = True) -> WeatherSnapshot:
        place = await self._geocode(location)
        params = {
            "latitude": place["latitude"],
            "longitude": place["longitude"],
            "current": "temperature_2m,apparent_temperature,relative_humidity_2m,"
            "wind_speed_10m,weather_code",
            "daily": "weather_code,temperature_2m_max,temperature_2m_min,"
            "precipitation_probability_max",
            "temperature_unit": "celsius" if use_celsius else "fahrenheit",
            "wind_speed_unit": "kmh" if use_celsius else "mph",
            "timezone": "auto",
            "forecast_days": 7,
        }
        payload = await self._get_json(self._forecast_url, params)
        name = ", ".join(p for p in (place.get("name"), place.get("admin1")) if p)
        return parse_forecast(payload, name or location, use_celsius)

    async def _geocode(self, location: str) -> dict:
        payload = await self._get_json(
            self._geocoding_url, {"name": location, "count": 1, "format": "json"}
        )
        results = payload.get("results") or []
        if not results:
            raise LocationNotFound(f"Location not found: {location}")
        return results[0]

    async def _get_json(self, url: str, params: dict) -> dict:
        try:
            response = await self._client.get(url, params=params)
        except httpx.TransportError as e:
            raise NetworkUnavailable() from e
        if response.status_code != 200:
            raise ProviderError(f"Weather service returned HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(str(e)) from e


def parse_forecast(payload: dict, location: str, use_celsius: bool = True) -> WeatherSnapshot:
    unit = "°C" if use_celsius else "°F"
    wind_unit = "km/h" if use_celsius else "mph"

    try:
        current = payload["current"]
        snapshot = WeatherSnapshot(
            location=location,
            temperature=f"{round(current['temperature_2m'])}{unit}",
            feels_like=f"{round(current['apparent_temperature'])}{unit}",
            condition=describe_code(current.get("weather_code")),
            humidity=f"{round(current['relative_humidity_2m'])}%",
            wind=f"{round(current['wind_speed_10m'])} {wind_unit}",
        )
    except (KeyError, TypeError) as e:
        raise ParseError(f"missing current conditions: {e}") from e

    daily = payload.get("daily") or {}
    days = daily.get("time") or []
    for i, day in enumerate(days):
        try:
            precip = (daily.get("precipitation_probability_max") or [])[i]
            snapshot.daily.append(
                DailyForecast(
                    day_of_week=date.fromisoformat(day).strftime("%a"),
                    high=f"{round(daily['temperature_2m_max'][i])}{unit}",
                    low=f"{round(daily['temperature_2m_min'][i])}{unit}",
                    condition=describe_code(daily["weather_code"][i]),
                    precipitation_chance=f"{precip or 0}%",
                )
            )
        except (KeyError, IndexError, TypeError, ValueError):
            logger.debug("forecast_day_skipped", day=day)
    return snapshot
