"""Wire the orchestrator and its collaborators from Settings."""

from __future__ import annotations

import httpx

from augment_engine.config.settings import Settings
from augment_engine.formatting.context_formatter import ContextFormatter
from augment_engine.llm.gemini_provider import GeminiProvider
from augment_engine.llm.heuristic import HeuristicIntentLLM
from augment_engine.llm.intent_classifier import LLMIntentClassifier
from augment_engine.models.domain import QueryDomain
from augment_engine.observability.logger import get_logger
from augment_engine.pipeline.orchestrator import ToolOrchestrator
from augment_engine.protocols.llm import IntentLLM
from augment_engine.providers.brave import BraveSearchService
from augment_engine.providers.coordinator import ProviderFallbackCoordinator
from augment_engine.providers.espn import ESPNProvider
from augment_engine.providers.open_meteo import OpenMeteoWeatherService
from augment_engine.providers.rate_limiter import MinIntervalRateLimiter
from augment_engine.providers.weather import WeatherProvider
from augment_engine.providers.web_search import WebSearchProvider
from augment_engine.storage.sqlite_calendar_store import SQLiteCalendarStore
from augment_engine.storage.sqlite_settings_store import SQLiteSettingsStore

logger = get_logger("factory")


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))


def build_llm(settings: Settings) -> IntentLLM:
    if not settings.google_api_key:
        logger.info("llm_not_configured", fallback="keywords")
        return HeuristicIntentLLM()
    generator = GeminiProvider(api_key=settings.google_api_key, model=settings.gemini_model)
    return LLMIntentClassifier(generator, max_tokens=settings.classifier_max_tokens)


async def build_settings_store(settings: Settings) -> SQLiteSettingsStore:
    store = SQLiteSettingsStore(
        settings.settings_db_path, monthly_limit=settings.monthly_search_limit
    )
    await store.initialize()
    return store


async def build_orchestrator(
    settings: Settings,
    client: httpx.AsyncClient,
    llm: IntentLLM | None = None,
) -> ToolOrchestrator:
    store = await build_settings_store(settings)
    calendar = SQLiteCalendarStore(settings.calendar_db_path)
    await calendar.initialize()

    # Web search
    backend = BraveSearchService(
        client,
        base_url=settings.brave_search_url,
        rate_limiter=MinIntervalRateLimiter(settings.search_min_interval_seconds),
    )
    web_search = ProviderFallbackCoordinator(
        QueryDomain.GENERAL,
        [
            WebSearchProvider(
                backend,
                store,
                count=settings.search_result_count,
                freshness=settings.search_freshness,
                max_sources=settings.max_sources,
            )
        ],
        ttl_seconds=settings.cache_ttl_seconds,
    )

    # Weather
    weather_service = OpenMeteoWeatherService(
        client,
        geocoding_url=settings.weather_geocoding_url,
        forecast_url=settings.weather_forecast_url,
    )
    weather = ProviderFallbackCoordinator(
        QueryDomain.WEATHER,
        [WeatherProvider(weather_service, use_celsius=settings.use_celsius, name="Open-Meteo")],
        ttl_seconds=settings.cache_ttl_seconds,
    )

    # Sports
    sports = ProviderFallbackCoordinator(
        QueryDomain.SPORTS,
        [ESPNProvider(client, base_url=settings.espn_base_url)],
        ttl_seconds=settings.cache_ttl_seconds,
    )

    return ToolOrchestrator(
        settings_store=store,
        llm=llm or build_llm(settings),
        web_search=web_search,
        weather=weather,
        sports=sports,
        calendar=calendar,
        settings=settings,
        formatter=ContextFormatter(settings),
    )
