"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # LLM classifier / Gemini
    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    classifier_max_tokens: int = 8

    # Provider cache
    cache_ttl_seconds: float = 60.0

    # Web search (Brave)
    brave_search_url: str = "https://api.search.brave.com/res/v1/web/search"
    search_result_count: int = 5
    search_freshness: str = "pw"  # past week
    search_min_interval_seconds: float = 1.0
    monthly_search_limit: int = 2000

    # Sports (ESPN)
    espn_base_url: str = "https://site.api.espn.com/apis/site/v2/sports"

    # HTTP
    http_timeout_seconds: float = 10.0

    # Weather
    weather_geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    weather_forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    default_location: str = ""
    use_celsius: bool = True

    # Context formatting
    brief_context_max_chars: int = 500
    detailed_context_max_chars: int = 1200
    detailed_max_items: int = 5
    max_sources: int = 3

    # Storage paths
    settings_db_path: str = "data/augment.db"
    calendar_db_path: str = "data/calendar.db"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_file": ".env", "env_prefix": "AUGMENT_"}
