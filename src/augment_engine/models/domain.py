"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from augment_engine.sports.leagues import GameStatus, SportsLeague


class QueryDomain(str, Enum):
    WEATHER = "weather"
    CALENDAR = "calendar"
    REMINDERS = "reminders"
    SPORTS = "sports"
    GENERAL = "general"


class SearchIntent(str, Enum):
    DEFINITELY_NEEDS_SEARCH = "definitely_needs_search"
    PROBABLY_NEEDS_SEARCH = "probably_needs_search"
    NO_SEARCH_NEEDED = "no_search_needed"


class DetailLevel(str, Enum):
    BRIEF = "brief"
    DETAILED = "detailed"


class CalendarTimeRange(str, Enum):
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"


class ConfirmationType(str, Enum):
    WEB_SEARCH = "web_search"
    WEATHER = "weather"
    CALENDAR = "calendar"
    REMINDERS = "reminders"
    SPORTS = "sports"


class ContextCategory(str, Enum):
    FAQ = "faq"
    DIRECT_ANSWER = "direct_answer"
    NEWS = "news"
    LOCATION = "location"
    DISCUSSION = "discussion"
    GENERAL = "general"
    DATA = "data"  # structured rows: games, events, reminders, forecast


@dataclass(frozen=True)
class ReminderDetails:
    title: str
    time_hint: str | None


@dataclass(frozen=True)
class Query:
    text: str
    domain: QueryDomain
    location: str | None = None
    time_range: CalendarTimeRange | None = None
    league: SportsLeague | None = None
    is_reminder_creation: bool = False
    reminder: ReminderDetails | None = None


@dataclass(frozen=True)
class SanitizationResult:
    original_text: str
    sanitized_text: str
    contained_pii: bool
    pii_kinds: list[str]
    should_proceed: bool


@dataclass
class ConfirmationRequest:
    query: Query
    display_query: str
    confirmation_type: ConfirmationType
    detail_level: DetailLevel = DetailLevel.DETAILED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def domain(self) -> QueryDomain:
        return self.query.domain


@dataclass(frozen=True)
class ContextItem:
    category: ContextCategory
    title: str
    text: str
    source: str | None = None


@dataclass
class ExternalContext:
    """Provider output normalized for formatting, whatever the domain."""

    domain: QueryDomain
    succeeded: bool
    items: list[ContextItem] = field(default_factory=list)
    source_labels: list[str] = field(default_factory=list)
    heading: str = ""
    result_count: int = 0
    error_kind: str | None = None

    @property
    def formatted_text(self) -> str:
        return "\n".join(item.text for item in self.items)


@dataclass
class CacheEntry:
    value: ExternalContext
    timestamp: float


@dataclass(frozen=True)
class UsageRecord:
    month_key: str  # "YYYY-MM"
    count: int


@dataclass
class SearchResult:
    title: str
    url: str
    description: str
    age: str | None = None
    answer_type: str = "web"  # "web", "faq", "news", "location", "discussion", "infobox"
    is_instant_answer: bool = False


@dataclass
class SportsGame:
    home_team: str
    away_team: str
    home_score: int | None
    away_score: int | None
    status: GameStatus
    status_detail: str  # "Final", "2nd Half", "3:30 PM ET"
    league: SportsLeague
    start_time: datetime | None = None

    @property
    def has_scores(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def winner(self) -> str | None:
        if self.status != GameStatus.FINAL or not self.has_scores:
            return None
        if self.home_score > self.away_score:
            return self.home_team
        if self.away_score > self.home_score:
            return self.away_team
        return None


@dataclass
class SportsResult:
    league: SportsLeague
    games: list[SportsGame]
    source: str  # "ESPN", "Web Search"
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.games


@dataclass
class CalendarEvent:
    event_id: str
    title: str
    start: datetime
    end: datetime
    is_all_day: bool = False
    location: str | None = None
    notes: str | None = None
    calendar_name: str = ""


@dataclass
class ReminderItem:
    reminder_id: str
    title: str
    due: datetime | None = None
    is_completed: bool = False
    priority: int = 0  # 0 none, 1 high, 5 medium, 9 low
    notes: str | None = None
    list_name: str = ""


@dataclass
class DailyForecast:
    day_of_week: str
    high: str
    low: str
    condition: str
    precipitation_chance: str = "0%"


@dataclass
class WeatherSnapshot:
    location: str
    temperature: str
    feels_like: str
    condition: str
    humidity: str
    wind: str
    daily: list[DailyForecast] = field(default_factory=list)
