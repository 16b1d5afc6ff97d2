"""Orchestrator states observed by the UI.

Each state is a frozen dataclass; ``SearchState`` is the union of all of
them, so a UI can ``match`` on the concrete class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from augment_engine.models.domain import ConfirmationType


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class DetectingIntent:
    pass


@dataclass(frozen=True)
class AwaitingConfirmation:
    query: str
    confirmation_type: ConfirmationType


@dataclass(frozen=True)
class Sanitizing:
    pass


@dataclass(frozen=True)
class Searching:
    query: str


@dataclass(frozen=True)
class FetchingWeather:
    location: str


@dataclass(frozen=True)
class FetchingCalendar:
    pass


@dataclass(frozen=True)
class FetchingReminders:
    pass


@dataclass(frozen=True)
class FetchingSports:
    league: str


@dataclass(frozen=True)
class Complete:
    result_count: int


@dataclass(frozen=True)
class WeatherComplete:
    pass


@dataclass(frozen=True)
class CalendarComplete:
    event_count: int


@dataclass(frozen=True)
class RemindersComplete:
    reminder_count: int


@dataclass(frozen=True)
class SportsComplete:
    game_count: int


@dataclass(frozen=True)
class Failed:
    reason: str


@dataclass(frozen=True)
class Skipped:
    reason: str


SearchState = Union[
    Idle,
    DetectingIntent,
    AwaitingConfirmation,
    Sanitizing,
    Searching,
    FetchingWeather,
    FetchingCalendar,
    FetchingReminders,
    FetchingSports,
    Complete,
    WeatherComplete,
    CalendarComplete,
    RemindersComplete,
    SportsComplete,
    Failed,
    Skipped,
]

FETCHING_STATES = (Searching, FetchingWeather, FetchingCalendar, FetchingReminders, FetchingSports)
TERMINAL_STATES = (
    Complete,
    WeatherComplete,
    CalendarComplete,
    RemindersComplete,
    SportsComplete,
    Failed,
    Skipped,
)
