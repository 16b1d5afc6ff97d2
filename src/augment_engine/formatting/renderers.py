"""Normalize domain data into ExternalContext and render one line per row."""

from __future__ import annotations

from datetime import datetime

from augment_engine.models.domain import (
    CalendarEvent,
    CalendarTimeRange,
    ContextCategory,
    ContextItem,
    ExternalContext,
    QueryDomain,
    ReminderItem,
    SearchResult,
    SportsGame,
    SportsResult,
    WeatherSnapshot,
)
from augment_engine.sports.leagues import GameStatus

_ANSWER_TYPE_CATEGORY = {
    "faq": ContextCategory.FAQ,
    "infobox": ContextCategory.DIRECT_ANSWER,
    "news": ContextCategory.NEWS,
    "location": ContextCategory.LOCATION,
    "discussion": ContextCategory.DISCUSSION,
    "web": ContextCategory.GENERAL,
}

_RANGE_LABELS = {
    CalendarTimeRange.TODAY: "today",
    CalendarTimeRange.TOMORROW: "tomorrow",
    CalendarTimeRange.THIS_WEEK: "this week",
}


def render_game_line(game: SportsGame) -> str:
    if game.status == GameStatus.POSTPONED:
        return f"{game.away_team} vs {game.home_team} — POSTPONED"
    if game.status == GameStatus.SCHEDULED or not game.has_scores:
        return f"{game.away_team} vs {game.home_team} — {game.status_detail}"

    score = f"{game.away_team} {game.away_score} - {game.home_score} {game.home_team}"
    if game.status == GameStatus.FINAL:
        return f"{score} (FINAL)"
    return f"{score} ({game.status_detail or game.status.value.upper()})"


def format_clock_time(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def render_event_line(event: CalendarEvent) -> str:
    when = "All Day" if event.is_all_day else format_clock_time(event.start)
    line = f"[{when}] {event.title}"
    if event.location:
        line += f" @ {event.location}"
    return line


def relative_time(moment: datetime, now: datetime) -> str:
    """Describe ``moment`` relative to ``now``: "in 3 hours", "2 days ago"."""
    seconds = int((moment - now).total_seconds())
    future = seconds >= 0
    seconds = abs(seconds)

    if seconds < 60:
        return "now"
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            amount = seconds // size
            label = f"{amount} {unit}" + ("s" if amount != 1 else "")
            return f"in {label}" if future else f"{label} ago"
    return "now"


def render_reminder_line(reminder: ReminderItem, now: datetime) -> str:
    line = reminder.title
    if reminder.due is not None:
        line += f" (due {relative_time(reminder.due, now)})"
    if reminder.priority == 1:
        line += " [high priority]"
    return line


def sports_context(result: SportsResult) -> ExternalContext:
    name = result.league.display_name
    if result.is_empty:
        items = [ContextItem(ContextCategory.DATA, name, f"No {name} games found.", result.source)]
    else:
        items = [
            ContextItem(ContextCategory.DATA, name, render_game_line(game), result.source)
            for game in result.games
        ]
    return ExternalContext(
        domain=QueryDomain.SPORTS,
        succeeded=True,
        items=items,
        source_labels=[result.source],
        heading=f"{name} Scores",
        result_count=len(result.games),
    )


def calendar_context(
    events: list[CalendarEvent], time_range: CalendarTimeRange
) -> ExternalContext:
    label = _RANGE_LABELS[time_range]
    if events:
        ordered = sorted(events, key=lambda e: e.start)
        items = [
            ContextItem(ContextCategory.DATA, e.title, render_event_line(e), "Calendar")
            for e in ordered
        ]
    else:
        items = [ContextItem(ContextCategory.DATA, "", "No events scheduled.", "Calendar")]
    return ExternalContext(
        domain=QueryDomain.CALENDAR,
        succeeded=True,
        items=items,
        source_labels=["Calendar"],
        heading=f"Calendar - {label}",
        result_count=len(events),
    )


def reminders_context(reminders: list[ReminderItem], now: datetime) -> ExternalContext:
    pending = [r for r in reminders if not r.is_completed]
    if pending:
        items = [
            ContextItem(ContextCategory.DATA, r.title, render_reminder_line(r, now), "Reminders")
            for r in pending
        ]
        heading = f"Reminders - {len(pending)} pending"
    else:
        items = [ContextItem(ContextCategory.DATA, "", "No pending reminders.", "Reminders")]
        heading = "Reminders"
    return ExternalContext(
        domain=QueryDomain.REMINDERS,
        succeeded=True,
        items=items,
        source_labels=["Reminders"],
        heading=heading,
        result_count=len(pending),
    )


def reminder_created_context(title: str, time_hint: str | None) -> ExternalContext:
    text = f"Created reminder: {title}"
    if time_hint:
        text += f" ({time_hint})"
    return ExternalContext(
        domain=QueryDomain.REMINDERS,
        succeeded=True,
        items=[ContextItem(ContextCategory.DATA, title, text, "Reminders")],
        source_labels=["Reminders"],
        heading="Reminder created",
        result_count=1,
    )


def weather_context(snapshot: WeatherSnapshot, source: str) -> ExternalContext:
    lines = [
        f"Temperature: {snapshot.temperature} (feels like {snapshot.feels_like})",
        f"Conditions: {snapshot.condition}",
        f"Humidity: {snapshot.humidity} | Wind: {snapshot.wind}",
    ]
    for day in snapshot.daily[:7]:
        line = f"{day.day_of_week}: {day.high}/{day.low} - {day.condition}"
        if day.precipitation_chance != "0%":
            line += f" ({day.precipitation_chance} precip)"
        lines.append(line)
    return ExternalContext(
        domain=QueryDomain.WEATHER,
        succeeded=True,
        items=[ContextItem(ContextCategory.DATA, snapshot.location, line, source) for line in lines],
        source_labels=[source],
        heading=f"Current weather - {snapshot.location}",
        result_count=1,
    )


def search_context(results: list[SearchResult], max_sources: int = 3) -> ExternalContext:
    items = []
    for r in results:
        category = _ANSWER_TYPE_CATEGORY.get(r.answer_type, ContextCategory.GENERAL)
        if r.is_instant_answer and category == ContextCategory.GENERAL:
            category = ContextCategory.DIRECT_ANSWER
        items.append(ContextItem(category, r.title, r.description, r.url))
    return ExternalContext(
        domain=QueryDomain.GENERAL,
        succeeded=True,
        items=items,
        source_labels=extract_sources(results, max_sources),
        heading="Search results",
        result_count=len(results),
    )


def extract_sources(results: list[SearchResult], max_sources: int = 3) -> list[str]:
    return [r.url for r in results[:max_sources]]
