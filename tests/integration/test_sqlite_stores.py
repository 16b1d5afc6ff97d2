"""Integration tests for the SQLite settings and calendar stores."""

import asyncio
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from augment_engine.models.domain import CalendarEvent, CalendarTimeRange
from augment_engine.storage.sqlite_calendar_store import SQLiteCalendarStore, resolve_due_hint
from augment_engine.storage.sqlite_settings_store import SQLiteSettingsStore

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class MutableClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return MutableClock(NOW)


@pytest.fixture
async def settings_store(clock):
    tmp = tempfile.mkdtemp()
    store = SQLiteSettingsStore(str(Path(tmp) / "nested" / "augment.db"), monthly_limit=3, clock=clock)
    await store.initialize()
    return store


@pytest.fixture
async def calendar_store(clock):
    tmp = tempfile.mkdtemp()
    store = SQLiteCalendarStore(str(Path(tmp) / "calendar.db"), clock=clock)
    await store.initialize()
    return store


# Settings store


async def test_fresh_store_defaults(settings_store):
    assert await settings_store.is_enabled()
    assert await settings_store.get_api_key() is None
    assert not await settings_store.has_api_key()
    assert await settings_store.searches_this_month() == 0
    assert await settings_store.remaining_searches() == 3


async def test_api_key_round_trip(settings_store):
    await settings_store.set_api_key("  brave-123 ")
    assert await settings_store.get_api_key() == "brave-123"

    await settings_store.set_api_key("brave-456")
    assert await settings_store.get_api_key() == "brave-456"

    await settings_store.clear_api_key()
    assert not await settings_store.has_api_key()


async def test_blank_api_key_clears(settings_store):
    await settings_store.set_api_key("brave-123")
    await settings_store.set_api_key("   ")
    assert await settings_store.get_api_key() is None


async def test_toggle_persists_across_instances(settings_store, clock):
    await settings_store.set_enabled(False)

    reopened = SQLiteSettingsStore(settings_store._db_path, clock=clock)
    await reopened.initialize()

    assert not await reopened.is_enabled()


async def test_quota_exhaustion(settings_store):
    counts = [await settings_store.record_search() for _ in range(3)]

    assert counts == [1, 2, 3]
    assert await settings_store.remaining_searches() == 0
    assert not await settings_store.has_quota_remaining()

    await settings_store.record_search()
    assert await settings_store.remaining_searches() == 0


async def test_new_month_resets_count(settings_store, clock):
    await settings_store.record_search()
    await settings_store.record_search()

    clock.now = datetime(2026, 4, 1, 0, 0, tzinfo=timezone.utc)

    assert settings_store.current_month_key() == "2026-04"
    assert await settings_store.searches_this_month() == 0
    assert await settings_store.has_quota_remaining()

    clock.now = NOW
    assert await settings_store.searches_this_month() == 2


async def test_concurrent_record_search_loses_no_updates(settings_store):
    counts = await asyncio.gather(*(settings_store.record_search() for _ in range(10)))

    assert sorted(counts) == list(range(1, 11))
    assert await settings_store.searches_this_month() == 10


# Calendar store


def _event(event_id: str, title: str, start: datetime, hours: int = 1) -> CalendarEvent:
    return CalendarEvent(event_id, title, start, start + timedelta(hours=hours), location="HQ")


async def test_fetch_events_by_window(calendar_store):
    await calendar_store.add_event(_event("1", "Lunch", NOW))
    await calendar_store.add_event(_event("2", "Dentist", NOW + timedelta(days=1)))
    await calendar_store.add_event(_event("3", "Conference", NOW + timedelta(days=4)))
    await calendar_store.add_event(_event("4", "Last month", NOW - timedelta(days=30)))

    today = await calendar_store.fetch_events(CalendarTimeRange.TODAY)
    tomorrow = await calendar_store.fetch_events(CalendarTimeRange.TOMORROW)
    week = await calendar_store.fetch_events(CalendarTimeRange.THIS_WEEK)

    assert [e.title for e in today] == ["Lunch"]
    assert [e.title for e in tomorrow] == ["Dentist"]
    assert [e.title for e in week] == ["Lunch", "Dentist", "Conference"]
    assert today[0].start == NOW
    assert today[0].location == "HQ"


async def test_event_spanning_midnight_is_in_both_days(calendar_store):
    late = datetime(2026, 3, 10, 23, 0, tzinfo=timezone.utc)
    await calendar_store.add_event(_event("1", "Launch party", late, hours=3))

    assert len(await calendar_store.fetch_events(CalendarTimeRange.TODAY)) == 1
    assert len(await calendar_store.fetch_events(CalendarTimeRange.TOMORROW)) == 1


async def test_create_and_list_reminders(calendar_store):
    await calendar_store.create_reminder("call mom", "tomorrow")
    await calendar_store.create_reminder("water plants")
    await calendar_store.create_reminder("stand up", "in 2 hours")

    reminders = await calendar_store.fetch_reminders()

    assert [r.title for r in reminders] == ["stand up", "call mom", "water plants"]
    assert reminders[0].due == NOW + timedelta(hours=2)
    assert reminders[1].due == datetime(2026, 3, 11, 9, 0, tzinfo=timezone.utc)
    assert reminders[1].notes == "tomorrow"
    assert reminders[2].due is None


async def test_completed_reminders_are_hidden(calendar_store):
    await calendar_store.create_reminder("pay rent")
    [reminder] = await calendar_store.fetch_reminders()

    await calendar_store.complete_reminder(reminder.reminder_id)

    assert await calendar_store.fetch_reminders() == []


@pytest.mark.parametrize(
    "hint, expected",
    [
        (None, None),
        ("tomorrow", datetime(2026, 3, 11, 9, 0, tzinfo=timezone.utc)),
        ("next week", datetime(2026, 3, 17, 9, 0, tzinfo=timezone.utc)),
        ("tonight", datetime(2026, 3, 10, 20, 0, tzinfo=timezone.utc)),
        ("in 3 hours", datetime(2026, 3, 10, 15, 0, tzinfo=timezone.utc)),
        ("at 5pm", datetime(2026, 3, 10, 17, 0, tzinfo=timezone.utc)),
        ("at 9:30 am", datetime(2026, 3, 11, 9, 30, tzinfo=timezone.utc)),
        ("at 12am", datetime(2026, 3, 11, 0, 0, tzinfo=timezone.utc)),
        ("at 25", None),
        ("someday", None),
    ],
)
def test_resolve_due_hint(hint, expected):
    assert resolve_due_hint(hint, NOW) == expected
