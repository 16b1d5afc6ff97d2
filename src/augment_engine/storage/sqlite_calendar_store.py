"""SQLite-backed local calendar and reminders implementing CalendarStore."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, time, timedelta, timezone
from uuid import uuid4

import aiosqlite

from augment_engine.models.domain import CalendarEvent, CalendarTimeRange, ReminderItem
from augment_engine.observability.logger import get_logger
from augment_engine.storage.migrations import initialize_calendar_db

logger = get_logger("calendar_store")

_IN_HOURS = re.compile(r"in (\d+) hours?")
_AT_TIME = re.compile(r"at (\d{1,2})(?::(\d{2}))?\s*(am|pm)?")

# Hour of day used when a hint names a part of the day
_DAYPART_HOURS = {
    "this morning": 9,
    "this afternoon": 14,
    "this evening": 18,
    "tonight": 20,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat()


def resolve_due_hint(hint: str | None, now: datetime) -> datetime | None:
    """Turn a reminder time hint ("tomorrow", "in 2 hours") into a due time."""
    if not hint:
        return None
    hint = hint.lower().strip()
    midnight = datetime.combine(now.date(), time(), tzinfo=now.tzinfo)

    if hint == "tomorrow":
        return midnight + timedelta(days=1, hours=9)
    if hint == "next week":
        return midnight + timedelta(days=7, hours=9)
    if hint in _DAYPART_HOURS:
        return midnight + timedelta(hours=_DAYPART_HOURS[hint])

    match = _IN_HOURS.fullmatch(hint)
    if match:
        return now + timedelta(hours=int(match.group(1)))

    match = _AT_TIME.fullmatch(hint)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        suffix = match.group(3)
        if suffix == "pm" and hour < 12:
            hour += 12
        elif suffix == "am" and hour == 12:
            hour = 0
        if hour > 23 or minute > 59:
            return None
        due = midnight + timedelta(hours=hour, minutes=minute)
        return due if due > now else due + timedelta(days=1)
    return None


class SQLiteCalendarStore:
    """Local events and reminders. Access is always granted."""

    def __init__(self, db_path: str, clock: Callable[[], datetime] = _utcnow) -> None:
        self._db_path = db_path
        self._clock = clock

    async def initialize(self) -> None:
        await initialize_calendar_db(self._db_path)

    async def request_calendar_access(self) -> bool:
        return True

    async def request_reminder_access(self) -> bool:
        return True

    def window(self, time_range: CalendarTimeRange) -> tuple[datetime, datetime]:
        now = self._clock()
        midnight = datetime.combine(now.date(), time(), tzinfo=now.tzinfo)
        if time_range == CalendarTimeRange.TOMORROW:
            return midnight + timedelta(days=1), midnight + timedelta(days=2)
        if time_range == CalendarTimeRange.THIS_WEEK:
            return midnight, midnight + timedelta(days=7)
        return midnight, midnight + timedelta(days=1)

    async def add_event(self, event: CalendarEvent) -> str:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT OR REPLACE INTO events "
                "(event_id, title, start_at, end_at, is_all_day, location, notes, calendar_name) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    event.event_id,
                    event.title,
                    _to_utc(event.start),
                    _to_utc(event.end),
                    int(event.is_all_day),
                    event.location,
                    event.notes,
                    event.calendar_name,
                ),
            )
            await db.commit()
        return event.event_id

    async def fetch_events(self, time_range: CalendarTimeRange) -> list[CalendarEvent]:
        start, end = self.window(time_range)
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM events WHERE start_at < ? AND end_at > ? ORDER BY start_at",
                (_to_utc(end), _to_utc(start)),
            ) as cursor:
                rows = await cursor.fetchall()
        tz = start.tzinfo
        return [
            CalendarEvent(
                event_id=row["event_id"],
                title=row["title"],
                start=datetime.fromisoformat(row["start_at"]).astimezone(tz),
                end=datetime.fromisoformat(row["end_at"]).astimezone(tz),
                is_all_day=bool(row["is_all_day"]),
                location=row["location"],
                notes=row["notes"],
                calendar_name=row["calendar_name"],
            )
            for row in rows
        ]

    async def fetch_reminders(self) -> list[ReminderItem]:
        """Incomplete reminders, soonest due first, undated last."""
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM reminders WHERE is_completed = 0 "
                "ORDER BY due IS NULL, due, title"
            ) as cursor:
                rows = await cursor.fetchall()
        return [
            ReminderItem(
                reminder_id=row["reminder_id"],
                title=row["title"],
                due=datetime.fromisoformat(row["due"]) if row["due"] else None,
                is_completed=bool(row["is_completed"]),
                priority=row["priority"],
                notes=row["notes"],
                list_name=row["list_name"],
            )
            for row in rows
        ]

    async def create_reminder(self, title: str, due_hint: str | None = None) -> bool:
        due = resolve_due_hint(due_hint, self._clock())
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT INTO reminders (reminder_id, title, due, notes) VALUES (?, ?, ?, ?)",
                (str(uuid4()), title, _to_utc(due) if due else None, due_hint),
            )
            await db.commit()
        logger.info("reminder_created", has_due=due is not None)
        return True

    async def complete_reminder(self, reminder_id: str) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "UPDATE reminders SET is_completed = 1 WHERE reminder_id = ?", (reminder_id,)
            )
            await db.commit()
