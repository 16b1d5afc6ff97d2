"""Protocol for on-device calendar and reminder stores."""

from __future__ import annotations

from typing import Protocol

from augment_engine.models.domain import CalendarEvent, CalendarTimeRange, ReminderItem


class CalendarStore(Protocol):
    async def request_calendar_access(self) -> bool: ...

    async def request_reminder_access(self) -> bool: ...

    async def fetch_events(self, time_range: CalendarTimeRange) -> list[CalendarEvent]: ...

    async def fetch_reminders(self) -> list[ReminderItem]: ...

    async def create_reminder(self, title: str, due_hint: str | None = None) -> bool: ...
