"""Idempotent database schema creation."""

from __future__ import annotations

from pathlib import Path

import aiosqlite

SETTINGS_TABLE = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

USAGE_TABLE = """
CREATE TABLE IF NOT EXISTS search_usage (
    month_key TEXT PRIMARY KEY,
    count INTEGER NOT NULL DEFAULT 0
)
"""


async def initialize_settings_db(db_path: str) -> None:
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    async with aiosqlite.connect(db_path) as db:
        await db.execute(SETTINGS_TABLE)
        await db.execute(USAGE_TABLE)
        await db.commit()


EVENTS_TABLE = """
CREATE TABLE IF NOT EXISTS events (
    event_id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    start_at TEXT NOT NULL,
    end_at TEXT NOT NULL,
    is_all_day INTEGER NOT NULL DEFAULT 0,
    location TEXT,
    notes TEXT,
    calendar_name TEXT NOT NULL DEFAULT ''
)
"""

EVENTS_START_INDEX = """
CREATE INDEX IF NOT EXISTS idx_events_start ON events(start_at)
"""

REMINDERS_TABLE = """
CREATE TABLE IF NOT EXISTS reminders (
    reminder_id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    due TEXT,
    is_completed INTEGER NOT NULL DEFAULT 0,
    priority INTEGER NOT NULL DEFAULT 0,
    notes TEXT,
    list_name TEXT NOT NULL DEFAULT ''
)
"""


async def initialize_calendar_db(db_path: str) -> None:
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    async with aiosqlite.connect(db_path) as db:
        await db.execute(EVENTS_TABLE)
        await db.execute(EVENTS_START_INDEX)
        await db.execute(REMINDERS_TABLE)
        await db.commit()
