"""SQLite-backed monthly search counter, API key and feature toggle."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import aiosqlite

from augment_engine.models.domain import UsageRecord
from augment_engine.observability.logger import get_logger
from augment_engine.storage.migrations import initialize_settings_db

logger = get_logger("settings_store")

API_KEY = "brave_api_key"
ENABLED_KEY = "web_search_enabled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SQLiteSettingsStore:
    def __init__(
        self,
        db_path: str,
        monthly_limit: int = 2000,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._db_path = db_path
        self._monthly_limit = monthly_limit
        self._clock = clock

    async def initialize(self) -> None:
        await initialize_settings_db(self._db_path)

    @property
    def monthly_limit(self) -> int:
        return self._monthly_limit

    def current_month_key(self) -> str:
        return self._clock().strftime("%Y-%m")

    # Usage

    async def usage(self) -> UsageRecord:
        month_key = self.current_month_key()
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(
                "SELECT count FROM search_usage WHERE month_key = ?", (month_key,)
            ) as cursor:
                row = await cursor.fetchone()
        return UsageRecord(month_key=month_key, count=row[0] if row else 0)

    async def searches_this_month(self) -> int:
        return (await self.usage()).count

    async def remaining_searches(self) -> int:
        return max(0, self._monthly_limit - await self.searches_this_month())

    async def has_quota_remaining(self) -> bool:
        return await self.searches_this_month() < self._monthly_limit

    async def record_search(self) -> int:
        """Increment this month's counter and return the new count."""
        month_key = self.current_month_key()
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(
                "INSERT INTO search_usage (month_key, count) VALUES (?, 1) "
                "ON CONFLICT(month_key) DO UPDATE SET count = count + 1 "
                "RETURNING count",
                (month_key,),
            ) as cursor:
                row = await cursor.fetchone()
            await db.commit()
        count = row[0]
        logger.info("search_recorded", month_key=month_key, count=count, limit=self._monthly_limit)
        return count

    # API key

    async def get_api_key(self) -> str | None:
        value = await self._get(API_KEY)
        return value or None

    async def set_api_key(self, key: str) -> None:
        key = key.strip()
        if not key:
            await self.clear_api_key()
            return
        await self._set(API_KEY, key)
        logger.info("api_key_set")

    async def clear_api_key(self) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("DELETE FROM settings WHERE key = ?", (API_KEY,))
            await db.commit()
        logger.info("api_key_cleared")

    async def has_api_key(self) -> bool:
        return await self.get_api_key() is not None

    # Feature toggle

    async def is_enabled(self) -> bool:
        value = await self._get(ENABLED_KEY)
        return value is None or value == "1"

    async def set_enabled(self, enabled: bool) -> None:
        await self._set(ENABLED_KEY, "1" if enabled else "0")
        logger.info("web_search_toggled", enabled=enabled)

    async def _get(self, key: str) -> str | None:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT value FROM settings WHERE key = ?", (key,)) as cursor:
                row = await cursor.fetchone()
        return row[0] if row else None

    async def _set(self, key: str, value: str) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            await db.commit()
