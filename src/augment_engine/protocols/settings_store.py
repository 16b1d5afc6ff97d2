"""Protocol for the usage counter and search settings."""

from __future__ import annotations

from typing import Protocol


class SettingsStore(Protocol):
    async def searches_this_month(self) -> int: ...

    async def remaining_searches(self) -> int: ...

    async def has_quota_remaining(self) -> bool: ...

    async def record_search(self) -> int: ...

    async def get_api_key(self) -> str | None: ...

    async def set_api_key(self, key: str) -> None: ...

    async def clear_api_key(self) -> None: ...

    async def has_api_key(self) -> bool: ...

    async def is_enabled(self) -> bool: ...

    async def set_enabled(self, enabled: bool) -> None: ...
