"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from augment_engine.config.settings import Settings


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDateClock:
    """Wall clock under test control."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def tmp_dir():
    """Create a temporary directory."""
    return tempfile.mkdtemp()


@pytest.fixture
def settings(tmp_dir):
    """Test settings with temp paths."""
    return Settings(
        google_api_key="",
        settings_db_path=str(Path(tmp_dir) / "augment.db"),
        calendar_db_path=str(Path(tmp_dir) / "calendar.db"),
        default_location="",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def date_clock():
    return FakeDateClock(datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc))
