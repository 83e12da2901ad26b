"""Shared pytest fixtures for winter tracker tests."""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest

from winter_tracker.config import get_settings
from winter_tracker.schemas import DailyObservation
from winter_tracker.store import CacheStore

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

#: "Now" for tests that need a fixed clock: current year 2026, previous 2025.
NOW = datetime(2026, 10, 17, 12, 0)


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def obs(day: str, tavg: float | None, **extra: Any) -> DailyObservation:
    """Build an observation from an ISO date string."""
    return DailyObservation(date=date.fromisoformat(day), tavg=tavg, **extra)


def write_json(path: Path, payload: Any) -> None:
    """Write a raw JSON cache file, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload))


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop the cached Settings so env changes in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tmp_path: Path) -> CacheStore:
    return CacheStore(static_dir=tmp_path / "cache", dynamic_dir=tmp_path / "dynamic-cache")
