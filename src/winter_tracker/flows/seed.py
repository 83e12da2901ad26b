"""
Prefect flow for pre-seeding the static cache.

Downloads every year that can no longer change upstream (older than the
previous year) and is not cached yet, and writes it into the static cache
directory so deployments ship with historical data and the API only has to
call Meteostat for the current and previous year.

Run locally:
    python -m winter_tracker.flows.seed
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

import requests
from prefect import flow, task

from winter_tracker.api.app import build_store
from winter_tracker.config import get_settings
from winter_tracker.datasources import meteostat
from winter_tracker.schemas import dump_observations, parse_observations
from winter_tracker.store import yearly_key

if TYPE_CHECKING:
    from pathlib import Path

    from winter_tracker.store import CacheStore


def get_store() -> CacheStore:
    """Cache store for the configured environment."""
    return build_store(get_settings())


def last_immutable_year(today: date | None = None) -> int:
    """Latest year that is no longer revised upstream (current year - 2)."""
    today = today or date.today()
    return today.year - 2


@task(name="fetch-year")
def fetch_year(year: int, station: str, api_key: str, api_host: str) -> list[dict[str, Any]]:
    """Fetch one calendar year of daily observations from Meteostat."""
    observations = meteostat.fetch_daily(
        date(year, 1, 1),
        date(year, 12, 31),
        station,
        api_key=api_key,
        api_host=api_host,
    )
    return dump_observations(observations)


@task(name="save-year")
def save_year(year: int, rows: list[dict[str, Any]]) -> Path | None:
    """Write a year into the static cache."""
    return get_store().write_static(yearly_key(year), rows)


@flow(name="seed-cache", log_prints=True)
def seed_cache(start_year: int | None = None, end_year: int | None = None) -> dict[str, int]:
    """
    Seed the static cache with every missing historical year.

    ``end_year`` is capped at the last immutable year; the current and
    previous year are never written to the static cache.
    """
    settings = get_settings()
    store = get_store()
    start = start_year if start_year is not None else settings.start_year
    last = last_immutable_year()
    end = min(end_year, last) if end_year is not None else last

    results = {"seeded": 0, "skipped": 0, "failed": 0}
    for year in range(start, end + 1):
        if store.has(yearly_key(year), parse=parse_observations):
            print(f"Year {year} already cached, skipping.")
            results["skipped"] += 1
            continue

        print(f"Fetching {year} for station {settings.station}...")
        try:
            rows = fetch_year(year, settings.station, settings.rapidapi_key, settings.rapidapi_host)
        except (requests.RequestException, ValueError) as exc:
            print(f"Failed to fetch {year}: {exc}")
            results["failed"] += 1
            continue

        path = save_year(year, rows)
        if path is None:
            results["failed"] += 1
            continue
        print(f"Saved {len(rows)} days for {year} to {path}")
        results["seeded"] += 1

    return results


if __name__ == "__main__":
    result = seed_cache()
    print(f"Flow complete: {result}")
