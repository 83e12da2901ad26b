"""Aggregate every year of observations into the winter temperature payload."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from winter_tracker.analysis.winters import compute_winter_averages
from winter_tracker.errors import InvalidYearRangeError, NoDataAvailableError
from winter_tracker.schemas import DailyObservation, TemperaturePayload, parse_observations
from winter_tracker.store import yearly_key

if TYPE_CHECKING:
    from winter_tracker.store import CacheStore
    from winter_tracker.yearly import YearlyFetcher

logger = logging.getLogger(__name__)

#: First winter with tabulated solstice/equinox dates.
DEFAULT_START_YEAR = 2001


def _is_year(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def collect_daily_data(
    fetcher: YearlyFetcher,
    store: CacheStore,
    start_year: int,
    end_year: int,
) -> list[DailyObservation]:
    """Concatenate every year's observations in chronological order.

    Historical years go straight to the fetcher, which owns their cache
    lookup. Recent years are served from the store when an entry exists
    there (e.g. a pre-seeded deployment), otherwise from the fetcher's
    freshness window. Years are fetched one after another.
    """
    daily: list[DailyObservation] = []
    for year in range(start_year, end_year + 1):
        if fetcher.is_recent(year):
            cached = store.read(yearly_key(year), parse=parse_observations)
            if cached is not None:
                daily.extend(cached)
                continue

        year_data = fetcher.fetch(year)
        if year_data:
            daily.extend(year_data)
    return daily


def build_temperature_payload(
    fetcher: YearlyFetcher,
    store: CacheStore,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int | None = None,
    now: datetime | None = None,
) -> TemperaturePayload:
    """
    Build the meteorological and astronomical winter averages.

    Args:
        fetcher: Source for years missing from the cache.
        store: Cache consulted before the fetcher.
        start_year: First calendar year to load.
        end_year: Last calendar year to load (defaults to the current year).
        now: Reference time; observations after it are ignored.

    Returns:
        Both average maps plus the combined daily series.

    Raises:
        InvalidYearRangeError: Year bounds aren't integers or are reversed.
        NoDataAvailableError: No observations came back for any year.
    """
    now = now or datetime.now()
    end_year = now.year if end_year is None else end_year

    if not _is_year(start_year) or not _is_year(end_year) or start_year > end_year:
        logger.error("Invalid year range: start_year=%r, end_year=%r", start_year, end_year)
        raise InvalidYearRangeError

    daily = collect_daily_data(fetcher, store, start_year, end_year)
    if not daily:
        logger.error("No data found for %s..%s", start_year, end_year)
        raise NoDataAvailableError

    meteorological, astronomical = compute_winter_averages(daily, now)
    logger.info(
        "Aggregated %d observations into %d meteorological / %d astronomical winters",
        len(daily),
        len(meteorological),
        len(astronomical),
    )
    return TemperaturePayload(
        meteorological=meteorological,
        astronomical=astronomical,
        daily_data=daily,
    )
