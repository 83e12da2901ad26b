"""Per-year observation fetching with caching.

Data for a year is served from one of three places:
  - FreshnessCache: in-process, for the current and previous year, valid for
    a short window (1 hour) so late upstream revisions still show up.
  - CacheStore: permanent files, for every year before the previous one.
    Those years no longer change upstream.
  - Meteostat: on any miss. Results go back into whichever cache owns the
    year.

``YearlyFetcher.fetch`` never raises; failures degrade to an empty list so
one bad year doesn't sink the whole aggregation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

import requests

from winter_tracker.datasources.meteostat import DEFAULT_API_HOST, DEFAULT_STATION, fetch_daily
from winter_tracker.schemas import DailyObservation, dump_observations, parse_observations
from winter_tracker.store import CacheStore, yearly_key

if TYPE_CHECKING:
    from winter_tracker.config import Settings

logger = logging.getLogger(__name__)

#: Earliest year the fetcher will request.
MIN_YEAR = 2000

DEFAULT_FRESHNESS_TTL = timedelta(hours=1)

Clock = Callable[[], datetime]
FetchFn = Callable[..., list[DailyObservation]]


@dataclass(frozen=True)
class FreshEntry:
    """A year's observations and when they were fetched."""

    value: list[DailyObservation]
    fetched_at: datetime


class FreshnessCache:
    """Short-lived in-memory cache for years that may still change upstream.

    Entries are keyed by year and expire ``ttl`` after they were stored.
    Not locked: concurrent writers simply overwrite each other.
    """

    def __init__(self, ttl: timedelta = DEFAULT_FRESHNESS_TTL, clock: Clock = datetime.now) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[int, FreshEntry] = {}

    def get(self, year: int) -> list[DailyObservation] | None:
        """Return the year's observations if stored within the TTL."""
        entry = self._entries.get(year)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self.ttl:
            logger.debug("In-memory data for %s is stale, dropping", year)
            self._entries.pop(year, None)
            return None
        return entry.value

    def put(self, year: int, value: list[DailyObservation]) -> None:
        self._entries[year] = FreshEntry(value=value, fetched_at=self._clock())


class YearlyFetcher:
    """Fetch a calendar year of daily observations for one station."""

    def __init__(
        self,
        store: CacheStore,
        *,
        api_key: str,
        api_host: str = DEFAULT_API_HOST,
        station: str = DEFAULT_STATION,
        freshness: FreshnessCache | None = None,
        clock: Clock = datetime.now,
        fetch_fn: FetchFn = fetch_daily,
    ) -> None:
        self.store = store
        self.api_key = api_key
        self.api_host = api_host
        self.station = station
        self._clock = clock
        self.freshness = freshness if freshness is not None else FreshnessCache(clock=clock)
        self._fetch_fn = fetch_fn

    @classmethod
    def from_settings(cls, settings: Settings, store: CacheStore) -> YearlyFetcher:
        """Build a fetcher wired to the configured station and credentials."""
        return cls(
            store,
            api_key=settings.rapidapi_key,
            api_host=settings.rapidapi_host,
            station=settings.station,
            freshness=FreshnessCache(ttl=timedelta(seconds=settings.freshness_ttl_seconds)),
        )

    def is_recent(self, year: int) -> bool:
        """Whether ``year`` is the current or previous year (still mutable upstream)."""
        return year >= self._clock().year - 1

    def fetch(self, year: int) -> list[DailyObservation]:
        """
        Return the daily observations for ``year``.

        Args:
            year: Calendar year, 2000 through the current year.

        Returns:
            Observations for the year, or an empty list if the year is out of
            range or every source failed.
        """
        current_year = self._clock().year
        if not isinstance(year, int) or isinstance(year, bool):
            logger.error("Invalid year: %r", year)
            return []
        if year < MIN_YEAR or year > current_year:
            logger.error("Year %s outside %s..%s", year, MIN_YEAR, current_year)
            return []

        recent = self.is_recent(year)
        if recent:
            fresh = self.freshness.get(year)
            if fresh is not None:
                logger.debug("Using in-memory data for year %s", year)
                return fresh
        else:
            cached = self.store.read(yearly_key(year), parse=parse_observations)
            if cached is not None:
                logger.debug("Cache hit for year %s", year)
                return cached

        logger.info("Fetching year %s from Meteostat (station %s)", year, self.station)
        try:
            observations = self._fetch_fn(
                date(year, 1, 1),
                date(year, 12, 31),
                self.station,
                api_key=self.api_key,
                api_host=self.api_host,
            )
        except (requests.RequestException, ValueError) as exc:
            logger.error("Meteostat call failed for year %s: %s", year, exc)
            return []

        if recent:
            self.freshness.put(year, observations)
        else:
            self.store.write(yearly_key(year), dump_observations(observations))
        return observations
