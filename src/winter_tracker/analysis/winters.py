"""Winter definitions and per-winter temperature averages.

A winter is labelled by the year it ends in (winter 2025 = Dec 2024 → Mar 2025).

- Meteorological: Dec 1 of the previous year through Feb 28, fixed (no leap
  day handling).
- Astronomical: December solstice through March equinox. The exact local
  timestamps come from ``WINTER_DATES``; the table stops at 2025 and later
  winters are left out rather than extrapolated.

Observation dates are compared as local midnight against these bounds, so a
day counts for the astronomical winter only if it starts at or after the
solstice instant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum
from statistics import fmean
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from winter_tracker.schemas import DailyObservation

# Solstice → equinox, local time, keyed by the year the winter ends in
WINTER_DATES: dict[int, tuple[str, str]] = {
    2001: ("2000-12-21 08:37", "2001-03-20 02:35"),
    2002: ("2001-12-21 14:21", "2002-03-20 08:31"),
    2003: ("2002-12-21 20:14", "2003-03-20 14:16"),
    2004: ("2003-12-22 02:04", "2004-03-20 20:00"),
    2005: ("2004-12-21 07:42", "2005-03-20 01:49"),
    2006: ("2005-12-21 13:35", "2006-03-20 07:34"),
    2007: ("2006-12-21 19:22", "2007-03-20 13:26"),
    2008: ("2007-12-22 01:08", "2008-03-20 19:07"),
    2009: ("2008-12-21 07:04", "2009-03-20 01:48"),
    2010: ("2009-12-21 12:47", "2010-03-20 07:44"),
    2011: ("2010-12-21 18:38", "2011-03-20 13:32"),
    2012: ("2011-12-22 00:30", "2012-03-20 19:21"),
    2013: ("2012-12-21 06:12", "2013-03-20 01:14"),
    2014: ("2013-12-21 12:11", "2014-03-20 07:02"),
    2015: ("2014-12-21 18:03", "2015-03-20 12:57"),
    2016: ("2015-12-22 00:48", "2016-03-20 18:45"),
    2017: ("2016-12-21 05:44", "2017-03-20 00:30"),
    2018: ("2017-12-21 11:28", "2018-03-20 06:28"),
    2019: ("2018-12-21 17:23", "2019-03-20 12:15"),
    2020: ("2019-12-21 23:19", "2020-03-20 18:58"),
    2021: ("2020-12-21 05:02", "2021-03-19 23:50"),
    2022: ("2021-12-21 10:59", "2022-03-20 05:37"),
    2023: ("2022-12-21 16:48", "2023-03-20 11:33"),
    2024: ("2023-12-21 22:27", "2024-03-20 17:24"),
    2025: ("2024-12-21 04:12", "2025-03-20 13:16"),
}

_TABLE_FORMAT = "%Y-%m-%d %H:%M"


class WinterKind(StrEnum):
    """The two competing definitions of winter."""

    METEOROLOGICAL = "meteorological"
    ASTRONOMICAL = "astronomical"


@dataclass(frozen=True)
class WinterWindow:
    """Closed time interval covered by one winter."""

    year: int
    kind: WinterKind
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def meteorological_window(year: int) -> WinterWindow:
    """Dec 1 of ``year - 1`` through Feb 28 of ``year``."""
    return WinterWindow(
        year=year,
        kind=WinterKind.METEOROLOGICAL,
        start=datetime(year - 1, 12, 1),
        end=datetime(year, 2, 28),
    )


def astronomical_window(year: int) -> WinterWindow | None:
    """Solstice to equinox for ``year``, or None if it isn't in the table."""
    bounds = WINTER_DATES.get(year)
    if bounds is None:
        return None
    start, end = bounds
    return WinterWindow(
        year=year,
        kind=WinterKind.ASTRONOMICAL,
        start=datetime.strptime(start, _TABLE_FORMAT),
        end=datetime.strptime(end, _TABLE_FORMAT),
    )


def observation_moment(day: date) -> datetime:
    """Local midnight of an observation date."""
    return datetime.combine(day, time.min)


def average_in_window(
    observations: Iterable[DailyObservation],
    window: WinterWindow,
    now: datetime,
) -> float | None:
    """Mean ``tavg`` of observations inside ``window`` and not after ``now``.

    Days with no reading are skipped. Returns None when nothing matches.
    """
    temps = [
        obs.tavg
        for obs in observations
        if obs.tavg is not None
        and window.contains(moment := observation_moment(obs.date))
        and moment <= now
    ]
    if not temps:
        return None
    return fmean(temps)


def compute_winter_averages(
    observations: list[DailyObservation],
    now: datetime,
) -> tuple[dict[int, float], dict[int, float]]:
    """Average every tabulated winter under both definitions.

    Winters whose meteorological start is still in the future are skipped,
    and a winter with no matching observations is left out of its map.

    Returns:
        ``(meteorological, astronomical)`` maps of year → mean °C.
    """
    meteorological: dict[int, float] = {}
    astronomical: dict[int, float] = {}

    for year in WINTER_DATES:
        meteo = meteorological_window(year)
        if meteo.start > now:
            continue

        meteo_avg = average_in_window(observations, meteo, now)
        if meteo_avg is not None:
            meteorological[year] = meteo_avg

        astro = astronomical_window(year)
        if astro is not None:
            astro_avg = average_in_window(observations, astro, now)
            if astro_avg is not None:
                astronomical[year] = astro_avg

    return meteorological, astronomical


def latest_winter_year(today: date) -> int:
    """The most recent tabulated winter that has started by ``today``.

    Falls back to the first tabulated winter if none has started.
    """
    started = [
        year
        for year in WINTER_DATES
        if meteorological_window(year).start <= observation_moment(today)
    ]
    return max(started) if started else min(WINTER_DATES)
