"""Shared date helpers for renderers."""

from __future__ import annotations

from datetime import date, datetime

# Day-aligned charts place December in this year and Jan-Mar in the next.
# 2000 is a leap year so Feb 29 readings still have a slot.
NORMALIZED_DECEMBER_YEAR = 1999


def normalize_day(day: date) -> date:
    """Drop the year: map a winter day onto a fixed Dec 1999 - Mar 2000 axis."""
    year = NORMALIZED_DECEMBER_YEAR if day.month == 12 else NORMALIZED_DECEMBER_YEAR + 1
    return date(year, day.month, day.day)


def format_day(day: date) -> str:
    """e.g. ``Dec 1, 2024``."""
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def format_moment(moment: datetime) -> str:
    """``format_day`` plus the time when it isn't midnight, e.g. ``Dec 21, 2024 04:12``."""
    label = format_day(moment.date())
    if moment.hour or moment.minute:
        label += f" {moment.strftime('%H:%M')}"
    return label
