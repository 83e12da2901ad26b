"""Cross-year analysis: winter windows, averages, the aggregated payload.

Public API:
  - winters: WINTER_DATES, WinterKind, WinterWindow, meteorological_window,
             astronomical_window, average_in_window, compute_winter_averages,
             latest_winter_year
  - temperature: build_temperature_payload, collect_daily_data
"""

from winter_tracker.analysis.temperature import (
    DEFAULT_START_YEAR,
    build_temperature_payload,
    collect_daily_data,
)
from winter_tracker.analysis.winters import (
    WINTER_DATES,
    WinterKind,
    WinterWindow,
    astronomical_window,
    average_in_window,
    compute_winter_averages,
    latest_winter_year,
    meteorological_window,
)

__all__ = [
    "DEFAULT_START_YEAR",
    "WINTER_DATES",
    "WinterKind",
    "WinterWindow",
    "astronomical_window",
    "average_in_window",
    "build_temperature_payload",
    "collect_daily_data",
    "compute_winter_averages",
    "latest_winter_year",
    "meteorological_window",
]
