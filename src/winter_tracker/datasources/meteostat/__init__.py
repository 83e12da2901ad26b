"""Meteostat weather station data source.

Fetches daily station observations through RapidAPI (API key required).

Public API:
  - daily: fetch_daily (observations for a date range at one station)
  - client: API host, station, URL and header helpers
"""

from winter_tracker.datasources.meteostat.client import (
    DEFAULT_API_HOST,
    DEFAULT_STATION,
    auth_headers,
    daily_url,
)
from winter_tracker.datasources.meteostat.daily import fetch_daily

__all__ = [
    "DEFAULT_API_HOST",
    "DEFAULT_STATION",
    "auth_headers",
    "daily_url",
    "fetch_daily",
]
