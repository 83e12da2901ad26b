"""Meteostat (RapidAPI) client constants and shared session.

API docs: https://dev.meteostat.net/api/stations/daily.html
"""

from __future__ import annotations

from winter_tracker.services.http import NO_RETRY, create_session

DEFAULT_API_HOST = "meteostat.p.rapidapi.com"
DAILY_PATH = "/stations/daily"

# Toronto Pearson International Airport
DEFAULT_STATION = "71624"

# The API is rate limited per key; one attempt per year, no retries.
session = create_session(retry=NO_RETRY)


def daily_url(api_host: str = DEFAULT_API_HOST) -> str:
    """Full URL of the daily station data endpoint."""
    return f"https://{api_host}{DAILY_PATH}"


def auth_headers(api_key: str, api_host: str = DEFAULT_API_HOST) -> dict[str, str]:
    """RapidAPI authentication headers."""
    return {
        "X-RapidAPI-Key": api_key,
        "X-RapidAPI-Host": api_host,
    }
