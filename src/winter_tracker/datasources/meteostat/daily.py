"""Daily station observations from the Meteostat API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from winter_tracker.datasources.meteostat.client import (
    DEFAULT_API_HOST,
    DEFAULT_STATION,
    auth_headers,
    daily_url,
    session,
)
from winter_tracker.errors import MalformedResponseError
from winter_tracker.schemas import parse_observations

if TYPE_CHECKING:
    from datetime import date

    from winter_tracker.schemas import DailyObservation


def fetch_daily(
    start: date,
    end: date,
    station: str = DEFAULT_STATION,
    *,
    api_key: str,
    api_host: str = DEFAULT_API_HOST,
) -> list[DailyObservation]:
    """
    Fetch daily observations for a station between two dates (inclusive).

    Args:
        start: First day to fetch.
        end: Last day to fetch.
        station: Meteostat station identifier.
        api_key: RapidAPI key.
        api_host: RapidAPI host for the Meteostat API.

    Returns:
        Observations in the order the API returns them (chronological).

    Raises:
        requests.RequestException: Network failure or non-2xx response.
        MalformedResponseError: Body isn't ``{"data": [...]}`` of valid rows.
    """
    params = {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "station": station,
    }
    resp = session.get(
        daily_url(api_host),
        params=params,
        headers=auth_headers(api_key, api_host),
    )
    resp.raise_for_status()
    body = resp.json()

    if not isinstance(body, dict) or not isinstance(body.get("data"), list):
        msg = f"Unexpected Meteostat response for {start}..{end}: missing 'data' list"
        raise MalformedResponseError(msg)

    observations = parse_observations(body["data"], source="meteostat")
    if observations is None:
        msg = f"Meteostat rows for {start}..{end} failed validation"
        raise MalformedResponseError(msg)
    return observations
