"""
Domain models for winter tracker.

Pydantic models for data from the upstream API, the file cache and the HTTP
API. These define the canonical schema - the datasource and the cache
normalize raw JSON to these.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

# =============================================================================
# Observations
# =============================================================================


class DailyObservation(BaseModel):
    """One day of station data.

    Only ``date`` and ``tavg`` are interpreted; the remaining upstream columns
    (tmin, tmax, prcp, snow, ...) are kept as extra fields and passed through.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    date: date
    tavg: float | None = Field(default=None, description="Daily mean temperature (°C)")


_observations_adapter: TypeAdapter[list[DailyObservation]] = TypeAdapter(list[DailyObservation])


def parse_observations(raw: Any, *, source: str = "cache") -> list[DailyObservation] | None:
    """Validate a JSON payload as a yearly dataset.

    Returns None when the payload is missing or doesn't match the schema, so
    callers can treat a bad cache entry exactly like a miss.
    """
    if raw is None:
        return None
    try:
        return _observations_adapter.validate_python(raw)
    except ValidationError as exc:
        logger.warning("Discarding %s payload that failed validation: %s", source, exc)
        return None


def dump_observations(observations: list[DailyObservation]) -> list[dict[str, Any]]:
    """Serialize observations to JSON-compatible dicts (extras included)."""
    return [obs.model_dump(mode="json") for obs in observations]


# =============================================================================
# API
# =============================================================================


class TemperaturePayload(BaseModel):
    """Aggregated winter averages plus the combined daily series."""

    model_config = ConfigDict(populate_by_name=True)

    meteorological: dict[int, float] = Field(default_factory=dict)
    astronomical: dict[int, float] = Field(default_factory=dict)
    daily_data: list[DailyObservation] = Field(default_factory=list, alias="dailyData")

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with the wire key names (``dailyData``, string years)."""
        return self.model_dump(mode="json", by_alias=True)


class ErrorResponse(BaseModel):
    """Body of every non-2xx API response."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
