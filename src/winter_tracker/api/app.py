"""FastAPI application for the winter tracker.

Provides:
- ``GET /api/temperature``: winter averages plus the combined daily series
- ``GET /``: the tracker page (charts and winners), rendered server-side
- ``GET /health``: liveness check

Example:
    >>> from winter_tracker.api import create_app
    >>> app = create_app()
    >>> # Run with: uvicorn --factory winter_tracker.api.app:create_app
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse

from winter_tracker import __version__
from winter_tracker.analysis.temperature import build_temperature_payload
from winter_tracker.config import Settings, get_settings
from winter_tracker.errors import WinterTrackerError
from winter_tracker.renderers.page import build_page_html
from winter_tracker.schemas import ErrorResponse, HealthResponse, TemperaturePayload
from winter_tracker.store import CacheStore
from winter_tracker.yearly import YearlyFetcher

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> CacheStore:
    """Cache store for the configured environment."""
    return CacheStore(
        static_dir=settings.static_cache_dir,
        dynamic_dir=settings.resolved_dynamic_cache_dir,
        static_url=settings.static_cache_url,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(
    settings: Settings | None = None,
    store: CacheStore | None = None,
    fetcher: YearlyFetcher | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Configuration (defaults to ``get_settings()``).
        store: Cache store (defaults to one built from settings).
        fetcher: Yearly fetcher (defaults to one built from settings).
        clock: Source of "now" for year bounds and future filtering.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    store = store or build_store(settings)
    fetcher = fetcher or YearlyFetcher.from_settings(settings, store)

    app = FastAPI(
        title="Winter Tracker API",
        description="Meteorological vs astronomical winter temperature averages",
        version=__version__,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.fetcher = fetcher

    def aggregate(now: datetime) -> TemperaturePayload:
        return build_temperature_payload(
            fetcher,
            store,
            start_year=settings.start_year,
            end_year=now.year,
            now=now,
        )

    @app.get(
        "/api/temperature",
        response_model=TemperaturePayload,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid year range"},
            404: {"model": ErrorResponse, "description": "No data available"},
            500: {"model": ErrorResponse, "description": "Processing failed"},
        },
        tags=["temperature"],
    )
    def temperature() -> JSONResponse:
        """Winter averages under both definitions, with the daily data behind them."""
        try:
            payload = aggregate(clock())
        except WinterTrackerError as exc:
            return _error(exc.status_code, exc.public_message)
        except Exception:
            logger.exception("Error processing temperature data")
            return _error(500, WinterTrackerError.public_message)
        return JSONResponse(content=payload.to_json_dict())

    @app.get("/", response_class=HTMLResponse, tags=["pages"])
    def index() -> HTMLResponse:
        """Tracker page: winner cards and both charts."""
        now = clock()
        payload: TemperaturePayload | None = None
        try:
            payload = aggregate(now)
        except WinterTrackerError as exc:
            logger.warning("Rendering page without data: %s", exc.public_message)
        except Exception:
            logger.exception("Error processing temperature data for page")

        html = build_page_html(
            payload,
            warm_label=settings.warm_label,
            cold_label=settings.cold_label,
            now=now,
        )
        return HTMLResponse(content=html)

    @app.get("/health", response_model=HealthResponse, tags=["info"])
    def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    return app
