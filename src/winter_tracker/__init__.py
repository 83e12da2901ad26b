"""Winter Tracker - meteorological vs astronomical winter temperatures.

Architecture::

    datasources/   External APIs (Meteostat daily observations via RapidAPI)
    store.py       Two-tier file cache (static pre-seeded → dynamic runtime)
    yearly.py      Per-year fetcher with a short-TTL in-memory freshness cache
    analysis/      Winter windows, averaging, the aggregated payload
    renderers/     Pure data → HTML (SVG charts, winner cards)
    api/           FastAPI app (/api/temperature, /, /health)
    flows/         Prefect orchestration (seed static cache, build static site)
    services/      Shared utilities (HTTP client)

Data flow: api → analysis → yearly → (store | datasources) → renderers
"""

__version__ = "0.1.0"

from winter_tracker.config import Settings, get_settings

__all__ = ["Settings", "__version__", "get_settings"]
