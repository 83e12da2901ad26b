"""
Prefect flow for building a static copy of the tracker.

Aggregates the winter averages once and writes the rendered page plus the
JSON payload, so the site can be hosted without running the API.

Run locally:
    python -m winter_tracker.flows.build
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from winter_tracker.analysis.temperature import build_temperature_payload
from winter_tracker.config import get_settings
from winter_tracker.errors import WinterTrackerError
from winter_tracker.flows.seed import get_store
from winter_tracker.renderers.page import build_page_html
from winter_tracker.schemas import TemperaturePayload
from winter_tracker.yearly import YearlyFetcher

SITE_DIR = Path("site")
PAYLOAD_PATH = Path("api/temperature.json")


@task(name="aggregate")
def aggregate(now: datetime) -> TemperaturePayload | None:
    """Aggregate all years; None when no data is available."""
    settings = get_settings()
    store = get_store()
    fetcher = YearlyFetcher.from_settings(settings, store)
    try:
        return build_temperature_payload(
            fetcher,
            store,
            start_year=settings.start_year,
            end_year=now.year,
            now=now,
        )
    except WinterTrackerError as exc:
        print(f"Aggregation failed: {exc.public_message}")
        return None


@task(name="render-page")
def render_page(payload: TemperaturePayload | None, now: datetime) -> str:
    """Render the full tracker page."""
    settings = get_settings()
    return build_page_html(
        payload,
        warm_label=settings.warm_label,
        cold_label=settings.cold_label,
        now=now,
    )


@task(name="write-site")
def write_site(html: str, payload: TemperaturePayload | None) -> Path:
    """Write index.html (and the JSON payload when there is one)."""
    SITE_DIR.mkdir(parents=True, exist_ok=True)
    output_path = SITE_DIR / "index.html"
    with output_path.open("w") as f:
        f.write(html)

    if payload is not None:
        payload_path = SITE_DIR / PAYLOAD_PATH
        payload_path.parent.mkdir(parents=True, exist_ok=True)
        with payload_path.open("w") as f:
            json.dump(payload.to_json_dict(), f)

    return output_path


@flow(name="build-site", log_prints=True)
def build_all() -> dict[str, Any]:
    """
    Build the static site.

    The page is always written; without data it carries the load error.
    """
    now = datetime.now()

    print("Aggregating winter temperatures...")
    payload = aggregate(now)
    if payload is None:
        print("Warning: No temperature data. Building page without charts.")

    print("Building HTML...")
    html = render_page(payload, now)

    print("Writing site...")
    output_path = write_site(html, payload)

    print(f"Site built: {output_path}")
    return {
        "output": str(output_path),
        "winters": len(payload.meteorological) if payload is not None else 0,
    }


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
