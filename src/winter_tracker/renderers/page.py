"""Full page assembly from the rendered fragments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from winter_tracker.renderers import render_template
from winter_tracker.renderers.charts import build_daily_comparison_html, build_yearly_chart_html
from winter_tracker.renderers.winners import build_winners_html

if TYPE_CHECKING:
    from winter_tracker.schemas import TemperaturePayload

LOAD_ERROR = "Failed to load temperature data."


def build_page_html(
    payload: TemperaturePayload | None,
    *,
    warm_label: str,
    cold_label: str,
    now: datetime | None = None,
    error: str | None = None,
) -> str:
    """Render the whole tracker page.

    With no payload (aggregation failed) the page renders only the error
    message.
    """
    now = now or datetime.now()

    winners_html = ""
    daily_html = ""
    yearly_html = ""
    if payload is not None:
        winners_html = build_winners_html(payload, warm_label, cold_label, today=now.date())
        daily_html = build_daily_comparison_html(payload, today=now.date())
        yearly_html = build_yearly_chart_html(payload)
    elif error is None:
        error = LOAD_ERROR

    return render_template(
        "base.html.j2",
        updated=now.strftime("%Y-%m-%d %H:%M"),
        error=error,
        winners=winners_html,
        daily_comparison=daily_html,
        yearly_chart=yearly_html,
    )
