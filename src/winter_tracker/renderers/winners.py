"""Winner cards for the latest winter under each definition."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from winter_tracker.analysis.winters import (
    WinterKind,
    astronomical_window,
    latest_winter_year,
    meteorological_window,
)
from winter_tracker.renderers import render_template
from winter_tracker.renderers.date_utils import format_moment

if TYPE_CHECKING:
    from winter_tracker.schemas import TemperaturePayload

NOT_DETERMINED = "Not yet determined"


def determine_winner(temp: float | None, warm_label: str, cold_label: str) -> str | None:
    """Pick the winner from the sign of a winter's average temperature.

    Decided on the displayed value (one decimal), so -0.04 °C counts as 0.0.
    Returns None while there is no average yet.
    """
    if temp is None:
        return None
    return warm_label if round(temp, 1) >= 0 else cold_label


def build_winners_html(
    payload: TemperaturePayload,
    warm_label: str,
    cold_label: str,
    today: date | None = None,
) -> str:
    """Build the "Current Winners" cards HTML.

    Args:
        payload: Aggregated winter averages.
        warm_label: Winner when the winter averages at or above 0 °C.
        cold_label: Winner when the winter averages below 0 °C.
        today: Reference date for picking the latest winter.

    Returns:
        Rendered HTML string for the winner cards.
    """
    today = today or date.today()
    year = latest_winter_year(today)

    meteo_window = meteorological_window(year)
    windows = [(WinterKind.METEOROLOGICAL, meteo_window, payload.meteorological.get(year))]
    astro_window = astronomical_window(year)
    if astro_window is not None:
        windows.append((WinterKind.ASTRONOMICAL, astro_window, payload.astronomical.get(year)))

    cards = []
    for kind, window, temp in windows:
        cards.append(
            {
                "title": f"{kind.value.capitalize()} Winter",
                "winner": determine_winner(temp, warm_label, cold_label) or NOT_DETERMINED,
                "year": year,
                "period": f"{format_moment(window.start)} - {format_moment(window.end)}",
                "temp": f"{temp:.1f}" if temp is not None else "N/A",
            }
        )

    return render_template("winners.html.j2", cards=cards)
