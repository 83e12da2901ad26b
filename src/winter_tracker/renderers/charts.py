"""Winter temperature SVG charts.

Year-over-year winter averages and the day-aligned comparison of the two
most recent winters. Both charts are inline SVG built from a
``TemperaturePayload``; no client-side charting library is needed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

from winter_tracker.analysis.winters import (
    astronomical_window,
    latest_winter_year,
    meteorological_window,
)
from winter_tracker.renderers import render_template
from winter_tracker.renderers.date_utils import normalize_day

if TYPE_CHECKING:
    from collections.abc import Callable

    from winter_tracker.schemas import TemperaturePayload

# SVG dimensions shared by both charts
SVG_WIDTH = 760
SVG_HEIGHT = 340
MARGIN_LEFT = 55
MARGIN_TOP = 25
MARGIN_RIGHT = 20
MARGIN_BOTTOM = 40
PLOT_RIGHT = SVG_WIDTH - MARGIN_RIGHT
PLOT_BOTTOM = SVG_HEIGHT - MARGIN_BOTTOM
PLOT_WIDTH = PLOT_RIGHT - MARGIN_LEFT
PLOT_HEIGHT = PLOT_BOTTOM - MARGIN_TOP

METEO_COLOR = "rgb(75, 192, 192)"
ASTRO_COLOR = "rgb(255, 99, 132)"

# Day-aligned x-axis spans Dec 1 - Mar 25
AXIS_START = normalize_day(date(2000, 12, 1))
AXIS_END = normalize_day(date(2001, 3, 25))
_AXIS_DAYS = (AXIS_END - AXIS_START).days

_MONTH_TICKS = [(12, "Dec"), (1, "Jan"), (2, "Feb"), (3, "Mar")]


@dataclass(frozen=True)
class DayPoint:
    """One calendar day on the comparison chart; ``tavg`` None = no reading."""

    day: date
    tavg: float | None


# =============================================================================
# Shared axis helpers
# =============================================================================


def _temperature_range(values: list[float]) -> tuple[float, float]:
    """Whole-degree y-axis bounds with at least one degree of headroom."""
    if not values:
        return -10.0, 10.0
    return float(math.floor(min(values)) - 1), float(math.ceil(max(values)) + 1)


def _y_scale(y_min: float, y_max: float) -> Callable[[float], float]:
    span = y_max - y_min

    def y_for_temp(temp: float) -> float:
        """Convert °C to SVG y coordinate (inverted)."""
        return PLOT_BOTTOM - (temp - y_min) / span * PLOT_HEIGHT

    return y_for_temp


def _y_ticks(
    y_min: float, y_max: float, y_fn: Callable[[float], float], n_ticks: int = 5
) -> list[dict[str, Any]]:
    ticks = []
    for i in range(n_ticks + 1):
        val = y_min + (y_max - y_min) * i / n_ticks
        ticks.append({"y": round(y_fn(val), 1), "label": f"{val:.1f}"})
    return ticks


# =============================================================================
# Year-over-year chart
# =============================================================================


def build_yearly_chart_html(payload: TemperaturePayload) -> str:
    """Build the meteorological vs astronomical averages line chart.

    Args:
        payload: Aggregated winter averages.

    Returns:
        Rendered HTML string with inline SVG chart.
    """
    meteo = payload.meteorological
    astro = payload.astronomical
    years = sorted(set(meteo) | set(astro))

    y_min, y_max = _temperature_range([*meteo.values(), *astro.values()])
    y_fn = _y_scale(y_min, y_max)

    def x_for_index(index: int) -> float:
        if len(years) <= 1:
            return MARGIN_LEFT + PLOT_WIDTH / 2
        return MARGIN_LEFT + index / (len(years) - 1) * PLOT_WIDTH

    x_for_year = {year: x_for_index(i) for i, year in enumerate(years)}

    series = [
        _averages_series("Meteorological Winter (°C)", meteo, x_for_year, y_fn, METEO_COLOR),
        _averages_series("Astronomical Winter (°C)", astro, x_for_year, y_fn, ASTRO_COLOR),
    ]
    x_labels = [{"x": round(x, 1), "text": str(year)} for year, x in x_for_year.items()]

    return render_template(
        "yearly_chart.html.j2",
        svg_width=SVG_WIDTH,
        svg_height=SVG_HEIGHT,
        margin_left=MARGIN_LEFT,
        margin_top=MARGIN_TOP,
        plot_right=PLOT_RIGHT,
        plot_bottom=PLOT_BOTTOM,
        y_ticks=_y_ticks(y_min, y_max, y_fn),
        x_labels=x_labels,
        series=series,
        has_data=bool(years),
    )


def _averages_series(
    label: str,
    averages: dict[int, float],
    x_for_year: dict[int, float],
    y_fn: Callable[[float], float],
    color: str,
) -> dict[str, Any]:
    points = [
        {
            "x": round(x_for_year[year], 1),
            "y": round(y_fn(temp), 1),
            "title": f"{year}: {temp:.1f}°C",
        }
        for year, temp in sorted(averages.items())
    ]
    polyline = " ".join(f"{p['x']},{p['y']}" for p in points)
    return {
        "label": label,
        "color": color,
        "dashed": False,
        "segments": [polyline] if polyline else [],
        "points": points,
    }


# =============================================================================
# Day-aligned comparison chart
# =============================================================================


def split_actual_forecast(
    by_date: dict[date, float | None],
    start: date,
    end: date,
    today: date,
) -> tuple[list[DayPoint], list[DayPoint]]:
    """Walk ``start..end`` day by day, splitting at ``today``.

    Returns:
        ``(actual, forecast)``: days on or before ``today``, and days after it.
    """
    actual: list[DayPoint] = []
    forecast: list[DayPoint] = []
    day = start
    while day <= end:
        point = DayPoint(day=day, tavg=by_date.get(day))
        if day <= today:
            actual.append(point)
        else:
            forecast.append(point)
        day += timedelta(days=1)
    return actual, forecast


def x_for_day(day: date) -> float:
    """SVG x coordinate of a day on the year-normalized axis."""
    offset = (normalize_day(day) - AXIS_START).days
    return MARGIN_LEFT + offset / _AXIS_DAYS * PLOT_WIDTH


def _segments(points: list[DayPoint], y_fn: Callable[[float], float]) -> list[str]:
    """Polyline point strings, broken wherever a day has no reading."""
    segments: list[str] = []
    current: list[str] = []
    for point in points:
        if point.tavg is None:
            if current:
                segments.append(" ".join(current))
                current = []
            continue
        current.append(f"{x_for_day(point.day):.1f},{y_fn(point.tavg):.1f}")
    if current:
        segments.append(" ".join(current))
    return segments


def _winter_span(year: int) -> tuple[date, date]:
    """Meteorological start through astronomical end (or meteorological end)."""
    meteo = meteorological_window(year)
    astro = astronomical_window(year)
    end = astro.end if astro is not None else meteo.end
    return meteo.start.date(), end.date()


def build_daily_comparison_html(payload: TemperaturePayload, today: date | None = None) -> str:
    """Build the day-aligned chart overlaying the two latest winters.

    Days up to ``today`` are drawn solid; later days are drawn dashed as the
    forecast part. Reference lines mark the latest winter's averages and its
    period boundaries.

    Args:
        payload: Aggregated payload (daily data and averages).
        today: Split point between actual and forecast (defaults to today).

    Returns:
        Rendered HTML string with inline SVG chart.
    """
    today = today or date.today()
    latest = latest_winter_year(today)
    years = (latest - 1, latest)
    colors = {latest - 1: METEO_COLOR, latest: ASTRO_COLOR}
    by_date = {obs.date: obs.tavg for obs in payload.daily_data}

    split: dict[int, tuple[list[DayPoint], list[DayPoint]]] = {}
    for year in years:
        start, end = _winter_span(year)
        split[year] = split_actual_forecast(by_date, start, end, today)

    meteo_avg = payload.meteorological.get(latest)
    astro_avg = payload.astronomical.get(latest)

    values = [
        p.tavg
        for actual, forecast in split.values()
        for p in (*actual, *forecast)
        if p.tavg is not None
    ]
    values.extend(v for v in (meteo_avg, astro_avg) if v is not None)
    y_min, y_max = _temperature_range(values)
    y_fn = _y_scale(y_min, y_max)

    series: list[dict[str, Any]] = []
    for year in years:
        actual, forecast = split[year]
        series.append(
            {
                "label": f"{year} Winter (Actual)" if forecast else f"{year} Winter",
                "color": colors[year],
                "dashed": False,
                "segments": _segments(actual, y_fn),
            }
        )
        if forecast:
            series.append(
                {
                    "label": f"{year} Winter (Forecast)",
                    "color": colors[year],
                    "dashed": True,
                    "segments": _segments(forecast, y_fn),
                }
            )

    avg_lines = []
    if meteo_avg is not None:
        avg_lines.append(
            {"y": round(y_fn(meteo_avg), 1), "label": f"{latest} Met Avg {meteo_avg:.1f}°C"}
        )
    if astro_avg is not None:
        avg_lines.append(
            {"y": round(y_fn(astro_avg), 1), "label": f"{latest} Astro Avg {astro_avg:.1f}°C"}
        )

    markers = _period_markers(latest)
    x_labels = [
        {"x": round(x_for_day(date(2000 if month == 12 else 2001, month, 1)), 1), "text": text}
        for month, text in _MONTH_TICKS
    ]

    return render_template(
        "daily_comparison.html.j2",
        title=f"Winter {latest - 1} vs {latest}",
        svg_width=SVG_WIDTH,
        svg_height=SVG_HEIGHT,
        margin_left=MARGIN_LEFT,
        margin_top=MARGIN_TOP,
        plot_right=PLOT_RIGHT,
        plot_bottom=PLOT_BOTTOM,
        y_ticks=_y_ticks(y_min, y_max, y_fn),
        x_labels=x_labels,
        series=series,
        avg_lines=avg_lines,
        markers=markers,
        marker_color=colors[latest],
    )


def _period_markers(year: int) -> list[dict[str, Any]]:
    """Vertical boundary markers for a winter's two periods."""
    meteo = meteorological_window(year)
    bounds = [(meteo.start, "Met Start"), (meteo.end, "Met End")]
    astro = astronomical_window(year)
    if astro is not None:
        bounds += [(astro.start, "Astro Start"), (astro.end, "Astro End")]
    return [
        {"x": round(x_for_day(moment.date()), 1), "label": f"{year} {label}"}
        for moment, label in bounds
    ]
