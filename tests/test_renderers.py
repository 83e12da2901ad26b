"""Tests for the chart, winner and page renderers."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from tests.conftest import obs
from winter_tracker.renderers.charts import (
    AXIS_END,
    AXIS_START,
    MARGIN_LEFT,
    PLOT_RIGHT,
    build_daily_comparison_html,
    build_yearly_chart_html,
    split_actual_forecast,
    x_for_day,
)
from winter_tracker.renderers.date_utils import format_day, format_moment, normalize_day
from winter_tracker.renderers.page import LOAD_ERROR, build_page_html
from winter_tracker.renderers.winners import (
    NOT_DETERMINED,
    build_winners_html,
    determine_winner,
)
from winter_tracker.schemas import TemperaturePayload

WARM = "neomonk"
COLD = "pajaro"


@pytest.fixture
def payload() -> TemperaturePayload:
    return TemperaturePayload(
        meteorological={2024: 1.25, 2025: -4.0},
        astronomical={2024: 0.5, 2025: -3.5},
        daily_data=[
            obs("2023-12-10", 2.0),
            obs("2024-01-10", 0.5),
            obs("2024-12-25", -3.0),
            obs("2024-12-26", None),
            obs("2025-01-15", -5.0),
            obs("2025-02-01", -6.0),
        ],
    )


class TestDateUtils:
    """Test shared date helpers."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (date(2024, 12, 25), date(1999, 12, 25)),
            (date(2025, 1, 15), date(2000, 1, 15)),
            (date(2024, 2, 29), date(2000, 2, 29)),
        ],
    )
    def test_normalize_day(self, day: date, expected: date) -> None:
        assert normalize_day(day) == expected

    def test_format_day(self) -> None:
        assert format_day(date(2024, 12, 1)) == "Dec 1, 2024"

    def test_format_moment_midnight(self) -> None:
        assert format_moment(datetime(2025, 2, 28)) == "Feb 28, 2025"

    def test_format_moment_with_time(self) -> None:
        assert format_moment(datetime(2024, 12, 21, 4, 12)) == "Dec 21, 2024 04:12"


class TestDetermineWinner:
    """Winner from the sign of the average."""

    @pytest.mark.parametrize(
        ("temp", "expected"),
        [
            (-4.0, COLD),
            (0.0, WARM),
            (2.3, WARM),
            (-0.04, WARM),  # displays as 0.0
            (-0.05, COLD),
            (None, None),
        ],
    )
    def test_determine_winner(self, temp: float | None, expected: str | None) -> None:
        assert determine_winner(temp, WARM, COLD) == expected


class TestWinnersHtml:
    """Winner cards for the latest winter."""

    def test_cards(self, payload: TemperaturePayload) -> None:
        html = build_winners_html(payload, WARM, COLD, today=date(2025, 1, 20))

        assert "Current Winners" in html
        assert "Meteorological Winter" in html
        assert "Astronomical Winter" in html
        assert "Dec 1, 2024 - Feb 28, 2025" in html
        assert "Dec 21, 2024 04:12 - Mar 20, 2025 13:16" in html
        assert "(-4.0°C)" in html
        assert "(-3.5°C)" in html
        assert COLD in html
        assert WARM not in html

    def test_missing_average(self) -> None:
        html = build_winners_html(TemperaturePayload(), WARM, COLD, today=date(2025, 1, 20))

        assert NOT_DETERMINED in html
        assert "(N/A°C)" in html

    def test_labels_are_escaped(self, payload: TemperaturePayload) -> None:
        html = build_winners_html(payload, WARM, "<b>cold</b>", today=date(2025, 1, 20))
        assert "&lt;b&gt;cold&lt;/b&gt;" in html


class TestYearlyChart:
    """Year-over-year averages chart."""

    def test_series_and_labels(self, payload: TemperaturePayload) -> None:
        html = build_yearly_chart_html(payload)

        assert "Winter Temperature Comparison" in html
        assert "Meteorological Winter (°C)" in html
        assert "Astronomical Winter (°C)" in html
        assert ">2024<" in html
        assert ">2025<" in html
        assert html.count("<polyline") == 2
        assert html.count("<circle") == 4
        assert "2025: -4.0°C" in html

    def test_empty_payload(self) -> None:
        html = build_yearly_chart_html(TemperaturePayload())

        assert "No winter averages yet" in html
        assert "<polyline" not in html


class TestSplitActualForecast:
    """Splitting a winter at today."""

    def test_split(self) -> None:
        by_date = {date(2025, 1, 1): -1.0, date(2025, 1, 3): -3.0}

        actual, forecast = split_actual_forecast(
            by_date, date(2025, 1, 1), date(2025, 1, 4), today=date(2025, 1, 2)
        )

        assert [p.day for p in actual] == [date(2025, 1, 1), date(2025, 1, 2)]
        assert [p.tavg for p in actual] == [-1.0, None]
        assert [p.day for p in forecast] == [date(2025, 1, 3), date(2025, 1, 4)]
        assert [p.tavg for p in forecast] == [-3.0, None]

    def test_all_actual(self) -> None:
        actual, forecast = split_actual_forecast(
            {}, date(2024, 12, 1), date(2024, 12, 3), today=date(2025, 6, 1)
        )
        assert len(actual) == 3
        assert forecast == []


class TestXForDay:
    """Year-normalized x axis."""

    def test_axis_bounds(self) -> None:
        assert AXIS_START == date(1999, 12, 1)
        assert AXIS_END == date(2000, 3, 25)
        assert x_for_day(date(2024, 12, 1)) == MARGIN_LEFT
        assert x_for_day(date(2025, 3, 25)) == PLOT_RIGHT

    def test_same_day_different_winters_align(self) -> None:
        assert x_for_day(date(2019, 1, 15)) == x_for_day(date(2025, 1, 15))


class TestDailyComparison:
    """Day-aligned chart of the two latest winters."""

    def test_in_progress_winter_has_forecast(self, payload: TemperaturePayload) -> None:
        html = build_daily_comparison_html(payload, today=date(2025, 1, 20))

        assert "Winter 2024 vs 2025" in html
        assert "2024 Winter<" in html
        assert "2025 Winter (Actual)" in html
        assert "2025 Winter (Forecast)" in html
        assert 'stroke-dasharray="5 5" points=' in html
        assert "2025 Met Avg -4.0°C" in html
        assert "2025 Astro Avg -3.5°C" in html
        for label in ("Met Start", "Met End", "Astro Start", "Astro End"):
            assert f"2025 {label}" in html

    def test_finished_winter_has_no_forecast(self, payload: TemperaturePayload) -> None:
        html = build_daily_comparison_html(payload, today=date(2025, 10, 1))

        assert "2025 Winter<" in html
        assert "Forecast" not in html

    def test_missing_days_break_the_line(self) -> None:
        payload = TemperaturePayload(
            daily_data=[
                obs("2024-12-01", 1.0),
                obs("2024-12-02", 2.0),
                obs("2024-12-04", 3.0),
                obs("2024-12-05", 4.0),
            ]
        )

        html = build_daily_comparison_html(payload, today=date(2025, 10, 1))

        assert html.count("<polyline") == 2
        assert "Avg" not in html


class TestPage:
    """Full page assembly."""

    def test_page_with_data(self, payload: TemperaturePayload) -> None:
        html = build_page_html(
            payload, warm_label=WARM, cold_label=COLD, now=datetime(2025, 1, 20, 9, 30)
        )

        assert html.startswith("<!DOCTYPE html>")
        assert "Winter Temperature Tracker" in html
        assert "Current Winners" in html
        assert "Winter 2024 vs 2025" in html
        assert "Winter Temperature Comparison" in html
        assert "Updated 2025-01-20 09:30" in html
        assert LOAD_ERROR not in html

    def test_page_without_data(self) -> None:
        html = build_page_html(None, warm_label=WARM, cold_label=COLD, now=datetime(2025, 1, 20))

        assert LOAD_ERROR in html
        assert "<svg" not in html
        assert "Current Winners" not in html

    def test_custom_error(self) -> None:
        html = build_page_html(
            None, warm_label=WARM, cold_label=COLD, now=datetime(2025, 1, 20), error="Oops"
        )
        assert "Oops" in html
