"""Unit tests for metric series extraction and chart building.

This module tests:
- Point extraction from the response shapes Scout returns
- Downsampling, bar count and bar width
- Value scaling and units
- render_series_chart() and format_series_table()
"""

from __future__ import annotations

import json

import pytest

from scoutdash.constants.values import NO_SERIES_PLACEHOLDER
from scoutdash.utils.series_renderer import (
    ChartData,
    SeriesPoint,
    bar_width_for,
    compact_time_label,
    downsample,
    extract_series_points,
    format_series_table,
    metric_unit,
    render_series_chart,
    scale_value,
    target_bar_count,
)


def _series(count: int) -> list[list]:
    return [[f"2024-01-01T{i // 60:02d}:{i % 60:02d}:00Z", float(i)] for i in range(count)]


# =============================================================================
# Extraction
# =============================================================================


class TestExtractSeriesPoints:
    """Tests for extract_series_points()."""

    def test_bare_pairs(self) -> None:
        points = extract_series_points([["2024-01-01T00:00:00Z", 1], ["2024-01-01T00:01:00Z", 2.5]])
        assert points == [
            SeriesPoint("2024-01-01T00:00:00Z", 1.0),
            SeriesPoint("2024-01-01T00:01:00Z", 2.5),
        ]

    def test_bare_objects_with_timestamp_or_time(self) -> None:
        points = extract_series_points(
            [
                {"timestamp": "2024-01-01T00:00:00Z", "value": 3},
                {"time": "2024-01-01T00:01:00Z", "value": 4},
            ]
        )
        assert [p.value for p in points] == [3.0, 4.0]

    def test_points_wrapper(self) -> None:
        payload = {"points": [["2024-01-01T00:00:00Z", 7]]}
        assert extract_series_points(payload) == [SeriesPoint("2024-01-01T00:00:00Z", 7.0)]

    def test_data_wrapper(self) -> None:
        payload = {"data": [{"timestamp": "2024-01-01T00:00:00Z", "value": 1.5}]}
        assert extract_series_points(payload)[0].value == 1.5

    def test_nested_metric_child(self) -> None:
        payload = {"response_time": {"points": [["2024-01-01T00:00:00Z", 120]]}}
        assert extract_series_points(payload) == [SeriesPoint("2024-01-01T00:00:00Z", 120.0)]

    def test_malformed_elements_are_skipped(self) -> None:
        payload = [
            ["2024-01-01T00:00:00Z", "fast"],
            ["2024-01-01T00:01:00Z"],
            {"timestamp": 5, "value": 1},
            ["2024-01-01T00:02:00Z", True],
            ["2024-01-01T00:03:00Z", 9],
        ]
        assert extract_series_points(payload) == [SeriesPoint("2024-01-01T00:03:00Z", 9.0)]

    @pytest.mark.parametrize(
        "value", [float("inf"), float("-inf"), float("nan"), 10**400],
        ids=["inf", "-inf", "nan", "huge-int"],
    )
    def test_non_finite_values_are_skipped(self, value) -> None:
        payload = [["2024-01-01T00:00:00Z", value], ["2024-01-01T00:01:00Z", 4]]
        assert extract_series_points(payload) == [SeriesPoint("2024-01-01T00:01:00Z", 4.0)]

    @pytest.mark.parametrize("payload", [None, 42, "text", {}, {"points": "nope"}, {"a": 1}])
    def test_unknown_shapes_are_empty(self, payload) -> None:
        assert extract_series_points(payload) == []


# =============================================================================
# Sampling and scaling
# =============================================================================


class TestDownsample:
    """Tests for downsample()."""

    def test_short_series_untouched(self) -> None:
        points = [SeriesPoint(str(i), float(i)) for i in range(5)]
        assert downsample(points, 10) == points

    def test_picks_evenly_spaced_indices(self) -> None:
        points = [SeriesPoint(str(i), float(i)) for i in range(10)]
        assert [p.value for p in downsample(points, 4)] == [0.0, 2.0, 5.0, 7.0]

    def test_result_preserves_order_and_length(self) -> None:
        points = [SeriesPoint(str(i), float(i)) for i in range(1000)]
        sampled = downsample(points, 32)
        assert len(sampled) == 32
        values = [p.value for p in sampled]
        assert values == sorted(values)
        assert values[0] == 0.0


class TestChartGeometry:
    """Tests for target_bar_count() and bar_width_for()."""

    @pytest.mark.parametrize(
        ("width", "expected"),
        [(0, 1), (5, 1), (10, 2), (50, 12), (98, 24), (80, 19), (200, 32)],
    )
    def test_target_bar_count(self, width: int, expected: int) -> None:
        assert target_bar_count(width) == expected

    @pytest.mark.parametrize(("bars", "expected"), [(1, 3), (11, 3), (12, 2), (23, 2), (24, 1), (32, 1)])
    def test_bar_width(self, bars: int, expected: int) -> None:
        assert bar_width_for(bars) == expected


class TestScaling:
    """Tests for scale_value() and metric_unit()."""

    def test_maximum_maps_to_hundred(self) -> None:
        assert scale_value(250.0, 250.0) == 100

    def test_half_rounds_up(self) -> None:
        assert scale_value(1.0, 8.0) == 13

    def test_small_maximum_is_floored_at_one(self) -> None:
        assert scale_value(0.5, 0.5) == 50

    def test_result_is_clamped(self) -> None:
        assert scale_value(-3.0, 10.0) == 0
        assert scale_value(30.0, 10.0) == 100

    @pytest.mark.parametrize(
        ("metric", "unit"),
        [("throughput", "RPM"), ("response_time", "ms"), ("errors", "count"), ("apdex", ""),
         (" Queue_Time ", "ms"), ("unknown", ""), (None, "")],
    )
    def test_units(self, metric, unit: str) -> None:
        assert metric_unit(metric) == unit


class TestCompactTimeLabel:
    """Tests for compact_time_label()."""

    def test_utc_label(self) -> None:
        assert compact_time_label("2024-03-05T14:07:59Z", use_utc=True) == "14:07"

    def test_offset_is_normalised_to_utc(self) -> None:
        assert compact_time_label("2024-03-05T16:07:00+02:00", use_utc=True) == "14:07"

    def test_unparseable_timestamp_keeps_tail(self) -> None:
        assert compact_time_label("yesterday", use_utc=True) == "erday"


# =============================================================================
# Rendering
# =============================================================================


class TestRenderSeriesChart:
    """Tests for render_series_chart()."""

    def test_empty_payload_gives_placeholder(self) -> None:
        chart = render_series_chart({}, 80, "apdex")
        assert chart.is_empty
        assert chart.placeholder == NO_SERIES_PLACEHOLDER
        assert chart.title == "apdex chart"
        assert chart.bars == ()

    def test_generic_title(self) -> None:
        assert render_series_chart([], 80).title == "Metric chart"

    def test_points_are_sorted_before_sampling(self) -> None:
        payload = [
            ["2024-01-01T00:02:00Z", 3],
            ["2024-01-01T00:00:00Z", 1],
            ["2024-01-01T00:01:00Z", 2],
        ]
        chart = render_series_chart(payload, 80, "throughput", use_utc=True)
        assert [bar.label for bar in chart.bars] == ["00:00", "00:01", "00:02"]
        assert chart.latest == 3.0
        assert chart.minimum == 1.0
        assert chart.maximum == 3.0
        assert chart.point_count == 3
        assert chart.unit == "RPM"
        assert chart.bar_width == 2
        assert chart.bars[-1].scaled == 100

    def test_wide_series_is_downsampled(self) -> None:
        chart = render_series_chart(_series(500), 200, use_utc=True)
        assert len(chart.bars) == 32
        assert chart.bar_width == 1
        assert chart.point_count == 500

    def test_bar_count_never_exceeds_width(self) -> None:
        chart = render_series_chart(_series(100), 30, use_utc=True)
        assert len(chart.bars) == 7
        assert all(0 <= bar.scaled <= 100 for bar in chart.bars)

    def test_sub_unit_values_are_not_inflated(self) -> None:
        payload = [["2024-01-01T00:00:00Z", 0.25], ["2024-01-01T00:01:00Z", 0.5]]
        chart = render_series_chart(payload, 80, "apdex", use_utc=True)
        assert [bar.scaled for bar in chart.bars] == [25, 50]
        assert chart.maximum == 0.5

    def test_summary_line(self) -> None:
        chart = ChartData(
            title="t", unit="ms", latest=1, minimum=0.5, maximum=2, point_count=3
        )
        assert chart.summary == "latest: 1.00 ms  min: 0.50 ms  max: 2.00 ms  points: 3"

    def test_summary_without_unit(self) -> None:
        chart = ChartData(title="t", latest=1, minimum=1, maximum=1, point_count=1)
        assert chart.summary == "latest: 1.00  min: 1.00  max: 1.00  points: 1"


class TestFormatSeriesTable:
    """Tests for format_series_table()."""

    def test_newest_first_with_unit(self) -> None:
        payload = [["2024-01-01T00:00:00Z", 1], ["2024-01-01T00:01:00Z", 2.345]]
        assert format_series_table(payload, "response_time", use_utc=True) == (
            "2024-01-01 00:01:00 UTC  2.35 ms\n2024-01-01 00:00:00 UTC  1.00 ms"
        )

    def test_empty(self) -> None:
        assert format_series_table({"points": []}) == NO_SERIES_PLACEHOLDER


class TestOutOfRangeNumbers:
    """Numbers json decodes to inf, NaN or huge ints never reach the scaler."""

    def test_decoded_overflow_gives_placeholder(self) -> None:
        payload = json.loads('{"points": [["2024-01-01T00:00:00Z", 1e400]]}')
        chart = render_series_chart(payload, 80, "throughput")
        assert chart.placeholder == NO_SERIES_PLACEHOLDER

    def test_nan_gives_placeholder(self) -> None:
        chart = render_series_chart([["2024-01-01T00:00:00Z", float("nan")]], 80)
        assert chart.is_empty

    def test_finite_points_survive_beside_infinite(self) -> None:
        payload = json.loads(
            '[["2024-01-01T00:00:00Z", 1e400], ["2024-01-01T00:01:00Z", 5],'
            ' ["2024-01-01T00:02:00Z", NaN]]'
        )
        chart = render_series_chart(payload, 80, use_utc=True)
        assert [bar.scaled for bar in chart.bars] == [100]
        assert chart.point_count == 1

    def test_table_skips_non_finite(self) -> None:
        payload = [["2024-01-01T00:00:00Z", float("inf")]]
        assert format_series_table(payload) == NO_SERIES_PLACEHOLDER
