"""Series renderer - raw metric payloads to bounded-width chart data.

Payload extraction is permissive. A small ordered set of shape strategies is
tried in turn (bare array, array wrapped under ``points``/``data``, first
nested child carrying points) and each point is read either as a
``[timestamp, value]`` pair or as a ``{timestamp|time, value}`` object.
Anything else degrades to "no data" instead of failing.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from scoutdash.client.helpers import format_timestamp_display, parse_time
from scoutdash.constants.limits import (
    CHART_CELLS_PER_BAR,
    MAX_CHART_BARS,
    MIN_CHART_BARS,
    TIME_LABEL_CHARS,
)
from scoutdash.constants.values import METRIC_UNITS, NO_SERIES_PLACEHOLDER


@dataclass(frozen=True)
class SeriesPoint:
    timestamp: str
    value: float


@dataclass(frozen=True)
class ChartBar:
    label: str
    value: float
    scaled: int


@dataclass(frozen=True)
class ChartData:
    """Everything the drawing layer needs to paint one metric chart."""

    title: str
    bars: tuple[ChartBar, ...] = ()
    bar_width: int = 1
    unit: str = ""
    latest: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    point_count: int = 0
    placeholder: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.placeholder is not None

    @property
    def summary(self) -> str:
        suffix = f" {self.unit}" if self.unit else ""
        return (
            f"latest: {self.latest:.2f}{suffix}  min: {self.minimum:.2f}{suffix}  "
            f"max: {self.maximum:.2f}{suffix}  points: {self.point_count}"
        )


# =============================================================================
# Extraction
# =============================================================================


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    # json decodes 1e400 as inf and accepts NaN
    if not math.isfinite(number):
        return None
    return number


def _point_from_pair(item: Any) -> SeriesPoint | None:
    if not isinstance(item, (list, tuple)) or len(item) < 2:
        return None
    timestamp, value = item[0], _number(item[1])
    if not isinstance(timestamp, str) or value is None:
        return None
    return SeriesPoint(timestamp, value)


def _point_from_mapping(item: Any) -> SeriesPoint | None:
    if not isinstance(item, dict):
        return None
    timestamp = item["timestamp"] if "timestamp" in item else item.get("time")
    value = _number(item.get("value"))
    if not isinstance(timestamp, str) or value is None:
        return None
    return SeriesPoint(timestamp, value)


_POINT_STRATEGIES: tuple[Callable[[Any], SeriesPoint | None], ...] = (
    _point_from_pair,
    _point_from_mapping,
)


def _points_from_array(items: list[Any]) -> list[SeriesPoint]:
    points: list[SeriesPoint] = []
    for item in items:
        for strategy in _POINT_STRATEGIES:
            point = strategy(item)
            if point is not None:
                points.append(point)
                break
    return points


def _bare_array(payload: Any) -> list[SeriesPoint] | None:
    if isinstance(payload, list):
        return _points_from_array(payload)
    return None


def _wrapped_array(payload: Any) -> list[SeriesPoint] | None:
    if not isinstance(payload, dict):
        return None
    for name in ("points", "data"):
        items = payload.get(name)
        if isinstance(items, list):
            return _points_from_array(items)
    return None


def _first_nested_child(payload: Any) -> list[SeriesPoint] | None:
    # e.g. {"response_time": {"points": [...]}}
    if not isinstance(payload, dict):
        return None
    for child in payload.values():
        points = extract_series_points(child)
        if points:
            return points
    return []


_SHAPE_STRATEGIES: tuple[Callable[[Any], list[SeriesPoint] | None], ...] = (
    _bare_array,
    _wrapped_array,
    _first_nested_child,
)


def extract_series_points(payload: Any) -> list[SeriesPoint]:
    """Extract points in payload order; unknown shapes yield an empty list."""
    for strategy in _SHAPE_STRATEGIES:
        points = strategy(payload)
        if points is not None:
            return points
    return []


# =============================================================================
# Sampling and scaling
# =============================================================================


def downsample(points: Sequence[SeriesPoint], target: int) -> list[SeriesPoint]:
    """Pick ``target`` evenly spaced points by index (``floor(i * N / T)``)."""
    count = len(points)
    if count <= target:
        return list(points)
    if target <= 0:
        return []
    return [points[min(i * count // target, count - 1)] for i in range(target)]


def target_bar_count(width: int) -> int:
    """Bars that fit in ``width`` terminal cells (border excluded)."""
    inner = max(width - 2, 0)
    return max(MIN_CHART_BARS, min(inner // CHART_CELLS_PER_BAR, MAX_CHART_BARS))


def bar_width_for(bar_count: int) -> int:
    if bar_count >= 24:
        return 1
    if bar_count >= 12:
        return 2
    return 3


def scale_value(value: float, maximum: float) -> int:
    """Scale onto 0-100 relative to ``maximum`` (floored at 1.0), rounding half up."""
    ceiling = max(maximum, 1.0)
    scaled = math.floor(value / ceiling * 100.0 + 0.5)
    return max(0, min(int(scaled), 100))


def metric_unit(metric_type: str | None) -> str:
    """Display unit for a metric type; unknown types have none."""
    if metric_type is None:
        return ""
    return METRIC_UNITS.get(metric_type.strip().lower(), "")


def compact_time_label(timestamp: str, use_utc: bool) -> str:
    """Short ``HH:MM`` axis label in the display timezone."""
    try:
        moment = parse_time(timestamp)
    except ValueError:
        return timestamp[-TIME_LABEL_CHARS:]
    if not use_utc:
        moment = moment.astimezone()
    return moment.strftime("%Y-%m-%d %H:%M")[-TIME_LABEL_CHARS:]


# =============================================================================
# Rendering
# =============================================================================


def render_series_chart(
    payload: Any,
    width: int,
    metric_type: str | None = None,
    use_utc: bool = False,
) -> ChartData:
    """Build chart data for ``payload`` to fit ``width`` cells."""
    title = f"{metric_type} chart" if metric_type else "Metric chart"
    points = sorted(extract_series_points(payload), key=lambda point: point.timestamp)
    if not points:
        return ChartData(title=title, placeholder=NO_SERIES_PLACEHOLDER)

    bar_count = target_bar_count(width)
    sampled = downsample(points, bar_count)
    values = [point.value for point in sampled]
    maximum = max(values)
    bars = tuple(
        ChartBar(
            label=compact_time_label(point.timestamp, use_utc),
            value=point.value,
            scaled=scale_value(point.value, maximum),
        )
        for point in sampled
    )
    return ChartData(
        title=title,
        bars=bars,
        bar_width=bar_width_for(bar_count),
        unit=metric_unit(metric_type),
        latest=values[-1],
        minimum=min(values),
        maximum=maximum,
        point_count=len(points),
    )


def format_series_table(
    payload: Any, metric_type: str | None = None, use_utc: bool = False
) -> str:
    """Newest-first ``timestamp  value`` listing of every point."""
    points = sorted(
        extract_series_points(payload), key=lambda point: point.timestamp, reverse=True
    )
    if not points:
        return NO_SERIES_PLACEHOLDER
    unit = metric_unit(metric_type)
    suffix = f" {unit}" if unit else ""
    return "\n".join(
        f"{format_timestamp_display(point.timestamp, use_utc)}  {point.value:.2f}{suffix}"
        for point in points
    )


__all__ = [
    "ChartBar",
    "ChartData",
    "SeriesPoint",
    "bar_width_for",
    "compact_time_label",
    "downsample",
    "extract_series_points",
    "format_series_table",
    "metric_unit",
    "render_series_chart",
    "scale_value",
    "target_bar_count",
]
