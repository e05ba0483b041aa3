"""Engine utilities: background loads, search filtering, series rendering, output."""

from scoutdash.utils.load_manager import DrillLoader, LoadManager
from scoutdash.utils.output import format_json, format_plain
from scoutdash.utils.search_filter import SearchFilter, filter_applications
from scoutdash.utils.series_renderer import (
    ChartBar,
    ChartData,
    SeriesPoint,
    extract_series_points,
    format_series_table,
    render_series_chart,
)

__all__ = [
    "ChartBar",
    "ChartData",
    "DrillLoader",
    "LoadManager",
    "SearchFilter",
    "SeriesPoint",
    "extract_series_points",
    "filter_applications",
    "format_json",
    "format_plain",
    "format_series_table",
    "render_series_chart",
]
