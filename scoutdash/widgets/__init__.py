"""Widgets module for the ScoutDash TUI.

- row_list: RowList, the selectable row list
- metric_chart: MetricChart, the textual-plotext bar chart for metric series
"""

from scoutdash.widgets.metric_chart import MetricChart
from scoutdash.widgets.row_list import RowList, visible_window

__all__ = [
    "MetricChart",
    "RowList",
    "visible_window",
]
