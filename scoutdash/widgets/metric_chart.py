"""MetricChart widget - bar chart of a sampled metric series.

Standard Wrapper Pattern:
- Composes a textual-plotext PlotextPlot with a one-line summary Static
- Fed with ChartData; an empty chart shows its placeholder instead of axes

CSS Classes: widget-metric-chart
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static
from textual_plotext import PlotextPlot

from scoutdash.utils.series_renderer import ChartData

# plotext bar width (fraction of a slot) per renderer bar width
_BAR_FILL: dict[int, float] = {1: 0.3, 2: 0.55, 3: 0.8}


class MetricChart(Vertical):
    """Chart of one metric series scaled to 0-100."""

    DEFAULT_CLASSES = "widget-metric-chart"

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes)
        self._chart: ChartData | None = None

    def compose(self) -> ComposeResult:
        yield PlotextPlot(classes="metric-chart-plot")
        yield Static("", classes="metric-chart-summary")

    def show(self, chart: ChartData) -> None:
        if chart == self._chart:
            return
        self._chart = chart
        plot = self.query_one(PlotextPlot)
        summary = self.query_one(".metric-chart-summary", Static)
        plt = plot.plt
        plt.clear_data()
        plt.title(chart.title)
        if chart.is_empty:
            plot.display = False
            summary.update(chart.placeholder or "")
            return
        plot.display = True
        positions = list(range(len(chart.bars)))
        plt.bar(
            positions,
            [bar.scaled for bar in chart.bars],
            width=_BAR_FILL.get(chart.bar_width, 0.5),
            marker="sd",
        )
        plt.xticks(positions, [bar.label for bar in chart.bars])
        plt.ylim(0, 100)
        plt.ylabel(f"% of max ({chart.unit})" if chart.unit else "% of max")
        plot.refresh()
        summary.update(chart.summary)


__all__ = ["MetricChart"]
