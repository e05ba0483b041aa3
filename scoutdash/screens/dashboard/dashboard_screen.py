"""Dashboard screen - paints presenter frames and feeds it keys and ticks."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Static

from scoutdash.constants.enums import View
from scoutdash.constants.timeouts import POLL_INTERVAL
from scoutdash.controllers.base.base_controller import BaseController
from scoutdash.keyboard.navigation import (
    APP_VIEW_HINT,
    DRILL_HINT,
    PICKER_HINT,
    resolve_key,
)
from scoutdash.models.core.application import Application
from scoutdash.screens.dashboard.config import (
    BREADCRUMB_ID,
    BREADCRUMB_SEPARATOR,
    BUSY_ID,
    CHART_ID,
    CONTENT_TITLE_ID,
    HINT_ID,
    LIST_ID,
    SEARCH_ID,
    TAB_SEPARATOR,
    TAB_STRIP_ID,
    TEXT_ID,
)
from scoutdash.screens.dashboard.presenter import DashboardFrame, DashboardPresenter
from scoutdash.screens.mixins.worker_mixin import WorkerMixin
from scoutdash.widgets import MetricChart, RowList

logger = logging.getLogger(__name__)


class DashboardScreen(WorkerMixin, Screen[None]):
    """Single screen of the dashboard.

    All state lives in the :class:`DashboardPresenter`. This screen only
    translates key events, drives the poll timer and repaints.
    """

    def __init__(
        self,
        applications: Sequence[Application],
        controller: BaseController,
        *,
        refresh_interval: int = 0,
        use_utc: bool = False,
        initial_view: View = View.ENDPOINTS,
        app_arg: str | None = None,
    ) -> None:
        super().__init__()
        self._applications = list(applications)
        self._controller = controller
        self._refresh_interval = refresh_interval
        self._use_utc = use_utc
        self._initial_view = initial_view
        self._app_arg = app_arg
        self.presenter: DashboardPresenter | None = None
        self._poll_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="dashboard"):
            with Horizontal(id="dashboard-header"):
                yield Static("", id=BREADCRUMB_ID)
                yield Static("", id=BUSY_ID)
            yield Static("", id=TAB_STRIP_ID)
            yield Static("", id=SEARCH_ID)
            yield Static("", id=CONTENT_TITLE_ID)
            yield RowList(id=LIST_ID)
            yield Static("", id=TEXT_ID)
            yield MetricChart(id=CHART_ID)
            yield Static("", id=HINT_ID)

    def on_mount(self) -> None:
        self.presenter = DashboardPresenter(
            self._applications,
            self._controller,
            spawner=self.spawn_worker,
            refresh_interval=self._refresh_interval,
            use_utc=self._use_utc,
            initial_view=self._initial_view,
            app_arg=self._app_arg,
        )
        self._poll_timer = self.set_interval(POLL_INTERVAL, self._on_poll)
        self._paint()

    def on_key(self, event: events.Key) -> None:
        presenter = self.presenter
        if presenter is None:
            return
        resolved = resolve_key(event.key, event.character, presenter.state.in_picker)
        if resolved is None:
            return
        event.stop()
        action, character = resolved
        presenter.handle_key(action, character)
        if presenter.should_quit:
            self.app.exit()
            return
        self._paint()

    def _on_poll(self) -> None:
        presenter = self.presenter
        if presenter is None:
            return
        presenter.tick()
        self._paint()

    # =========================================================================
    # Painting
    # =========================================================================

    def _paint(self) -> None:
        if self.presenter is None:
            return
        chart = self.query_one(f"#{CHART_ID}", MetricChart)
        frame = self.presenter.build_frame(chart.size.width or self.size.width)
        self._paint_header(frame)
        self._paint_body(frame)

    def _paint_header(self, frame: DashboardFrame) -> None:
        self.query_one(f"#{BREADCRUMB_ID}", Static).update(
            BREADCRUMB_SEPARATOR.join(frame.breadcrumb)
        )
        busy = frame.busy or ""
        if frame.refresh_interval > 0 and not frame.in_picker:
            busy = f"{busy}  ⟲ {frame.refresh_interval}s".strip()
        self.query_one(f"#{BUSY_ID}", Static).update(busy)

        tabs = self.query_one(f"#{TAB_STRIP_ID}", Static)
        tabs.display = not frame.in_picker
        if not frame.in_picker:
            strip = Text()
            for position, name in enumerate(frame.view_names):
                if position:
                    strip.append(TAB_SEPARATOR, style="dim")
                active = frame.active_view is not None and name == frame.active_view.value
                strip.append(name, style="bold reverse" if active else "")
            tabs.update(strip)

        search = self.query_one(f"#{SEARCH_ID}", Static)
        search.display = frame.in_picker
        search.update(f"Search: {frame.search_query}▏")

        self.query_one(f"#{CONTENT_TITLE_ID}", Static).update(Text(frame.title, style="bold"))
        if frame.in_picker:
            hint = PICKER_HINT
        elif frame.in_drill:
            hint = DRILL_HINT
        else:
            hint = APP_VIEW_HINT
        self.query_one(f"#{HINT_ID}", Static).update(hint)

    def _paint_body(self, frame: DashboardFrame) -> None:
        rows = self.query_one(f"#{LIST_ID}", RowList)
        text = self.query_one(f"#{TEXT_ID}", Static)
        chart = self.query_one(f"#{CHART_ID}", MetricChart)

        rows.display = bool(frame.rows)
        rows.show(frame.rows, frame.selected)
        text.display = frame.text is not None
        text.update(Text(frame.text or ""))
        chart.display = frame.chart is not None
        if frame.chart is not None:
            chart.show(frame.chart)


__all__ = ["DashboardScreen"]
