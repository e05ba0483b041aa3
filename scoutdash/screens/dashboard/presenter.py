"""Dashboard presenter - navigation state machine and background-load coordination.

The presenter is the single owner of all dashboard session state: the
navigation state, the tab cache, pending tab loads, the single-slot metric
loader and the picker search. The screen feeds it key actions and calls
:meth:`DashboardPresenter.tick` from its poll timer; :meth:`build_frame`
returns an abstract :class:`DashboardFrame` for the screen to paint.

Nothing here awaits a fetch. Loads are dispatched through a spawner and
observed by polling on every tick.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from scoutdash.constants.enums import KeyAction, View
from scoutdash.constants.timeouts import SEARCH_DEBOUNCE, SPINNER_FRAME_INTERVAL
from scoutdash.constants.values import EMPTY_PLACEHOLDER, LOADING_HINT, SPINNER_FRAMES
from scoutdash.controllers.base.base_controller import BaseController, Spawner, spawn_task
from scoutdash.controllers.tabs.parsers.tab_parser import format_detail_table
from scoutdash.models.cache.tab_cache import CacheKey, TabCache
from scoutdash.models.core.application import Application, resolve_application
from scoutdash.models.state.navigation import DrillState, NavigationState, clamp_index
from scoutdash.screens.dashboard.config import (
    DEFAULT_CHART_WIDTH,
    LOADING_PREFIX,
    NO_APPLICATIONS,
    NO_MATCHES,
    PICKER_TITLE,
)
from scoutdash.utils.load_manager import DrillLoader, LoadManager
from scoutdash.utils.search_filter import SearchFilter, filter_applications
from scoutdash.utils.series_renderer import ChartData, render_series_chart

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardFrame:
    """Everything the drawing layer needs for one redraw."""

    breadcrumb: tuple[str, ...]
    in_picker: bool
    in_drill: bool
    active_view: View | None
    view_names: tuple[str, ...]
    title: str
    rows: tuple[str, ...] = ()
    selected: int | None = None
    text: str | None = None
    chart: ChartData | None = None
    busy_count: int = 0
    busy: str | None = None
    search_query: str = ""
    refresh_interval: int = 0


class DashboardPresenter:
    """Engine context for one dashboard session.

    Args:
        applications: Application list fetched once at startup.
        controller: Source of tab datasets and metric series.
        spawner: Starts a background fetch and returns its poll handle.
        clock: Monotonic clock in seconds.
        refresh_interval: Auto-refresh period in seconds, 0 disables it.
        use_utc: Show timestamps in UTC instead of local time.
        initial_view: View opened for an application chosen via ``app_arg``.
        app_arg: Application id or name to open directly, if any.
    """

    def __init__(
        self,
        applications: Sequence[Application],
        controller: BaseController,
        *,
        spawner: Spawner = spawn_task,
        clock: Callable[[], float] = time.monotonic,
        refresh_interval: int = 0,
        use_utc: bool = False,
        initial_view: View = View.ENDPOINTS,
        app_arg: str | None = None,
    ) -> None:
        self.applications = list(applications)
        self.cache = TabCache()
        self.loads = LoadManager(controller.fetch_dataset, spawner)
        self.metric_loader = DrillLoader(controller.fetch_metric_series, spawner)
        self.search = SearchFilter(SEARCH_DEBOUNCE, clock)
        self.state = NavigationState()
        self.refresh_interval = refresh_interval
        self.use_utc = use_utc
        self.should_quit = False
        self._clock = clock
        self._visible = filter_applications(self.applications, "")
        self._last_refresh = clock()
        self._spinner_started = clock()

        if app_arg:
            resolved = resolve_application(self.applications, app_arg)
            if resolved is None:
                logger.info("No application matches %r, showing picker", app_arg)
            else:
                index, application = resolved
                self.state.picker_selected = index
                # The first tick dispatches the load once the loop is running.
                self.state.enter_application(application, initial_view)
                logger.info("Opened application %s on startup", application.id)

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def visible_applications(self) -> list[Application]:
        """Applications matching the committed search, in server order."""
        return [self.applications[index] for index in self._visible]

    @property
    def current_key(self) -> CacheKey | None:
        app_id = self.state.app_id
        if app_id is None:
            return None
        return CacheKey(app_id, self.state.view)

    @property
    def busy_count(self) -> int:
        return len(self.loads) + (1 if self.metric_loader.is_pending else 0)

    def _current_list_len(self) -> int:
        if self.state.in_picker:
            return len(self._visible)
        key = self.current_key
        return self.cache.list_len(key) if key is not None else 0

    # =========================================================================
    # Input
    # =========================================================================

    def handle_key(self, action: KeyAction, character: str | None = None) -> None:
        """Apply one input action to the navigation state."""
        if action is KeyAction.QUIT:
            self.should_quit = True
            return
        if self.state.drill is not None:
            if action in (
                KeyAction.BACK,
                KeyAction.PREVIOUS_VIEW,
                KeyAction.NEXT_VIEW,
                KeyAction.CONFIRM,
            ):
                self.close_drill()
            return
        if self.state.in_picker:
            self._handle_picker_key(action, character)
        else:
            self._handle_app_key(action)

    def _handle_picker_key(self, action: KeyAction, character: str | None) -> None:
        if action is KeyAction.CURSOR_UP:
            self._move_cursor(-1)
        elif action is KeyAction.CURSOR_DOWN:
            self._move_cursor(1)
        elif action is KeyAction.CONFIRM:
            self.select_highlighted_application()
        elif action is KeyAction.BACKSPACE:
            self.search.backspace()
        elif action is KeyAction.CHARACTER and character:
            self.search.type_character(character)

    def _handle_app_key(self, action: KeyAction) -> None:
        if action is KeyAction.BACK:
            self.leave_application()
        elif action is KeyAction.PREVIOUS_VIEW:
            self.switch_view(self.state.view.previous())
        elif action is KeyAction.NEXT_VIEW:
            self.switch_view(self.state.view.next())
        elif action is KeyAction.CURSOR_UP:
            self._move_cursor(-1)
        elif action is KeyAction.CURSOR_DOWN:
            self._move_cursor(1)
        elif action is KeyAction.CONFIRM:
            self.open_drill()
        elif action is KeyAction.RELOAD:
            self.reload()

    def _move_cursor(self, delta: int) -> None:
        length = self._current_list_len()
        if length == 0:
            return
        if self.state.in_picker:
            self.state.picker_selected = clamp_index(self.state.picker_selected + delta, length)
        else:
            self.state.selected = clamp_index(self.state.selected + delta, length)

    # =========================================================================
    # Transitions
    # =========================================================================

    def select_highlighted_application(self) -> None:
        """Open the highlighted picker entry in the Endpoints view."""
        if not 0 <= self.state.picker_selected < len(self._visible):
            return
        application = self.applications[self._visible[self.state.picker_selected]]
        self.open_application(application, View.ENDPOINTS)

    def open_application(self, application: Application, view: View) -> None:
        """Switch to ``application`` with a clean per-application state."""
        self._abort_loads()
        self.cache.clear()
        self.state.enter_application(application, view)
        self._last_refresh = self._clock()
        self._request_view()
        logger.info("Opened application %s (%s)", application.id, application.name)

    def leave_application(self) -> None:
        """Return to the picker, dropping everything tied to the application."""
        app_id = self.state.app_id
        self._abort_loads()
        if app_id is not None:
            self.cache.clear_application(app_id)
        self.state.leave_application()
        self.search.clear()
        self._visible = filter_applications(self.applications, "")
        self.state.picker_selected = clamp_index(self.state.picker_selected, len(self._visible))
        logger.info("Returned to application picker")

    def switch_view(self, view: View) -> None:
        self.state.view = view
        self.state.selected = 0
        self._request_view()

    def open_drill(self) -> None:
        """Open the detail overlay for the highlighted row.

        Metric rows dispatch a series load and show a placeholder; other
        rows are formatted from the cached record with no network call.
        """
        key = self.current_key
        dataset = self.cache.get(key) if key is not None else None
        if key is None or dataset is None:
            return
        if key.view is View.METRICS:
            metric_type = dataset.metric_type(self.state.selected)
            if metric_type is None:
                return
            self.metric_loader.start(key.app_id, metric_type)
            self.state.drill = DrillState.loading_metric(metric_type)
            return
        item = dataset.item(self.state.selected)
        if item is None:
            return
        label, record = item
        self.state.drill = DrillState.preformatted(label, format_detail_table(record))

    def close_drill(self) -> None:
        self.metric_loader.cancel()
        self.state.drill = None

    def reload(self) -> bool:
        """Re-dispatch the current view's load unless one is in flight."""
        key = self.current_key
        if key is None:
            return False
        return self.loads.start(key)

    def _request_view(self) -> None:
        key = self.current_key
        if key is None or key in self.cache or self.loads.is_pending(key):
            return
        self.loads.start(key)

    def _abort_loads(self) -> None:
        self.loads.cancel_all()
        self.metric_loader.cancel()
        self.state.drill = None

    # =========================================================================
    # Tick
    # =========================================================================

    def tick(self) -> None:
        """Advance the engine by one poll interval. Never blocks."""
        now = self._clock()
        applied = self.loads.resolve(self.cache, self.state.app_id)
        if self.current_key in applied:
            self.state.selected = clamp_index(self.state.selected, self._current_list_len())
        self._collect_metric()

        if self.state.in_picker and self.search.settle():
            self._visible = filter_applications(self.applications, self.search.committed)
            self.state.picker_selected = clamp_index(self.state.picker_selected, len(self._visible))

        self._ensure_current_view()
        self._auto_refresh(now)

    def _collect_metric(self) -> None:
        outcome = self.metric_loader.collect()
        if outcome is None:
            return
        app_id, metric_type, result = outcome
        drill = self.state.drill
        if (
            result.cancelled
            or app_id != self.state.app_id
            or drill is None
            or drill.metric_type != metric_type
        ):
            logger.debug("Discarded metric series %s", metric_type)
            return
        if result.success:
            self.state.drill = DrillState.metric_series(metric_type, result.data)
            logger.debug("Loaded metric %s (%.2fms)", metric_type, result.duration_ms)
        else:
            message = result.error or "Unknown error"
            self.state.drill = DrillState.metric_error(metric_type, message)
            logger.warning("Metric %s failed: %s", metric_type, message)

    def _ensure_current_view(self) -> None:
        # Errored keys wait for navigation, reload or the refresh timer.
        key = self.current_key
        if (
            key is None
            or key in self.cache
            or self.loads.is_pending(key)
            or self.cache.error(key) is not None
            or self.metric_loader.is_pending
        ):
            return
        self.loads.start(key)

    def _auto_refresh(self, now: float) -> None:
        if self.refresh_interval <= 0 or self.state.in_picker:
            return
        if now - self._last_refresh < self.refresh_interval:
            return
        self._last_refresh = now
        if self.reload():
            logger.debug("Auto-refresh dispatched %s", self.current_key)

    # =========================================================================
    # Frame
    # =========================================================================

    def build_frame(self, width: int = DEFAULT_CHART_WIDTH) -> DashboardFrame:
        """Describe what should be on screen right now."""
        busy_count = self.busy_count
        busy = None
        if busy_count:
            elapsed = self._clock() - self._spinner_started
            frame = SPINNER_FRAMES[int(elapsed / SPINNER_FRAME_INTERVAL) % len(SPINNER_FRAMES)]
            busy = f"{frame} {busy_count}"
        common = {
            "breadcrumb": tuple(self.state.breadcrumb),
            "view_names": tuple(view.value for view in View.ordered()),
            "busy_count": busy_count,
            "busy": busy,
            "refresh_interval": self.refresh_interval,
        }
        if self.state.in_picker:
            return self._picker_frame(common)
        return self._application_frame(common, width)

    def _picker_frame(self, common: dict) -> DashboardFrame:
        rows = tuple(app.row_label for app in self.visible_applications)
        text = None
        if not rows:
            text = NO_MATCHES if self.search.committed.strip() else NO_APPLICATIONS
        return DashboardFrame(
            in_picker=True,
            in_drill=False,
            active_view=None,
            title=PICKER_TITLE,
            rows=rows,
            selected=self.state.picker_selected if rows else None,
            text=text,
            search_query=self.search.pending,
            **common,
        )

    def _application_frame(self, common: dict, width: int) -> DashboardFrame:
        view = self.state.view
        drill = self.state.drill
        if drill is not None:
            chart = None
            text = None
            if drill.is_series:
                chart = render_series_chart(
                    drill.series, width, drill.metric_type, self.use_utc
                )
            else:
                text = drill.text
            return DashboardFrame(
                in_picker=False,
                in_drill=True,
                active_view=view,
                title=drill.label,
                text=text,
                chart=chart,
                **common,
            )

        key = self.current_key
        dataset = self.cache.get(key) if key is not None else None
        rows = tuple(dataset.labels()) if dataset is not None else ()
        text = None
        if not rows and key is not None:
            error = self.cache.error(key)
            if self.loads.is_pending(key):
                text = f"{LOADING_PREFIX} {view.value.lower()}…\n\n{LOADING_HINT}"
            elif error is not None:
                text = f"Error: {error}"
            else:
                text = EMPTY_PLACEHOLDER
        return DashboardFrame(
            in_picker=False,
            in_drill=False,
            active_view=view,
            title=view.value,
            rows=rows,
            selected=self.state.selected if rows else None,
            text=text,
            **common,
        )


__all__ = ["DashboardFrame", "DashboardPresenter"]
