"""Main application class for the ScoutDash TUI."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from textual.app import App
from textual.binding import Binding

from scoutdash.client.client import ScoutClient
from scoutdash.constants import APP_TITLE
from scoutdash.controllers.base.base_controller import BaseController
from scoutdash.controllers.tabs.controller import TabController
from scoutdash.keyboard.app import APP_BINDINGS
from scoutdash.models.core.application import Application
from scoutdash.models.state.app_settings import AppSettings
from scoutdash.screens.dashboard.dashboard_screen import DashboardScreen

logger = logging.getLogger(__name__)


class ScoutDashApp(App[None]):
    """Main TUI application for ScoutDash.

    The application list is fetched before the app starts; everything else
    is loaded in the background by the dashboard screen.
    """

    TITLE = APP_TITLE
    CSS_PATH = "css/app.tcss"
    BINDINGS: list[Binding] = APP_BINDINGS

    def __init__(
        self,
        applications: Sequence[Application],
        settings: AppSettings,
        *,
        client: ScoutClient | None = None,
        controller: BaseController | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings
        self._applications = list(applications)
        self._client = client
        if controller is None:
            if client is None:
                raise ValueError("ScoutDashApp needs a client or a controller")
            controller = TabController(client)
        self._controller = controller

    def on_mount(self) -> None:
        logger.info("Starting dashboard with %d applications", len(self._applications))
        self.push_screen(
            DashboardScreen(
                self._applications,
                self._controller,
                refresh_interval=self.settings.refresh_interval,
                use_utc=self.settings.use_utc,
                initial_view=self.settings.tab,
                app_arg=self.settings.app,
            )
        )

    async def on_unmount(self) -> None:
        if self._client is not None:
            await self._client.aclose()


__all__ = ["ScoutDashApp"]
