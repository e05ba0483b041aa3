"""Unit tests for ScoutDashApp class attributes and construction.

Tests avoid running the Textual event loop; the smoke suite covers that.
"""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from scoutdash.app import ScoutDashApp
from scoutdash.client.client import ScoutClient
from scoutdash.constants import APP_TITLE
from scoutdash.controllers.tabs.controller import TabController
from scoutdash.keyboard.app import APP_BINDINGS
from scoutdash.models.state.app_settings import AppSettings

# =============================================================================
# Class Attributes
# =============================================================================


class TestAppClassAttributes:
    """Test ScoutDashApp class-level attributes."""

    def test_app_bindings_are_binding_objects(self) -> None:
        """BINDINGS must be a list of Binding objects."""
        for binding in ScoutDashApp.BINDINGS:
            assert isinstance(binding, Binding)

    def test_app_bindings_match_app_bindings_constant(self) -> None:
        assert ScoutDashApp.BINDINGS is APP_BINDINGS

    def test_only_ctrl_c_is_bound(self) -> None:
        """Letters must stay free for picker search."""
        assert [binding.key for binding in APP_BINDINGS] == ["ctrl+c"]

    def test_app_css_path_value(self) -> None:
        assert "app.tcss" in str(ScoutDashApp.CSS_PATH)

    def test_app_title_set(self) -> None:
        assert ScoutDashApp.TITLE == APP_TITLE

    def test_app_inherits_from_textual_app(self) -> None:
        assert issubclass(ScoutDashApp, App)


# =============================================================================
# Instantiation
# =============================================================================


class TestAppInstantiation:
    """Test ScoutDashApp constructor wiring."""

    def test_client_builds_tab_controller(self) -> None:
        app = ScoutDashApp([], AppSettings(), client=ScoutClient("key"))
        assert isinstance(app._controller, TabController)
        assert app.settings.refresh_interval == 0

    def test_explicit_controller_wins(self, controller) -> None:
        app = ScoutDashApp([], AppSettings(), client=ScoutClient("key"), controller=controller)
        assert app._controller is controller
