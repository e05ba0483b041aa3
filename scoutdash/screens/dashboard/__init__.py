"""Dashboard screen: application picker, view tabs and drill-down detail."""

from scoutdash.screens.dashboard.dashboard_screen import DashboardScreen
from scoutdash.screens.dashboard.presenter import DashboardFrame, DashboardPresenter

__all__ = ["DashboardFrame", "DashboardPresenter", "DashboardScreen"]
