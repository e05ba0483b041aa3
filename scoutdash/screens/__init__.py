"""Screens for the ScoutDash TUI."""

from scoutdash.screens.dashboard import DashboardScreen

__all__ = ["DashboardScreen"]
