"""All enum definitions for ScoutDash.

This module consolidates all enumerations used throughout the application.
"""

from __future__ import annotations

from enum import Enum, auto

# =============================================================================
# Dashboard Enums
# =============================================================================


class View(Enum):
    """Dashboard tabs shown for a selected application, in display order."""

    ENDPOINTS = "Endpoints"
    INSIGHTS = "Insights"
    METRICS = "Metrics"
    ERRORS = "Errors"

    @classmethod
    def ordered(cls) -> list[View]:
        return list(cls)

    @classmethod
    def parse(cls, value: str | View) -> View:
        """Resolve a view from its name or value, case-insensitively."""
        if isinstance(value, View):
            return value
        normalized = str(value).strip().lower()
        for view in cls:
            if normalized in (view.value.lower(), view.name.lower()):
                return view
        raise ValueError(f"Unknown view: {value!r}")

    def next(self) -> View:
        views = View.ordered()
        return views[(views.index(self) + 1) % len(views)]

    def previous(self) -> View:
        views = View.ordered()
        return views[(views.index(self) - 1) % len(views)]


class KeyAction(Enum):
    """Discrete input actions understood by the dashboard engine."""

    QUIT = auto()
    BACK = auto()
    PREVIOUS_VIEW = auto()
    NEXT_VIEW = auto()
    CURSOR_UP = auto()
    CURSOR_DOWN = auto()
    CONFIRM = auto()
    BACKSPACE = auto()
    CHARACTER = auto()
    RELOAD = auto()


# =============================================================================
# Output / Parsing Enums
# =============================================================================


class OutputFormat(Enum):
    """Batch-mode output formats."""

    PLAIN = "plain"
    JSON = "json"

    @classmethod
    def parse(cls, value: str | OutputFormat) -> OutputFormat:
        if isinstance(value, OutputFormat):
            return value
        normalized = str(value).strip().lower()
        if normalized in ("plain", "text", "p"):
            return cls.PLAIN
        if normalized in ("json", "j"):
            return cls.JSON
        raise ValueError(f"unknown output format: {value}")


class ScoutUrlType(Enum):
    """Resource kinds recognised in Scout APM web URLs."""

    APP = "app"
    ENDPOINT = "endpoint"
    TRACE = "trace"
    ERROR_GROUP = "error_group"
    INSIGHT = "insight"
    UNKNOWN = "unknown"


__all__ = [
    "KeyAction",
    "OutputFormat",
    "ScoutUrlType",
    "View",
]
