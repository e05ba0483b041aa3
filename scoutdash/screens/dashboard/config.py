"""Dashboard screen configuration - widget IDs and display strings."""

from __future__ import annotations

# =============================================================================
# Widget IDs
# =============================================================================

BREADCRUMB_ID = "dashboard-breadcrumb"
BUSY_ID = "dashboard-busy"
TAB_STRIP_ID = "dashboard-tabs"
SEARCH_ID = "dashboard-search"
CONTENT_TITLE_ID = "dashboard-content-title"
LIST_ID = "dashboard-list"
TEXT_ID = "dashboard-text"
CHART_ID = "dashboard-chart"
HINT_ID = "dashboard-hint"

# =============================================================================
# Display strings
# =============================================================================

PICKER_TITLE = "Applications"
NO_APPLICATIONS = "No applications reported recently."
NO_MATCHES = "No applications match the search."
LOADING_PREFIX = "⟳  Loading"
BREADCRUMB_SEPARATOR = " › "
TAB_SEPARATOR = "  │  "
DEFAULT_CHART_WIDTH = 80
