"""Scalar constants (strings, names, lookup tables)."""

from typing import Final

from scoutdash import __version__

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "ScoutDash"
APP_NAME: Final = "scoutdash"
USER_AGENT: Final = f"{APP_NAME}/{__version__}"

# ============================================================================
# API
# ============================================================================

API_BASE: Final = "https://scoutapm.com/api/v0"
API_KEY_HEADER: Final = "X-SCOUT-API"

VALID_METRICS: Final = (
    "apdex",
    "response_time",
    "response_time_95th",
    "errors",
    "throughput",
    "queue_time",
)
VALID_INSIGHTS: Final = ("n_plus_one", "memory_bloat", "slow_query")

METRIC_UNITS: Final[dict[str, str]] = {
    "throughput": "RPM",
    "response_time": "ms",
    "response_time_95th": "ms",
    "queue_time": "ms",
    "apdex": "",
    "errors": "count",
}

# ============================================================================
# Display strings
# ============================================================================

PICKER_BREADCRUMB: Final = "Select app"
EMPTY_PLACEHOLDER: Final = "No data or select an item and press Enter."
NO_SERIES_PLACEHOLDER: Final = "No time-series points in response."
LOADING_HINT: Final = "Usually 1–3 seconds depending on network."
SPINNER_FRAMES: Final = ("◐", "◓", "◑", "◒")

__all__ = [
    "API_BASE",
    "API_KEY_HEADER",
    "APP_NAME",
    "APP_TITLE",
    "EMPTY_PLACEHOLDER",
    "LOADING_HINT",
    "METRIC_UNITS",
    "NO_SERIES_PLACEHOLDER",
    "PICKER_BREADCRUMB",
    "SPINNER_FRAMES",
    "USER_AGENT",
    "VALID_INSIGHTS",
    "VALID_METRICS",
]
