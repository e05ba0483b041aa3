"""Constants module for ScoutDash.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, lookup tables with Final)
- timeouts.py: Timeout and interval values (seconds)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings and queries

Note: Keyboard bindings are defined in scoutdash.keyboard module.
"""

from scoutdash.constants.defaults import (
    INSIGHTS_LIMIT_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    TRAILING_WINDOW_DEFAULT,
)
from scoutdash.constants.enums import (
    KeyAction,
    OutputFormat,
    ScoutUrlType,
    View,
)
from scoutdash.constants.limits import (
    MAX_CHART_BARS,
    MAX_QUERY_RANGE_SECONDS,
    TIME_LABEL_CHARS,
)
from scoutdash.constants.timeouts import (
    API_REQUEST_TIMEOUT,
    POLL_INTERVAL,
    SEARCH_DEBOUNCE,
)
from scoutdash.constants.values import (
    API_BASE,
    APP_TITLE,
    USER_AGENT,
)

__all__ = [
    "API_BASE",
    "API_REQUEST_TIMEOUT",
    "APP_TITLE",
    "INSIGHTS_LIMIT_DEFAULT",
    "MAX_CHART_BARS",
    "MAX_QUERY_RANGE_SECONDS",
    "POLL_INTERVAL",
    "REFRESH_INTERVAL_DEFAULT",
    "SEARCH_DEBOUNCE",
    "TIME_LABEL_CHARS",
    "TRAILING_WINDOW_DEFAULT",
    "USER_AGENT",
    # Enums
    "KeyAction",
    "OutputFormat",
    "ScoutUrlType",
    "View",
]
