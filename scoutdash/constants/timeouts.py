"""Timeout constants.

All timeout and interval values for API requests, the UI poll loop, and
subprocess calls to secret managers.
"""

from typing import Final

# ============================================================================
# API timeouts (float, in seconds)
# ============================================================================

API_REQUEST_TIMEOUT: Final = 15.0

# ============================================================================
# UI loop intervals (float, in seconds)
# ============================================================================

POLL_INTERVAL: Final = 0.1
SEARCH_DEBOUNCE: Final = 0.2
SPINNER_FRAME_INTERVAL: Final = 0.14

# ============================================================================
# Process-level command timeouts
# ============================================================================

SECRET_COMMAND_TIMEOUT: Final = 30

__all__ = [
    "API_REQUEST_TIMEOUT",
    "POLL_INTERVAL",
    "SEARCH_DEBOUNCE",
    "SECRET_COMMAND_TIMEOUT",
    "SPINNER_FRAME_INTERVAL",
]
