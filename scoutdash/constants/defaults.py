"""Default values for settings and queries."""

import os
from typing import Final

# ============================================================================
# UI defaults
# ============================================================================

REFRESH_INTERVAL_DEFAULT: Final = 0
INITIAL_VIEW_DEFAULT: Final = "endpoints"
LOG_LEVEL_DEFAULT: Final = "info"
OUTPUT_FORMAT_DEFAULT: Final = "plain"
LOG_DIR: Final = os.path.join(os.path.expanduser("~"), ".cache", "scoutdash", "logs")

# ============================================================================
# Query defaults
# ============================================================================

TRAILING_WINDOW_DEFAULT: Final = "7days"
INSIGHTS_LIMIT_DEFAULT: Final = 50
OP_FIELD_DEFAULT: Final = "API_KEY"
KPXC_ATTRIBUTE_DEFAULT: Final = "Password"

__all__ = [
    "INITIAL_VIEW_DEFAULT",
    "INSIGHTS_LIMIT_DEFAULT",
    "KPXC_ATTRIBUTE_DEFAULT",
    "LOG_DIR",
    "LOG_LEVEL_DEFAULT",
    "OP_FIELD_DEFAULT",
    "OUTPUT_FORMAT_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "TRAILING_WINDOW_DEFAULT",
]
