"""Limit values for display and validation."""

from typing import Final

# ============================================================================
# Chart limits
# ============================================================================

MAX_CHART_BARS: Final = 32
MIN_CHART_BARS: Final = 1
CHART_CELLS_PER_BAR: Final = 4
TIME_LABEL_CHARS: Final = 5

# ============================================================================
# Text limits
# ============================================================================

DETAIL_KEY_WIDTH_MAX: Final = 24
PLAIN_COLUMN_WIDTH: Final = 12
PLAIN_RULE_WIDTH_MAX: Final = 80

# ============================================================================
# Query limits
# ============================================================================

MAX_QUERY_RANGE_SECONDS: Final = 14 * 24 * 3600

__all__ = [
    "CHART_CELLS_PER_BAR",
    "DETAIL_KEY_WIDTH_MAX",
    "MAX_CHART_BARS",
    "MAX_QUERY_RANGE_SECONDS",
    "MIN_CHART_BARS",
    "PLAIN_COLUMN_WIDTH",
    "PLAIN_RULE_WIDTH_MAX",
    "TIME_LABEL_CHARS",
]
