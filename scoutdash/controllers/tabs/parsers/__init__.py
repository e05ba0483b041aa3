"""Tab payload parsers."""

from scoutdash.controllers.tabs.parsers.tab_parser import (
    TabParser,
    format_detail_table,
    time_sort_key,
)

__all__ = ["TabParser", "format_detail_table", "time_sort_key"]
