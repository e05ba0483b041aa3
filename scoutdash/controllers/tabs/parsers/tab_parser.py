"""Parsers turning raw API results into view datasets and detail text."""

from __future__ import annotations

from typing import Any

from scoutdash.constants.enums import View
from scoutdash.constants.limits import DETAIL_KEY_WIDTH_MAX
from scoutdash.models.cache.tab_cache import TabDataset

_TIME_FIELDS = ("last_seen", "first_seen", "timestamp", "created_at", "time", "reported_at")


def time_sort_key(record: Any) -> str:
    """Return the first ISO-ish time string found on a record, else ``""``.

    ISO 8601 strings sort chronologically under plain string comparison.
    """
    if not isinstance(record, dict):
        return ""
    for name in _TIME_FIELDS:
        value = record.get(name)
        if isinstance(value, str):
            return value
        if value is not None:
            return ""
    return ""


def _newest_first(rows: list[tuple[str, Any]]) -> list[tuple[str, Any]]:
    return sorted(rows, key=lambda row: time_sort_key(row[1]), reverse=True)


def _first_string(record: Any, *names: str) -> str | None:
    if not isinstance(record, dict):
        return None
    for name in names:
        value = record.get(name)
        if isinstance(value, str):
            return value
        if value is not None:
            return None
    return None


class TabParser:
    """Extract list rows for each view from its API payload."""

    def endpoints(self, results: Any) -> TabDataset:
        """Endpoints from ``{"endpoints": [...]}`` or a bare array, newest first."""
        items: Any = None
        if isinstance(results, dict):
            items = results.get("endpoints")
        if not isinstance(items, list):
            items = results if isinstance(results, list) else []
        rows = [
            (_first_string(item, "name", "transaction_name") or "?", item)
            for item in items
        ]
        return TabDataset(view=View.ENDPOINTS, rows=tuple(_newest_first(rows)))

    def insights(self, results: Any) -> TabDataset:
        """Flatten insight categories (``n_plus_one``, ``slow_query``...), newest first."""
        rows: list[tuple[str, Any]] = []
        if isinstance(results, dict):
            for kind, items in results.items():
                if not isinstance(items, list):
                    continue
                for number, item in enumerate(items, start=1):
                    label = _first_string(item, "name", "title") or f"{kind} #{number}"
                    rows.append((label, item))
        if not rows and isinstance(results, list):
            for number, item in enumerate(results, start=1):
                label = _first_string(item, "name", "title") or f"Item {number}"
                rows.append((label, item))
        return TabDataset(view=View.INSIGHTS, rows=tuple(_newest_first(rows)))

    def metrics(self, metric_types: list[str]) -> TabDataset:
        return TabDataset(view=View.METRICS, metric_types=tuple(metric_types))

    def errors(self, groups: list[Any]) -> TabDataset:
        """Error groups sorted newest first; drill labels are ``Error #n``."""
        ordered = sorted(groups, key=time_sort_key, reverse=True)
        rows = tuple(
            (_first_string(group, "message", "name") or "?", group) for group in ordered
        )
        detail_labels = tuple(f"Error #{number}" for number in range(1, len(rows) + 1))
        return TabDataset(view=View.ERRORS, rows=rows, detail_labels=detail_labels)


def _detail_value(value: Any) -> str:
    if value is None:
        return "—"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return f"[{len(value)} items]"
    if isinstance(value, dict):
        return "{…}"
    return str(value)


def format_detail_table(record: Any) -> str:
    """Render a record's top-level fields as aligned ``key  value`` lines."""
    rows: list[tuple[str, str]] = []
    if isinstance(record, dict):
        rows = sorted((str(key), _detail_value(value)) for key, value in record.items())
    if not rows:
        return "  (no data)"
    width = min(max(len(key) for key, _ in rows), DETAIL_KEY_WIDTH_MAX)
    lines = [
        f"  {key[:width]:<{width}}  {value.replace(chr(10), ' ')}" for key, value in rows
    ]
    return "\n".join(lines) + "\n"


__all__ = [
    "TabParser",
    "format_detail_table",
    "time_sort_key",
]
