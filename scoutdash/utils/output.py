"""Plain-text and JSON rendering for batch command results."""

from __future__ import annotations

import json
from typing import Any

from scoutdash.constants.limits import PLAIN_COLUMN_WIDTH, PLAIN_RULE_WIDTH_MAX

_INDENT = "  "


def _scalar_text(value: Any) -> str | None:
    """Text for a scalar JSON value, None for containers."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    return None


def _truncate(text: str, limit: int) -> str:
    text = text.replace("\n", " ")
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)] + "…"


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _table_lines(rows: list[Any], pad: str) -> list[str] | None:
    keys = list(rows[0].keys())
    if not keys:
        return None
    header = " ".join(f"{key:>{PLAIN_COLUMN_WIDTH}}" for key in keys)
    lines = [pad + header, pad + "-" * min(len(header), PLAIN_RULE_WIDTH_MAX)]
    for row in rows:
        if not isinstance(row, dict):
            continue
        cells = []
        for key in keys:
            text = _scalar_text(row.get(key)) if key in row else None
            cell = _truncate(text if text is not None else "-", PLAIN_COLUMN_WIDTH)
            cells.append(f"{cell:>{PLAIN_COLUMN_WIDTH}}")
        lines.append(pad + " ".join(cells))
    return lines


def _plain_lines(value: Any, depth: int) -> list[str]:
    pad = _INDENT * depth
    if isinstance(value, dict):
        lines = []
        for key, item in value.items():
            if _is_container(item):
                lines.append(f"{pad}{key}:")
                lines.extend(_plain_lines(item, depth + 1))
            else:
                lines.append(f"{pad}{key}: {_scalar_text(item)}")
        return lines
    if isinstance(value, list):
        if not value:
            return [f"{pad}<empty>"]
        if isinstance(value[0], dict) and len(value) > 1:
            table = _table_lines(value, pad)
            if table is not None:
                return table
        lines = []
        for number, item in enumerate(value, start=1):
            if _is_container(item):
                lines.append(f"{pad}[{number}]")
                lines.extend(_plain_lines(item, depth + 1))
            else:
                lines.append(f"{pad}{_scalar_text(item)}")
        return lines
    return [f"{pad}{_scalar_text(value)}"]


def format_plain(value: Any) -> str:
    """Render a decoded JSON value as human-readable text.

    Objects become ``key: value`` lines with nested containers indented,
    arrays of two or more objects become a right-aligned table keyed by the
    first object's fields, and empty arrays print ``<empty>``.
    """
    return "\n".join(_plain_lines(value, 0)) + "\n"


def format_json(value: Any) -> str:
    """Pretty JSON text."""
    return json.dumps(value, indent=2, ensure_ascii=False)


__all__ = ["format_json", "format_plain"]
