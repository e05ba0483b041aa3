"""RowList widget - a selectable list of plain-text rows.

Standard Wrapper Pattern:
- Wraps Textual's Static; selection is owned by the caller, not the widget
- Only the window of rows around the selection that fits the widget height
  is rendered

CSS Classes: widget-row-list
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual.widgets import Static


def visible_window(total: int, selected: int | None, height: int) -> tuple[int, int]:
    """Return ``(start, stop)`` of the rows to draw so ``selected`` stays visible."""
    if height <= 0 or total <= height:
        return 0, total
    anchor = selected or 0
    start = max(0, min(anchor - height // 2, total - height))
    return start, start + height


class RowList(Static):
    """Non-focusable list of rows with one highlighted entry.

    Example:
        >>> rows = RowList(id="dashboard-list")
        >>> rows.show(["1  Shop", "2  Blog"], selected=0)
    """

    DEFAULT_CLASSES = "widget-row-list"

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__("", id=id, classes=classes)
        self._rows: tuple[str, ...] = ()
        self._selected: int | None = None

    def show(self, rows: Sequence[str], selected: int | None) -> None:
        rows = tuple(rows)
        if rows == self._rows and selected == self._selected:
            return
        self._rows = rows
        self._selected = selected
        self.update(self._render_rows())

    def on_resize(self) -> None:
        self.update(self._render_rows())

    def _render_rows(self) -> Text:
        start, stop = visible_window(len(self._rows), self._selected, self.size.height)
        text = Text(no_wrap=True, overflow="ellipsis")
        for index in range(start, stop):
            marker = "› " if index == self._selected else "  "
            style = "reverse bold" if index == self._selected else ""
            text.append(f"{marker}{self._rows[index]}", style=style)
            if index < stop - 1:
                text.append("\n")
        return text


__all__ = ["RowList", "visible_window"]
