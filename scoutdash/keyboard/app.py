"""App-level keyboard bindings.

Dashboard keys are translated by the screen's key handler (see
:mod:`scoutdash.keyboard.navigation`) because the picker needs raw
characters for search. Only keys that must work regardless of focus or
search state are real Textual bindings.
"""

from textual.binding import Binding

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("ctrl+c", "quit", "Quit", priority=True, show=False),
]

__all__ = [
    "APP_BINDINGS",
]
