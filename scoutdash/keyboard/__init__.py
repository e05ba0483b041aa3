"""Keyboard module.

- app: App-level bindings (APP_BINDINGS)
- navigation: key translation for the dashboard engine (resolve_key)
"""

from scoutdash.keyboard.app import APP_BINDINGS
from scoutdash.keyboard.navigation import (
    APP_VIEW_HINT,
    DRILL_HINT,
    KEY_ACTIONS,
    PICKER_HINT,
    resolve_key,
)

__all__ = [
    "APP_BINDINGS",
    "APP_VIEW_HINT",
    "DRILL_HINT",
    "KEY_ACTIONS",
    "PICKER_HINT",
    "resolve_key",
]
