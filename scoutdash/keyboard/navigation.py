"""Key translation for the dashboard engine.

Textual key names are mapped onto :class:`KeyAction` values. ``r`` reloads
in application view but is ordinary search input in the picker; the vim
keys ``q h j k l`` are never search input.
"""

from __future__ import annotations

from typing import Final

from scoutdash.constants.enums import KeyAction

# ============================================================================
# Key map
# ============================================================================

KEY_ACTIONS: Final[dict[str, KeyAction]] = {
    "q": KeyAction.QUIT,
    "escape": KeyAction.BACK,
    "left": KeyAction.PREVIOUS_VIEW,
    "h": KeyAction.PREVIOUS_VIEW,
    "right": KeyAction.NEXT_VIEW,
    "l": KeyAction.NEXT_VIEW,
    "up": KeyAction.CURSOR_UP,
    "k": KeyAction.CURSOR_UP,
    "down": KeyAction.CURSOR_DOWN,
    "j": KeyAction.CURSOR_DOWN,
    "enter": KeyAction.CONFIRM,
    "backspace": KeyAction.BACKSPACE,
}

RELOAD_KEY: Final = "r"

# ============================================================================
# Footer hints
# ============================================================================

PICKER_HINT: Final = "type to search  ↑↓/jk select  Enter open  q quit"
APP_VIEW_HINT: Final = "←→/hl view  ↑↓/jk select  Enter detail  r reload  Esc apps  q quit"
DRILL_HINT: Final = "Esc/Enter/←→ close  q quit"


def resolve_key(
    key: str, character: str | None, in_picker: bool
) -> tuple[KeyAction, str | None] | None:
    """Translate one key press into an engine action.

    Args:
        key: Textual key name (``"enter"``, ``"left"``, ``"a"``...).
        character: Printable character for the key, if any.
        in_picker: Whether the application picker is showing.

    Returns:
        ``(action, character)`` or None when the key means nothing here.
    """
    action = KEY_ACTIONS.get(key)
    if action is not None:
        return action, None
    if key == RELOAD_KEY and not in_picker:
        return KeyAction.RELOAD, None
    if character is not None and len(character) == 1 and character.isprintable():
        return KeyAction.CHARACTER, character
    return None


__all__ = [
    "APP_VIEW_HINT",
    "DRILL_HINT",
    "KEY_ACTIONS",
    "PICKER_HINT",
    "RELOAD_KEY",
    "resolve_key",
]
