"""Terminal-independent display helpers."""

from scoutdash.display.logging_config import setup_logging

__all__ = ["setup_logging"]
