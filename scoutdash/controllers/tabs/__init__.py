"""Tab data controller package."""

from scoutdash.controllers.tabs.controller import TabController

__all__ = ["TabController"]
