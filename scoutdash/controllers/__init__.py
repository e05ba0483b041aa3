"""Controllers for ScoutDash data sources."""

from scoutdash.controllers.base.base_controller import BaseController
from scoutdash.controllers.tabs.controller import TabController

__all__ = [
    "BaseController",
    "TabController",
]
