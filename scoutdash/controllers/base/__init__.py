"""Base controller package."""

from scoutdash.controllers.base.base_controller import (
    BaseController,
    FetchHandle,
    FetchResult,
    Spawner,
    TaskHandle,
    spawn_task,
)

__all__ = [
    "BaseController",
    "FetchHandle",
    "FetchResult",
    "Spawner",
    "TaskHandle",
    "spawn_task",
]
