"""Screen mixins."""

from scoutdash.screens.mixins.worker_mixin import WorkerHandle, WorkerMixin

__all__ = ["WorkerHandle", "WorkerMixin"]
