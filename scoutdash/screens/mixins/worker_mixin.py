"""WorkerMixin - Textual workers as pollable fetch handles.

Dashboard loads run as Textual workers so they share the app's event loop
and are cancelled with the screen. The engine never receives worker
messages; it polls each :class:`WorkerHandle` once per tick instead.
"""

from __future__ import annotations

import logging
import time
from contextlib import suppress
from typing import Any

from textual._context import NoActiveAppError
from textual.worker import Worker, WorkerState

from scoutdash.controllers.base.base_controller import (
    CANCELLED_MESSAGE,
    FetchFactory,
    FetchResult,
    describe_error,
)

logger = logging.getLogger(__name__)

WORKER_GROUP = "dashboard-fetch"


class WorkerHandle:
    """:class:`FetchHandle` over a Textual ``Worker``."""

    def __init__(self, worker: Worker[Any]) -> None:
        self._worker = worker
        self._started_at = time.monotonic()

    @property
    def name(self) -> str:
        return self._worker.name

    @property
    def is_finished(self) -> bool:
        return self._worker.is_finished

    def cancel(self) -> None:
        self._worker.cancel()

    def result(self) -> FetchResult:
        duration_ms = (time.monotonic() - self._started_at) * 1000
        state = self._worker.state
        if state == WorkerState.CANCELLED:
            return FetchResult(
                success=False,
                error=CANCELLED_MESSAGE,
                duration_ms=duration_ms,
                cancelled=True,
            )
        if state == WorkerState.ERROR:
            error = self._worker.error
            message = describe_error(error) if error is not None else "Unknown error"
            return FetchResult(success=False, error=message, duration_ms=duration_ms)
        if state == WorkerState.SUCCESS:
            return FetchResult(success=True, data=self._worker.result, duration_ms=duration_ms)
        raise RuntimeError(f"Worker '{self.name}' has not finished")


class WorkerMixin:
    """Mixin for screens that spawn dashboard fetches as workers.

    Usage:
        ```python
        class MyScreen(WorkerMixin, Screen):
            def on_mount(self) -> None:
                manager = LoadManager(controller.fetch_dataset, self.spawn_worker)
        ```
    """

    def spawn_worker(self, factory: FetchFactory, name: str) -> WorkerHandle:
        """Run ``factory()`` as a non-exclusive worker that never exits the app."""
        worker = self.run_worker(  # type: ignore[attr-defined]
            factory(),
            name=name,
            group=WORKER_GROUP,
            exclusive=False,
            exit_on_error=False,
        )
        return WorkerHandle(worker)

    def cancel_workers(self) -> None:
        """Cancel every fetch worker started by this screen."""
        with suppress(NoActiveAppError):
            self.workers.cancel_node(self)  # type: ignore[attr-defined]

    def on_unmount(self) -> None:
        self.cancel_workers()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Log worker outcomes; results are read by polling, not here."""
        if event.state == WorkerState.CANCELLED:
            logger.debug("Worker '%s' was cancelled", event.worker.name)
        elif event.state == WorkerState.ERROR:
            logger.debug("Worker '%s' error: %s", event.worker.name, event.worker.error)
        elif event.state == WorkerState.SUCCESS:
            logger.debug("Worker '%s' completed successfully", event.worker.name)


__all__ = [
    "WORKER_GROUP",
    "WorkerHandle",
    "WorkerMixin",
]
