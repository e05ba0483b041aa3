"""Base controller and background-fetch handle contract.

Fetches never mutate dashboard state themselves. They are spawned as
independent tasks and observed through a :class:`FetchHandle`, which the
dashboard polls once per tick with a non-blocking ``is_finished`` check
before reading the single :class:`FetchResult` the task produced.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from scoutdash.models.cache.tab_cache import CacheKey, TabDataset

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Cancelled"


@dataclass
class FetchResult:
    """Outcome of one finished background fetch."""

    success: bool
    data: Any | None = None
    error: str | None = None
    duration_ms: float = 0.0
    cancelled: bool = False


def describe_error(error: BaseException) -> str:
    """Return a user-facing message for a fetch exception."""
    return str(error) or type(error).__name__


class FetchHandle(Protocol):
    """Handle to an in-flight fetch, polled without blocking."""

    @property
    def is_finished(self) -> bool: ...

    def cancel(self) -> None: ...

    def result(self) -> FetchResult: ...


FetchFactory = Callable[[], Awaitable[Any]]
Spawner = Callable[[FetchFactory, str], FetchHandle]


class TaskHandle:
    """:class:`FetchHandle` over a plain ``asyncio.Task``."""

    def __init__(self, task: asyncio.Task[Any]) -> None:
        self._task = task
        self._started_at = time.monotonic()

    @property
    def name(self) -> str:
        return self._task.get_name()

    @property
    def is_finished(self) -> bool:
        return self._task.done()

    def cancel(self) -> None:
        self._task.cancel()

    def result(self) -> FetchResult:
        if not self._task.done():
            raise RuntimeError(f"Task '{self.name}' has not finished")
        duration_ms = (time.monotonic() - self._started_at) * 1000
        if self._task.cancelled():
            return FetchResult(
                success=False,
                error=CANCELLED_MESSAGE,
                duration_ms=duration_ms,
                cancelled=True,
            )
        error = self._task.exception()
        if error is not None:
            return FetchResult(
                success=False, error=describe_error(error), duration_ms=duration_ms
            )
        return FetchResult(success=True, data=self._task.result(), duration_ms=duration_ms)


def spawn_task(factory: FetchFactory, name: str) -> TaskHandle:
    """Schedule ``factory()`` on the running loop and return its handle."""

    async def _run() -> Any:
        return await factory()

    task = asyncio.get_running_loop().create_task(_run(), name=name)
    return TaskHandle(task)


class BaseController(ABC):
    """Base controller for view data sources.

    Subclasses fetch one dataset per cache key; they are called from
    background tasks and must not touch UI state.
    """

    @abstractmethod
    async def fetch_dataset(self, key: CacheKey) -> TabDataset:
        """Fetch the dataset for ``key``.

        Raises:
            ScoutError: On authentication, API or transport failure.
        """
        ...

    @abstractmethod
    async def fetch_metric_series(self, app_id: int, metric_type: str) -> Any:
        """Fetch the raw time-series payload for one metric type."""
        ...


__all__ = [
    "CANCELLED_MESSAGE",
    "BaseController",
    "FetchFactory",
    "FetchHandle",
    "FetchResult",
    "Spawner",
    "TaskHandle",
    "describe_error",
    "spawn_task",
]
