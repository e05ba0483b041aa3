"""LoadManager - background tab loads keyed by (application, view).

This module provides:
- LoadManager: at most one in-flight fetch per CacheKey, polled for
  completion once per UI tick, with results applied to the TabCache only
  while their application is still the active one.
- DrillLoader: a single-slot loader for metric series; a new request aborts
  the previous one so a slow earlier series can never overwrite a newer
  selection.

Neither class awaits a fetch. Tasks are spawned through a Spawner (asyncio
tasks by default, Textual workers in the app) and observed with a
non-blocking ``is_finished`` check.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from scoutdash.controllers.base.base_controller import (
    FetchHandle,
    FetchResult,
    Spawner,
    spawn_task,
)
from scoutdash.models.cache.tab_cache import CacheKey, TabCache, TabDataset

logger = logging.getLogger(__name__)

DatasetFetcher = Callable[[CacheKey], Awaitable[TabDataset]]
SeriesFetcher = Callable[[int, str], Awaitable[Any]]


class LoadManager:
    """Dispatch and resolve background tab loads.

    Usage:
        manager = LoadManager(controller.fetch_dataset)
        manager.start(CacheKey(42, View.ENDPOINTS))
        ...
        # once per tick
        applied = manager.resolve(cache, active_app_id=42)
    """

    def __init__(self, fetch: DatasetFetcher, spawner: Spawner = spawn_task) -> None:
        self._fetch = fetch
        self._spawner = spawner
        self._pending: dict[CacheKey, FetchHandle] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def is_pending(self, key: CacheKey) -> bool:
        return key in self._pending

    def pending_keys(self) -> list[CacheKey]:
        return list(self._pending)

    def start(self, key: CacheKey) -> bool:
        """Dispatch a fetch for ``key`` unless one is already in flight.

        Returns:
            True if a new fetch was dispatched.
        """
        if key in self._pending:
            return False
        fetch = self._fetch
        name = f"tab-{key.app_id}-{key.view.name.lower()}"
        self._pending[key] = self._spawner(lambda: fetch(key), name)
        logger.debug("Dispatched %s", name)
        return True

    def collect_finished(self) -> list[tuple[CacheKey, FetchResult]]:
        """Remove and return every load whose task has finished."""
        finished = [key for key, handle in self._pending.items() if handle.is_finished]
        results: list[tuple[CacheKey, FetchResult]] = []
        for key in finished:
            handle = self._pending.pop(key)
            results.append((key, handle.result()))
        return results

    def resolve(self, cache: TabCache, active_app_id: int | None) -> list[CacheKey]:
        """Apply finished loads to ``cache``.

        Results for an application other than ``active_app_id`` are stale and
        dropped. Cancelled loads are dropped silently; other failures are
        stored as the key's error message.

        Returns:
            Keys whose dataset was written to the cache.
        """
        applied: list[CacheKey] = []
        for key, result in self.collect_finished():
            if key.app_id != active_app_id:
                logger.debug("Discarded stale load %s", key)
                continue
            if result.cancelled:
                logger.debug("Load %s was cancelled (%.2fms)", key, result.duration_ms)
                continue
            if result.success:
                cache.store(key, result.data)
                applied.append(key)
                logger.debug("Loaded %s (%.2fms)", key, result.duration_ms)
            else:
                message = result.error or "Unknown error"
                cache.store_error(key, message)
                logger.warning("Load %s failed: %s", key, message)
        return applied

    def cancel_all(self) -> None:
        """Abort every in-flight load and forget it.

        Aborted tasks may still finish; their handles are no longer tracked so
        their results are never observed.
        """
        for key, handle in self._pending.items():
            handle.cancel()
            logger.debug("Cancelled load %s", key)
        self._pending.clear()


@dataclass
class _MetricSlot:
    app_id: int
    metric_type: str
    handle: FetchHandle


class DrillLoader:
    """Single-slot loader for metric series."""

    def __init__(self, fetch: SeriesFetcher, spawner: Spawner = spawn_task) -> None:
        self._fetch = fetch
        self._spawner = spawner
        self._slot: _MetricSlot | None = None

    @property
    def is_pending(self) -> bool:
        return self._slot is not None

    @property
    def pending_request(self) -> tuple[int, str] | None:
        if self._slot is None:
            return None
        return self._slot.app_id, self._slot.metric_type

    def start(self, app_id: int, metric_type: str) -> None:
        """Abort any outstanding series load, then dispatch this one."""
        self.cancel()
        fetch = self._fetch
        name = f"metric-{app_id}-{metric_type}"
        handle = self._spawner(lambda: fetch(app_id, metric_type), name)
        self._slot = _MetricSlot(app_id, metric_type, handle)
        logger.debug("Dispatched %s", name)

    def cancel(self) -> None:
        if self._slot is not None:
            self._slot.handle.cancel()
            logger.debug("Cancelled metric load %s", self._slot.metric_type)
            self._slot = None

    def collect(self) -> tuple[int, str, FetchResult] | None:
        """Return ``(app_id, metric_type, result)`` once the slot's task finishes."""
        slot = self._slot
        if slot is None or not slot.handle.is_finished:
            return None
        self._slot = None
        return slot.app_id, slot.metric_type, slot.handle.result()


__all__ = [
    "DatasetFetcher",
    "DrillLoader",
    "LoadManager",
    "SeriesFetcher",
]
