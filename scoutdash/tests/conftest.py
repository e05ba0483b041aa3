"""Shared fakes for engine tests: pollable handles, a manual clock, a stub controller."""

from __future__ import annotations

from typing import Any

import pytest

from scoutdash.constants.enums import View
from scoutdash.controllers.base.base_controller import (
    CANCELLED_MESSAGE,
    BaseController,
    FetchFactory,
    FetchResult,
)
from scoutdash.models.cache.tab_cache import CacheKey, TabDataset
from scoutdash.models.core.application import Application


class FakeHandle:
    """FetchHandle finished by the test instead of an event loop."""

    def __init__(self, name: str, factory: FetchFactory) -> None:
        self.name = name
        self.factory = factory
        self.cancelled = False
        self._result: FetchResult | None = None

    @property
    def is_finished(self) -> bool:
        return self._result is not None

    def cancel(self) -> None:
        self.cancelled = True
        if self._result is None:
            self._result = FetchResult(success=False, error=CANCELLED_MESSAGE, cancelled=True)

    def result(self) -> FetchResult:
        assert self._result is not None
        return self._result

    def succeed(self, data: Any) -> None:
        self._result = FetchResult(success=True, data=data, duration_ms=1.0)

    def fail(self, message: str) -> None:
        self._result = FetchResult(success=False, error=message, duration_ms=1.0)


class FakeSpawner:
    """Spawner recording every handle it creates, in dispatch order."""

    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []

    def __call__(self, factory: FetchFactory, name: str) -> FakeHandle:
        handle = FakeHandle(name, factory)
        self.handles.append(handle)
        return handle

    def named(self, name: str) -> list[FakeHandle]:
        return [handle for handle in self.handles if handle.name == name]

    def last(self, name: str) -> FakeHandle:
        return self.named(name)[-1]


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubController(BaseController):
    """Controller whose coroutines are never awaited by engine tests."""

    def __init__(self) -> None:
        self.dataset_calls: list[CacheKey] = []
        self.metric_calls: list[tuple[int, str]] = []

    async def fetch_dataset(self, key: CacheKey) -> TabDataset:
        self.dataset_calls.append(key)
        return TabDataset(view=key.view)

    async def fetch_metric_series(self, app_id: int, metric_type: str) -> Any:
        self.metric_calls.append((app_id, metric_type))
        return []


def _endpoints_dataset(*names: str) -> TabDataset:
    return TabDataset(view=View.ENDPOINTS, rows=tuple((name, {"name": name}) for name in names))


@pytest.fixture
def make_endpoints():
    """Build an Endpoints dataset from row names."""
    return _endpoints_dataset


@pytest.fixture
def spawner() -> FakeSpawner:
    return FakeSpawner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller() -> StubController:
    return StubController()


@pytest.fixture
def applications() -> list[Application]:
    return [
        Application(id=1, name="Shop"),
        Application(id=22, name="Blog"),
        Application(id=301, name="Checkout API"),
    ]
