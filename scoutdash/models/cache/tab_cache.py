"""Per-application, per-view cache of loaded tab datasets.

Datasets are replaced wholesale when a load completes; they are never
patched in place. Load errors are stored alongside, keyed the same way,
until a successful load for the key supersedes them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, NamedTuple

from scoutdash.constants.enums import View

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    """Identifies one fetchable dataset."""

    app_id: int
    view: View


@dataclass(frozen=True)
class TabDataset:
    """Loaded content of one view.

    ``rows`` holds ``(label, record)`` pairs for list views; ``metric_types``
    holds metric names for the Metrics view.
    """

    view: View
    rows: tuple[tuple[str, Any], ...] = ()
    metric_types: tuple[str, ...] = ()
    detail_labels: tuple[str, ...] = ()

    def __len__(self) -> int:
        if self.view is View.METRICS:
            return len(self.metric_types)
        return len(self.rows)

    def labels(self) -> list[str]:
        if self.view is View.METRICS:
            return list(self.metric_types)
        return [label for label, _ in self.rows]

    def item(self, index: int) -> tuple[str, Any] | None:
        """Return ``(drill label, record)`` for list views, else None."""
        if self.view is View.METRICS or not 0 <= index < len(self.rows):
            return None
        label, record = self.rows[index]
        if self.detail_labels:
            label = self.detail_labels[index]
        return label, record

    def metric_type(self, index: int) -> str | None:
        if self.view is not View.METRICS or not 0 <= index < len(self.metric_types):
            return None
        return self.metric_types[index]


class TabCache:
    """Storage of the most recent dataset and error per :class:`CacheKey`."""

    def __init__(self) -> None:
        self._datasets: dict[CacheKey, TabDataset] = {}
        self._errors: dict[CacheKey, str] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._datasets

    def __len__(self) -> int:
        return len(self._datasets)

    def get(self, key: CacheKey) -> TabDataset | None:
        return self._datasets.get(key)

    def store(self, key: CacheKey, dataset: TabDataset) -> None:
        """Replace the dataset for ``key`` and clear any stored error."""
        self._datasets[key] = dataset
        self._errors.pop(key, None)

    def error(self, key: CacheKey) -> str | None:
        return self._errors.get(key)

    def store_error(self, key: CacheKey, message: str) -> None:
        self._errors[key] = message

    def keys(self) -> list[CacheKey]:
        return list(self._datasets)

    def list_len(self, key: CacheKey) -> int:
        dataset = self._datasets.get(key)
        return len(dataset) if dataset is not None else 0

    def clear_application(self, app_id: int) -> None:
        """Drop datasets and errors belonging to one application."""
        for store in (self._datasets, self._errors):
            for key in [k for k in store if k.app_id == app_id]:
                del store[key]
        logger.debug("Cleared tab cache for app %s", app_id)

    def clear(self) -> None:
        self._datasets.clear()
        self._errors.clear()


__all__ = [
    "CacheKey",
    "TabCache",
    "TabDataset",
]
