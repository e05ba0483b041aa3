"""Navigation state of the dashboard: screen mode, view, cursor and drill overlay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from scoutdash.constants.enums import View
from scoutdash.constants.values import PICKER_BREADCRUMB
from scoutdash.models.core.application import Application


def clamp_index(index: int, length: int) -> int:
    """Clamp a list cursor into ``[0, max(0, length - 1)]``."""
    return max(0, min(index, length - 1))


class DrillKind(Enum):
    """What a drill overlay holds."""

    TEXT = auto()
    SERIES = auto()


@dataclass(frozen=True)
class DrillState:
    """Detail overlay: preformatted text or a raw metric series to chart."""

    label: str
    kind: DrillKind = DrillKind.TEXT
    text: str = ""
    series: Any = None
    metric_type: str | None = None

    @classmethod
    def preformatted(cls, label: str, text: str) -> DrillState:
        return cls(label=label, kind=DrillKind.TEXT, text=text)

    @classmethod
    def loading_metric(cls, metric_type: str) -> DrillState:
        return cls(
            label=metric_type,
            kind=DrillKind.TEXT,
            text=f"Loading metric {metric_type}…",
            metric_type=metric_type,
        )

    @classmethod
    def metric_series(cls, metric_type: str, payload: Any) -> DrillState:
        return cls(
            label=metric_type,
            kind=DrillKind.SERIES,
            series=payload,
            metric_type=metric_type,
        )

    @classmethod
    def metric_error(cls, metric_type: str, message: str) -> DrillState:
        return cls(
            label=metric_type,
            kind=DrillKind.TEXT,
            text=f"Error: {message}",
            metric_type=metric_type,
        )

    @property
    def is_series(self) -> bool:
        return self.kind is DrillKind.SERIES


@dataclass
class NavigationState:
    """Mutable navigation state owned by the dashboard presenter.

    ``application`` is None in picker mode. The breadcrumb is derived, never
    stored.
    """

    application: Application | None = None
    view: View = View.ENDPOINTS
    selected: int = 0
    picker_selected: int = 0
    drill: DrillState | None = None

    @property
    def in_picker(self) -> bool:
        return self.application is None

    @property
    def app_id(self) -> int | None:
        return self.application.id if self.application is not None else None

    @property
    def breadcrumb(self) -> list[str]:
        if self.application is None:
            return [PICKER_BREADCRUMB]
        trail = [self.application.name, self.view.value]
        if self.drill is not None:
            trail.append(self.drill.label)
        return trail

    def enter_application(self, application: Application, view: View) -> None:
        self.application = application
        self.view = view
        self.selected = 0
        self.drill = None

    def leave_application(self) -> None:
        self.application = None
        self.view = View.ENDPOINTS
        self.selected = 0
        self.drill = None


__all__ = [
    "DrillKind",
    "DrillState",
    "NavigationState",
    "clamp_index",
]
