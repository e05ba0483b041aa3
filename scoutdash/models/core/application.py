"""Application model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Application:
    """One monitored application as listed by the API."""

    id: int
    name: str
    last_reported_at: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> Application:
        """Build from an ``apps`` entry, tolerating missing fields."""
        if not isinstance(payload, dict):
            return cls(id=0, name="?")
        raw_id = payload.get("id")
        app_id = raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) else 0
        name = payload.get("name")
        reported = payload.get("last_reported_at")
        return cls(
            id=max(app_id, 0),
            name=name if isinstance(name, str) else "?",
            last_reported_at=reported if isinstance(reported, str) else None,
        )

    @property
    def row_label(self) -> str:
        return f"{self.id}  {self.name}"


def resolve_application(
    applications: list[Application], app_arg: str
) -> tuple[int, Application] | None:
    """Find an application by numeric id or case-insensitive exact name.

    Returns ``(index, application)`` or None when nothing matches.
    """
    needle = app_arg.strip()
    if not needle:
        return None
    if needle.isdigit():
        wanted = int(needle)
        for index, app in enumerate(applications):
            if app.id == wanted:
                return index, app
        return None
    lowered = needle.lower()
    for index, app in enumerate(applications):
        if app.name.lower() == lowered:
            return index, app
    return None


__all__ = ["Application", "resolve_application"]
