"""Debounced application search for the picker."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from scoutdash.constants.timeouts import SEARCH_DEBOUNCE
from scoutdash.models.core.application import Application

logger = logging.getLogger(__name__)


def filter_applications(applications: Sequence[Application], query: str) -> list[int]:
    """Indices of applications whose name or id contains ``query``.

    Matching is case-insensitive on the name and substring on the decimal id.
    An empty (or whitespace-only) query matches everything in original order.
    """
    needle = query.strip().lower()
    if not needle:
        return list(range(len(applications)))
    return [
        index
        for index, app in enumerate(applications)
        if needle in app.name.lower() or needle in str(app.id)
    ]


class SearchFilter:
    """Pending and committed search text with an idle-time debounce.

    Keystrokes only touch ``pending``. :meth:`settle` is called once per UI
    tick and copies ``pending`` into ``committed`` after the text has been
    idle for ``debounce`` seconds.
    """

    def __init__(
        self,
        debounce: float = SEARCH_DEBOUNCE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._debounce = debounce
        self._clock = clock
        self.pending = ""
        self.committed = ""
        self.last_typed: float | None = None

    def type_character(self, character: str) -> None:
        self.pending += character
        self.last_typed = self._clock()

    def backspace(self) -> None:
        self.pending = self.pending[:-1]
        self.last_typed = self._clock()

    def clear(self) -> None:
        self.pending = ""
        self.committed = ""
        self.last_typed = None

    @property
    def is_settled(self) -> bool:
        return self.pending == self.committed

    def settle(self) -> bool:
        """Commit the pending query if it has been idle long enough.

        Returns:
            True if ``committed`` changed.
        """
        if self.pending == self.committed:
            return False
        if self.last_typed is not None and self._clock() - self.last_typed < self._debounce:
            return False
        self.committed = self.pending
        logger.debug("Search committed: %r", self.committed)
        return True


__all__ = ["SearchFilter", "filter_applications"]
