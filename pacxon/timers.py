"""
One-shot deferred callbacks tied to a game generation.

Scene changes such as "advance to the next level in two seconds" are queued
here and fired from ``PacxonGame.update()``. Every entry remembers the
generation it was scheduled in; an entry whose generation no longer matches
when it comes due belongs to a game that has since been restarted and is
dropped.
"""

import logging
import time
from typing import Callable, List

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Default game clock in milliseconds."""
    return time.monotonic() * 1000.0


class Deferred:
    """A queued callback."""

    __slots__ = ['due', 'generation', 'callback', 'label']

    def __init__(self, due: float, generation: int, callback: Callable[[], None], label: str):
        self.due = due
        self.generation = generation
        self.callback = callback
        self.label = label


class Scheduler:
    """
    Holds deferred callbacks until their due time.

    Args:
        clock: Callable returning the current time in milliseconds
    """

    def __init__(self, clock: Callable[[], float] = monotonic_ms):
        self.clock = clock
        self.pending: List[Deferred] = []

    def call_later(self, delay_ms: float, generation: int,
                   callback: Callable[[], None], label: str = "") -> Deferred:
        """Queue ``callback`` to run ``delay_ms`` from now."""
        entry = Deferred(self.clock() + delay_ms, generation, callback, label)
        self.pending.append(entry)
        return entry

    def run_due(self, generation: Callable[[], int]) -> int:
        """
        Fire every callback that has come due.

        Callbacks may queue further entries; those are only considered on
        the next call.

        Args:
            generation: Callable returning the current game generation,
                checked again before each callback

        Returns:
            Number of callbacks that ran
        """
        now = self.clock()
        due = [entry for entry in self.pending if entry.due <= now]
        if not due:
            return 0
        self.pending = [entry for entry in self.pending if entry.due > now]

        fired = 0
        for entry in sorted(due, key=lambda e: e.due):
            if entry.generation != generation():
                logger.debug("Dropping stale timer %r from generation %d",
                             entry.label, entry.generation)
                continue
            entry.callback()
            fired += 1
        return fired

    def __len__(self) -> int:
        return len(self.pending)
