"""Repeat-tolerance schedule used while a session attempt accumulates rounds.

Exact round-robin designs stop existing after a handful of rounds, so the
allowed repeat count is relaxed periodically. The period is tied to the number
of groups per round; the constants are heuristic and meant to be tuned.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceSchedule:
    initial: int = 1
    step: int = 1

    def __post_init__(self) -> None:
        if self.initial < 1:
            raise ValueError("initial tolerance must be at least 1")
        if self.step < 0:
            raise ValueError("tolerance step cannot be negative")

    @staticmethod
    def period(participants: int) -> int:
        total = math.ceil(participants / 4)
        return max(1, total - 1)

    def advance(self, current: int, round_index: int, participants: int) -> int:
        """Tolerance to use for ``round_index`` given the previous value."""

        if round_index % self.period(participants) == 0:
            return current + self.step
        return current


DEFAULT_SCHEDULE = ToleranceSchedule()
