from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .errors import ConfigurationError

__all__ = [
    "DEFAULT_WORKERS",
    "BestResult",
    "Group",
    "Round",
    "SearchConfig",
    "Session",
    "as_session",
]

DEFAULT_WORKERS = 4

# A group is a tuple of participant indices; a round partitions all participants.
Group = tuple[int, ...]
Round = tuple[Group, ...]
Session = tuple[Round, ...]


def as_session(data: Sequence[Sequence[Sequence[int]]]) -> Session:
    """Freeze nested lists (e.g. decoded JSON) into the tuple-based session shape."""

    return tuple(tuple(tuple(int(member) for member in group) for group in rnd) for rnd in data)


@dataclass(frozen=True)
class SearchConfig:
    """Inputs for one search run."""

    participants: int
    rounds: int
    workers: int = DEFAULT_WORKERS
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.participants < 2:
            raise ConfigurationError("at least two participants are required")
        if self.rounds <= 0:
            raise ConfigurationError("rounds must be positive")
        if self.workers <= 0:
            raise ConfigurationError("workers must be positive")


@dataclass(frozen=True)
class BestResult:
    """Best session prefix observed so far.

    ``rounds_completed`` is the number of rounds in ``rounds``; the empty
    sentinel uses -1 so any real candidate dominates it.
    """

    rounds_completed: int
    rounds: Session = ()
    matrix: Any = field(default=None, compare=False, repr=False)
    deviation: float = math.inf
    worker_id: int | None = None
    found_at: float = 0.0

    @classmethod
    def empty(cls) -> BestResult:
        return cls(rounds_completed=-1)

    @property
    def is_empty(self) -> bool:
        return self.rounds_completed < 0

    def dominates(self, other: BestResult) -> bool:
        """More rounds wins; on equal rounds the strictly lower deviation wins."""

        if self.rounds_completed != other.rounds_completed:
            return self.rounds_completed > other.rounds_completed
        return self.deviation < other.deviation
