from __future__ import annotations

import logging
import threading

from ..core.models import BestResult

__all__ = ["BestResultRegistry"]

logger = logging.getLogger(__name__)


class BestResultRegistry:
    """Shared cell holding the best session prefix any worker has produced."""

    def __init__(self) -> None:
        self._best = BestResult.empty()
        self._replacements = 0
        self._lock = threading.Lock()

    @property
    def best(self) -> BestResult:
        with self._lock:
            return self._best

    @property
    def replacements(self) -> int:
        with self._lock:
            return self._replacements

    def offer(self, candidate: BestResult) -> bool:
        """Replace the current best when ``candidate`` dominates it.

        Returns True when the candidate was accepted.
        """

        with self._lock:
            if not candidate.dominates(self._best):
                return False
            self._best = candidate
            self._replacements += 1
        logger.info(
            "New best: %2d rounds, stddev %.4f (worker %s)",
            candidate.rounds_completed,
            candidate.deviation,
            candidate.worker_id,
        )
        return True
