from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass

from ..core.models import BestResult, Round, SearchConfig
from ..core.scoring import deviation
from .builder import build_round
from .matrix import PairingMatrix
from .registry import BestResultRegistry
from .tolerance import DEFAULT_SCHEDULE, ToleranceSchedule

__all__ = ["AttemptResult", "SearchWorker"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptResult:
    rounds_completed: int
    completed: bool
    deviation: float
    tolerance: int


class SearchWorker:
    """Repeatedly builds full sessions, publishing every round to the registry.

    The matrix and accumulated rounds are private to the worker and rebuilt
    from scratch at the start of each attempt.
    """

    def __init__(
        self,
        worker_id: int,
        config: SearchConfig,
        registry: BestResultRegistry,
        rng: random.Random,
        schedule: ToleranceSchedule = DEFAULT_SCHEDULE,
    ) -> None:
        self.worker_id = worker_id
        self.config = config
        self.registry = registry
        self.rng = rng
        self.schedule = schedule
        self.attempts = 0
        self.restarts = 0
        self._matrix = PairingMatrix(config.participants)

    @property
    def matrix(self) -> PairingMatrix:
        """The current attempt's matrix; rebuilt at the start of every attempt."""

        return self._matrix

    def run_attempt(self, stop: threading.Event | None = None) -> AttemptResult:
        participants = self.config.participants
        self._matrix.reset()
        rounds: list[Round] = []
        tolerance = self.schedule.initial
        score = 0.0
        for round_index in range(self.config.rounds):
            if stop is not None and stop.is_set():
                break
            tolerance = self.schedule.advance(tolerance, round_index, participants)
            built = build_round(self._matrix, tolerance, self.rng)
            if built is None:
                return AttemptResult(len(rounds), completed=False, deviation=score, tolerance=tolerance)
            rounds.append(built)
            score = deviation(self._matrix.distribution())
            self.registry.offer(
                BestResult(
                    rounds_completed=len(rounds),
                    rounds=tuple(rounds),
                    matrix=self._matrix.snapshot(),
                    deviation=score,
                    worker_id=self.worker_id,
                    found_at=time.time(),
                )
            )
        return AttemptResult(
            len(rounds),
            completed=len(rounds) == self.config.rounds,
            deviation=score,
            tolerance=tolerance,
        )

    def run(self, stop: threading.Event) -> None:
        """Search until ``stop`` is set."""

        logger.debug("worker %d started", self.worker_id)
        while not stop.is_set():
            result = self.run_attempt(stop)
            self.attempts += 1
            if not result.completed and not stop.is_set():
                self.restarts += 1
                logger.debug(
                    "worker %d restarting after %d rounds (tolerance %d)",
                    self.worker_id,
                    result.rounds_completed,
                    result.tolerance,
                )
        logger.debug("worker %d stopped after %d attempts", self.worker_id, self.attempts)
