from __future__ import annotations

import random
import threading
import time

import numpy as np

from seatrotation.core.models import BestResult, SearchConfig
from seatrotation.search.registry import BestResultRegistry
from seatrotation.search.tolerance import ToleranceSchedule
from seatrotation.search.worker import SearchWorker


class _RecordingRegistry(BestResultRegistry):
    def __init__(self) -> None:
        super().__init__()
        self.offers: list[BestResult] = []

    def offer(self, candidate: BestResult) -> bool:
        self.offers.append(candidate)
        return super().offer(candidate)


def _worker(participants: int, rounds: int, seed: int = 7, **kwargs) -> SearchWorker:
    config = SearchConfig(participants=participants, rounds=rounds, workers=1, seed=seed)
    registry = kwargs.pop("registry", None) or BestResultRegistry()
    return SearchWorker(0, config, registry, random.Random(seed), **kwargs)


def test_twelve_students_three_rounds() -> None:
    registry = _RecordingRegistry()
    worker = _worker(12, 3, registry=registry)
    result = worker.run_attempt()

    assert result.completed
    assert result.rounds_completed == 3
    best = registry.best
    assert best.rounds_completed == 3
    for rnd in best.rounds:
        assert [len(group) for group in rnd] == [4, 4, 4]
        assert sorted(member for group in rnd for member in group) == list(range(12))
    pair_counts = worker.matrix.pair_counts()
    assert pair_counts.size == 66
    assert int(pair_counts.sum()) == 3 * 3 * 6


def test_every_published_matrix_is_symmetric() -> None:
    registry = _RecordingRegistry()
    worker = _worker(14, 5, registry=registry)
    for _ in range(3):
        worker.run_attempt()
    assert registry.offers
    for offer in registry.offers:
        counts = offer.matrix.copy()
        np.fill_diagonal(counts, 0)
        assert np.array_equal(counts, counts.T)
        assert offer.rounds_completed == len(offer.rounds)


def test_twelve_students_reach_balanced_session() -> None:
    worker = _worker(12, 3, seed=21)
    maxima = []
    for _ in range(30):
        assert worker.run_attempt().completed
        maxima.append(int(worker.matrix.pair_counts().max()))
    assert min(maxima) <= 2


def test_five_students_terminate_within_bounded_attempts() -> None:
    worker = _worker(5, 4, seed=3)
    for _attempt in range(50):
        result = worker.run_attempt()
        if result.completed:
            break
    else:
        raise AssertionError("no complete session within 50 attempts")
    best = worker.registry.best
    assert best.rounds_completed == 4
    for rnd in best.rounds:
        assert sorted(len(group) for group in rnd) == [2, 3]


def test_single_group_escalates_tolerance() -> None:
    worker = _worker(4, 3)
    result = worker.run_attempt()
    assert result.completed
    assert worker.matrix.distribution() == {3: 6}


def test_infeasible_round_abandons_attempt() -> None:
    frozen = ToleranceSchedule(initial=1, step=0)
    worker = _worker(4, 2, schedule=frozen)
    result = worker.run_attempt()
    assert not result.completed
    assert result.rounds_completed == 1
    assert worker.registry.best.rounds_completed == 1


def test_stop_event_ends_attempt_between_rounds() -> None:
    worker = _worker(12, 3)
    stop = threading.Event()
    stop.set()
    result = worker.run_attempt(stop)
    assert result.rounds_completed == 0
    assert not result.completed
    worker.run(stop)
    assert worker.attempts == 0


def test_run_loops_until_stopped() -> None:
    frozen = ToleranceSchedule(initial=1, step=0)
    worker = _worker(4, 2, schedule=frozen)
    stop = threading.Event()
    thread = threading.Thread(target=worker.run, args=(stop,), daemon=True)
    thread.start()
    deadline = time.monotonic() + 5
    while worker.restarts < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    stop.set()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert worker.restarts >= 3
    assert worker.attempts >= worker.restarts
