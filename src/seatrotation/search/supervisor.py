from __future__ import annotations

import logging
import random
import secrets
import signal
import threading
import time
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager

from ..core.models import BestResult, SearchConfig
from .registry import BestResultRegistry
from .tolerance import DEFAULT_SCHEDULE, ToleranceSchedule
from .worker import SearchWorker

__all__ = ["Supervisor", "termination_signals"]

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.2
_TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@contextmanager
def termination_signals(stop: threading.Event) -> Iterator[None]:
    """Route SIGINT and SIGTERM to ``stop`` for the duration of the context.

    Handlers can only be installed from the main thread; elsewhere the context
    is a no-op and callers must set ``stop`` themselves.
    """

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handle(signum, _frame) -> None:
        logger.debug("received %s; finalizing", signal.Signals(signum).name)
        stop.set()

    previous = {sig: signal.signal(sig, _handle) for sig in _TERMINATION_SIGNALS}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


class Supervisor:
    """Runs a fixed pool of search workers against one shared registry."""

    def __init__(
        self,
        config: SearchConfig,
        *,
        registry: BestResultRegistry | None = None,
        schedule: ToleranceSchedule = DEFAULT_SCHEDULE,
    ) -> None:
        self.config = config
        self.registry = registry or BestResultRegistry()
        self.schedule = schedule
        self.seed: int | None = None
        self.workers: list[SearchWorker] = []
        self._stop = threading.Event()
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future[None]] = []

    @property
    def stop_event(self) -> threading.Event:
        return self._stop

    def start(self) -> None:
        if self._executor is not None:
            raise RuntimeError("supervisor already started")
        self.seed = self.config.seed if self.config.seed is not None else secrets.randbits(32)
        master = random.Random(self.seed)
        self.workers = [
            SearchWorker(idx, self.config, self.registry, random.Random(master.getrandbits(64)), self.schedule)
            for idx in range(self.config.workers)
        ]
        self._executor = ThreadPoolExecutor(max_workers=len(self.workers), thread_name_prefix="seat-search")
        self._futures = [self._executor.submit(worker.run, self._stop) for worker in self.workers]
        logger.info(
            "Searching %d participants over %d rounds with %d workers (seed %d)",
            self.config.participants,
            self.config.rounds,
            len(self.workers),
            self.seed,
        )

    def wait(self, duration: float | None = None) -> None:
        """Block until the stop event is set or ``duration`` seconds pass."""

        deadline = None if duration is None else time.monotonic() + duration
        while not self._stop.is_set():
            timeout = _POLL_INTERVAL
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    logger.info("Search duration of %.1fs elapsed", duration)
                    return
                timeout = min(timeout, remaining)
            self._stop.wait(timeout)
            self._raise_worker_errors()

    def stop(self) -> None:
        self._stop.set()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def run(self, duration: float | None = None) -> BestResult:
        """Search until a termination signal (or ``duration``) and return the best result."""

        with termination_signals(self._stop):
            self.start()
            try:
                self.wait(duration)
            finally:
                self.stop()
        attempts = sum(worker.attempts for worker in self.workers)
        restarts = sum(worker.restarts for worker in self.workers)
        logger.debug("search stopped: %d attempts, %d restarts", attempts, restarts)
        return self.registry.best

    def _raise_worker_errors(self) -> None:
        for future in self._futures:
            if future.done() and not future.cancelled():
                exc = future.exception()
                if exc is not None:
                    self._stop.set()
                    raise exc
