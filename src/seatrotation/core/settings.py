"""Process-wide defaults read from the environment.

Two knobs are exposed so operators can tune a run without touching the CLI:

``SEATROTATION_WORKERS``
    Number of concurrent search workers (default 4).
``SEATROTATION_LOG_LEVEL``
    Root log level used by the CLI (default ``INFO``).

Tests can pin values with :func:`override`; overrides stack and win over the
environment. Explicit CLI flags win over both.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

from .errors import ConfigurationError
from .models import DEFAULT_WORKERS

WORKERS_ENV: Final = "SEATROTATION_WORKERS"
LOG_LEVEL_ENV: Final = "SEATROTATION_LOG_LEVEL"

_OVERRIDE_STACK: list[dict[str, str]] = []


def _lookup(key: str) -> str | None:
    for overrides in reversed(_OVERRIDE_STACK):
        if key in overrides:
            return overrides[key]
    return os.getenv(key)


def worker_count() -> int:
    raw = _lookup(WORKERS_ENV)
    if raw is None or not raw.strip():
        return DEFAULT_WORKERS
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{WORKERS_ENV} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{WORKERS_ENV} must be positive, got {value}")
    return value


def log_level() -> str:
    raw = (_lookup(LOG_LEVEL_ENV) or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(raw), int):
        raise ConfigurationError(f"{LOG_LEVEL_ENV} is not a log level: {raw!r}")
    return raw


@contextmanager
def override(*, workers: int | None = None, log_level: str | None = None) -> Iterator[None]:
    """Temporarily pin settings within the context."""

    values: dict[str, str] = {}
    if workers is not None:
        values[WORKERS_ENV] = str(workers)
    if log_level is not None:
        values[LOG_LEVEL_ENV] = log_level
    _OVERRIDE_STACK.append(values)
    try:
        yield
    finally:
        _OVERRIDE_STACK.pop()
