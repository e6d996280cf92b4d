"""Search engine: pairing matrix, round builder, workers and supervisor."""

from .builder import build_round, group_sizes
from .matrix import SELF_SENTINEL, PairingMatrix
from .registry import BestResultRegistry
from .supervisor import Supervisor, termination_signals
from .tolerance import DEFAULT_SCHEDULE, ToleranceSchedule
from .worker import AttemptResult, SearchWorker

__all__ = [
    "DEFAULT_SCHEDULE",
    "SELF_SENTINEL",
    "AttemptResult",
    "BestResultRegistry",
    "PairingMatrix",
    "SearchWorker",
    "Supervisor",
    "ToleranceSchedule",
    "build_round",
    "group_sizes",
    "termination_signals",
]
