from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

__all__ = [
    "PairingSummary",
    "deviation",
    "mean_repeats",
    "pairing_distribution",
    "summarize",
]


@dataclass(frozen=True)
class PairingSummary:
    pairs: int
    increments: int
    mean: float
    deviation: float
    max_repeats: int
    distribution: dict[int, int]


def pairing_distribution(counts: Iterable[int]) -> dict[int, int]:
    """Map each repeat count to the number of unordered pairs holding it."""

    tally = Counter(int(count) for count in counts)
    return dict(sorted(tally.items()))


def _total_pairs(distribution: Mapping[int, int]) -> int:
    return sum(distribution.values())


def mean_repeats(distribution: Mapping[int, int]) -> float:
    pairs = _total_pairs(distribution)
    if pairs <= 0:
        return 0.0
    return sum(value * freq for value, freq in distribution.items()) / pairs


def deviation(distribution: Mapping[int, int]) -> float:
    """Population standard deviation of repeat counts; lower is more balanced.

    An empty distribution (no pairs) scores 0.0.
    """

    pairs = _total_pairs(distribution)
    if pairs <= 0:
        return 0.0
    mean = mean_repeats(distribution)
    variance = sum(freq * (value - mean) ** 2 for value, freq in distribution.items()) / pairs
    return math.sqrt(variance)


def summarize(distribution: Mapping[int, int]) -> PairingSummary:
    pairs = _total_pairs(distribution)
    increments = sum(value * freq for value, freq in distribution.items())
    return PairingSummary(
        pairs=pairs,
        increments=increments,
        mean=mean_repeats(distribution),
        deviation=deviation(distribution),
        max_repeats=max((value for value, freq in distribution.items() if freq > 0), default=0),
        distribution=dict(sorted(distribution.items())),
    )
