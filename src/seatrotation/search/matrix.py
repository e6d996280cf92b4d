"""Pairwise co-occurrence counts for one search attempt.

Each worker owns its matrix exclusively; nothing here is thread-safe.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import combinations

import numpy as np

from ..core.scoring import pairing_distribution

__all__ = ["SELF_SENTINEL", "PairingMatrix"]

# Marks the diagonal; no real repeat count can reach it.
SELF_SENTINEL = np.iinfo(np.int64).max


class PairingMatrix:
    """Symmetric N×N table counting how often two participants shared a group."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("matrix size must be positive")
        self._size = size
        self._counts = np.zeros((size, size), dtype=np.int64)
        self._upper = np.triu_indices(size, k=1)
        np.fill_diagonal(self._counts, SELF_SENTINEL)

    @property
    def size(self) -> int:
        return self._size

    @property
    def counts(self) -> np.ndarray:
        """Read-only view of the underlying array."""

        view = self._counts.view()
        view.flags.writeable = False
        return view

    def reset(self) -> None:
        self._counts.fill(0)
        np.fill_diagonal(self._counts, SELF_SENTINEL)

    def record_pair(self, i: int, j: int) -> None:
        if i == j:
            raise ValueError(f"cannot pair participant {i} with itself")
        self._counts[i, j] += 1
        self._counts[j, i] += 1

    def record_group(self, members: Sequence[int]) -> None:
        for i, j in combinations(members, 2):
            self.record_pair(i, j)

    def count_between(self, i: int, j: int) -> int:
        return int(self._counts[i, j])

    def max_counts_against(self, members: Sequence[int], candidates: Sequence[int]) -> np.ndarray:
        """Highest count each candidate holds with any of ``members``."""

        block = self._counts[np.ix_(list(members), list(candidates))]
        return block.max(axis=0)

    def pair_counts(self) -> np.ndarray:
        """Counts of every unordered pair, diagonal excluded."""

        return self._counts[self._upper]

    def distribution(self) -> dict[int, int]:
        return pairing_distribution(self.pair_counts().tolist())

    def snapshot(self) -> np.ndarray:
        return self._counts.copy()
