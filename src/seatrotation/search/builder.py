"""Construct one round of groups against the current pairing counts."""

from __future__ import annotations

import math
import random

from ..core.models import Group, Round
from .matrix import PairingMatrix

__all__ = ["build_round", "candidates_for", "group_sizes"]


def group_sizes(participants: int) -> tuple[int, ...]:
    """Per-slot group sizes for one round, largest first.

    Groups of four, with the last ``(4 - N % 4) % 4`` slots holding three.
    Tiny rosters that cannot be split into threes and fours (1, 2 or 5) are
    spread as evenly as possible instead, which yields the fewest pairs.
    """

    if participants < 1:
        return ()
    total = math.ceil(participants / 4)
    threes = (4 - participants % 4) % 4
    if threes <= total:
        return (4,) * (total - threes) + (3,) * threes
    base, extra = divmod(participants, total)
    return (base + 1,) * extra + (base,) * (total - extra)


def candidates_for(matrix: PairingMatrix, group: list[int], pool: list[int], tolerance: int) -> list[int]:
    """Unused participants admissible for ``group`` at the lowest workable threshold.

    Thresholds ``n = 1 .. tolerance`` are tried in order; a participant is
    admissible at ``n`` when its count with every member is below ``n``. The
    first non-empty threshold is one above the smallest per-candidate maximum,
    so that value is computed directly.
    """

    if not pool:
        return []
    highest = matrix.max_counts_against(group, pool)
    floor = int(highest.min())
    if floor + 1 > tolerance:
        return []
    return [participant for participant, count in zip(pool, highest.tolist()) if count <= floor]


def build_round(matrix: PairingMatrix, tolerance: int, rng: random.Random) -> Round | None:
    """Partition every participant into groups, recording new pairs in ``matrix``.

    Returns ``None`` when some slot cannot be filled within ``tolerance``. The
    matrix is left partially updated in that case; callers discard the attempt.
    """

    pool = list(range(matrix.size))
    groups: list[Group] = []
    for size in group_sizes(matrix.size):
        seed = pool.pop(rng.randrange(len(pool)))
        group = [seed]
        for _ in range(size - 1):
            admissible = candidates_for(matrix, group, pool, tolerance)
            if not admissible:
                return None
            pick = rng.choice(admissible)
            pool.remove(pick)
            for member in group:
                matrix.record_pair(member, pick)
            group.append(pick)
        groups.append(tuple(group))
    return tuple(groups)
