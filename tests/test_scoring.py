from __future__ import annotations

import math

import pytest

from seatrotation.core.scoring import deviation, mean_repeats, pairing_distribution, summarize
from seatrotation.search.matrix import PairingMatrix


def test_distribution_counts_values() -> None:
    assert pairing_distribution([0, 1, 1, 2, 0, 0]) == {0: 3, 1: 2, 2: 1}


def test_population_deviation_weighted_by_frequency() -> None:
    dist = {0: 2, 1: 2}
    assert mean_repeats(dist) == pytest.approx(0.5)
    assert deviation(dist) == pytest.approx(0.5)

    dist = {0: 1, 2: 3}
    mean = 1.5
    expected = math.sqrt((1 * (0 - mean) ** 2 + 3 * (2 - mean) ** 2) / 4)
    assert deviation(dist) == pytest.approx(expected)


def test_empty_distribution_scores_zero() -> None:
    assert deviation({}) == 0.0
    assert mean_repeats({}) == 0.0
    summary = summarize({})
    assert summary.pairs == 0
    assert summary.max_repeats == 0


def test_uniform_counts_have_zero_spread() -> None:
    matrix = PairingMatrix(4)
    matrix.record_group([0, 1, 2, 3])
    assert deviation(matrix.distribution()) == 0.0


def test_summary_matches_matrix() -> None:
    matrix = PairingMatrix(6)
    matrix.record_group([0, 1, 2])
    matrix.record_group([3, 4, 5])
    matrix.record_group([0, 1, 3])
    summary = summarize(matrix.distribution())
    assert summary.pairs == 15
    assert summary.increments == 9
    assert summary.max_repeats == 2
    assert summary.distribution == {0: 7, 1: 7, 2: 1}
    assert summary.mean == pytest.approx(9 / 15)
