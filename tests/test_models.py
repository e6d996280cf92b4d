from __future__ import annotations

import math

import pytest

from seatrotation.core.errors import ConfigurationError
from seatrotation.core.models import BestResult, SearchConfig, as_session


def test_search_config_defaults_to_four_workers() -> None:
    config = SearchConfig(participants=12, rounds=3)
    assert config.workers == 4
    assert config.seed is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"participants": 1, "rounds": 3},
        {"participants": 12, "rounds": 0},
        {"participants": 12, "rounds": 3, "workers": 0},
    ],
)
def test_search_config_validation(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        SearchConfig(**kwargs)


def test_empty_best_result_is_dominated_by_anything() -> None:
    empty = BestResult.empty()
    assert empty.is_empty
    assert math.isinf(empty.deviation)
    first = BestResult(rounds_completed=1, deviation=3.0)
    assert first.dominates(empty)
    assert not empty.dominates(first)


def test_dominance_rule() -> None:
    low = BestResult(rounds_completed=2, deviation=0.2)
    high = BestResult(rounds_completed=3, deviation=0.9)
    tied = BestResult(rounds_completed=2, deviation=0.2)
    assert high.dominates(low)
    assert not low.dominates(high)
    assert not tied.dominates(low)
    assert BestResult(rounds_completed=2, deviation=0.1).dominates(low)


def test_as_session_freezes_nested_lists() -> None:
    session = as_session([[[0, 1], [2, 3]]])
    assert session == (((0, 1), (2, 3)),)
