"""
Unit Tests for Balanced Selection
"""

import random

import pytest

from sumway.engine import (
    EmptyCandidateSetError,
    EngineConfig,
    balance_ranking,
    select_balanced,
    spread,
)
from sumway.engine.balance import top_fraction_size


class TestSpread:

    def test_spread_when_equal_values_then_zero(self):
        assert spread((5, 5, 5)) == 0.0

    def test_spread_when_empty_then_zero(self):
        assert spread(()) == 0.0

    def test_spread_when_values_differ_then_population_stdev(self):
        assert spread((1, 3)) == pytest.approx(1.0)


class TestBalanceRanking:

    def test_ranking_when_mixed_then_ascending_spread(self):
        ranked = balance_ranking([(1, 9), (5, 5), (3, 7)])
        assert [d for d, _ in ranked] == [(5, 5), (3, 7), (1, 9)]

    def test_ranking_when_ties_then_input_order_kept(self):
        ranked = balance_ranking([(2, 1), (1, 2)])
        assert [d for d, _ in ranked] == [(2, 1), (1, 2)]


class TestTopFractionSize:

    @pytest.mark.parametrize(
        "count, expected",
        [(1, 1), (2, 1), (3, 1), (4, 2), (10, 3), (11, 4)],
    )
    def test_size_when_default_fraction_then_ceiling_of_thirty_percent(self, count, expected):
        assert top_fraction_size(count) == expected


class TestSelectBalanced:
    """Tests for select_balanced()."""

    def test_select_when_empty_then_raises_error(self):
        with pytest.raises(EmptyCandidateSetError):
            select_balanced([])

    def test_select_when_single_candidate_then_returned(self):
        assert select_balanced([(1, 20)]) == (1, 20)

    def test_select_when_many_then_from_most_balanced_pool(self):
        """With 10 candidates the pick comes from the 3 with lowest spread."""
        candidates = [(i, 20 - i) for i in range(1, 11)]
        pool = [d for d, _ in balance_ranking(candidates)[:3]]

        for seed in range(50):
            assert select_balanced(candidates, rng=random.Random(seed)) in pool

    def test_select_when_same_seed_then_same_pick(self):
        candidates = [(i, 30 - i) for i in range(1, 20)]

        first = select_balanced(candidates, rng=EngineConfig(seed=3).make_rng())
        second = select_balanced(candidates, rng=EngineConfig(seed=3).make_rng())

        assert first == second

    def test_select_when_fraction_one_then_any_candidate_possible(self):
        candidates = [(1, 9), (5, 5)]
        picks = {
            select_balanced(candidates, rng=random.Random(seed), fraction=1.0)
            for seed in range(100)
        }
        assert picks == {(1, 9), (5, 5)}

    def test_select_when_result_then_one_of_the_inputs(self, rng):
        candidates = [(2, 1), (1, 2)]
        assert select_balanced(candidates, rng=rng) in candidates


class TestEngineConfig:

    @pytest.mark.parametrize("fraction", [0, -0.1, 1.5])
    def test_init_when_fraction_out_of_range_then_raises_error(self, fraction):
        with pytest.raises(ValueError, match="balance_fraction"):
            EngineConfig(balance_fraction=fraction)
