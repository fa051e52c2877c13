"""
Unit Tests for the Sum Generator and Evaluator
"""

from itertools import product

import pytest

from sumway.core.models import Hierarchy
from sumway.core.schemas import InvalidValueError
from sumway.engine import evaluate, generate_sums


class TestGenerateSums:
    """Tests for generate_sums()."""

    def test_generate_when_two_groups_then_all_sums_descending(self):
        assert generate_sums([[1, 2], [10, 20]]) == (22, 21, 12, 11)

    def test_generate_when_no_groups_then_empty(self):
        assert generate_sums([]) == ()

    def test_generate_when_single_group_then_distinct_values(self):
        assert generate_sums([[3, 1, 3, 2]]) == (3, 2, 1)

    def test_generate_when_overlapping_sums_then_deduplicated(self):
        assert generate_sums([[1, 2], [1, 2]]) == (4, 3, 2)

    def test_generate_when_groups_reordered_then_same_set(self):
        groups = [[1, 5], [2, 3, 7], [10]]
        assert generate_sums(groups) == generate_sums(list(reversed(groups)))

    def test_generate_when_compared_to_brute_force_then_identical(self, rubric_hierarchy):
        """Output equals the distinct sums of the full cartesian product."""
        groups = [vs for item in rubric_hierarchy.items for vs in item.value_sets]

        expected = sorted({sum(combo) for combo in product(*groups)}, reverse=True)

        assert generate_sums(groups) == tuple(expected)


class TestEvaluate:
    """Tests for evaluate()."""

    def test_evaluate_when_single_item_then_item_and_total_match(self, single_item_hierarchy):
        results = evaluate(single_item_hierarchy)

        assert results.item_sums == ((22, 21, 12, 11),)
        assert results.total_sums == (22, 21, 12, 11)

    def test_evaluate_when_two_items_then_totals_combine_items(self, two_item_hierarchy):
        results = evaluate(two_item_hierarchy)

        assert results.item_sums == ((2, 1), (2, 1))
        assert results.total_sums == (4, 3, 2)
        assert results.max_total == 4
        assert results.min_total == 2

    def test_evaluate_when_invalid_value_then_raises_without_results(self):
        h = Hierarchy.from_lists([[[1, 2]], [[4, 5, 0]]])

        with pytest.raises(InvalidValueError) as exc_info:
            evaluate(h)

        assert exc_info.value.position == (2, 1, 3)

    def test_evaluate_when_totals_then_cover_min_and_max_of_elements(self, rubric_hierarchy):
        results = evaluate(rubric_hierarchy)
        groups = [vs for item in rubric_hierarchy.items for vs in item.value_sets]

        assert results.max_total == sum(max(g) for g in groups)
        assert results.min_total == sum(min(g) for g in groups)
        assert results.is_attainable(results.max_total)
        assert not results.is_attainable(results.max_total + 1)
