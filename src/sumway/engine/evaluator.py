"""
Module: engine.evaluator

Purpose:
    Apply the sum generator at both levels of a hierarchy: per item (from
    its elements) and overall (from the per-item sums).

Key Functions:
    - evaluate(): Validate a hierarchy and build its Results

Dependencies:
    - core.schemas.validator: stop-at-first-error validation

Used By:
    - gradebook.controller: Gradebook.calculate()
"""

from __future__ import annotations

import logging

from sumway.core.models import Hierarchy, Results
from sumway.core.schemas.validator import validate_hierarchy

from .sums import generate_sums

logger = logging.getLogger(__name__)


def evaluate(hierarchy: Hierarchy) -> Results:
    """
    Compute the attainable sums of every item and the attainable totals.

    Args:
        hierarchy: Hierarchy to evaluate

    Returns:
        Results with one SumSet per item and the total SumSet

    Raises:
        InvalidValueError: For the first value that is not a positive
            number; no Results are produced

    Example:
        >>> evaluate(Hierarchy.from_lists([[[1, 2]], [[1, 2]]])).item_sums
        ((2, 1), (2, 1))
    """
    validate_hierarchy(hierarchy)

    item_sums = tuple(generate_sums(item.value_sets) for item in hierarchy.items)
    total_sums = generate_sums(item_sums)

    logger.info(
        f"Evaluated {len(item_sums)} items: {len(total_sums)} attainable totals"
        + (f" ({total_sums[-1]}..{total_sums[0]})" if total_sums else "")
    )
    return Results(item_sums=item_sums, total_sums=total_sums)
