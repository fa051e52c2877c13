"""
Module: engine.sums

Purpose:
    Generate every attainable sum when exactly one value is chosen from
    each group.

Key Functions:
    - generate_sums(): All attainable sums, sorted descending

Used By:
    - engine.evaluator: per-item and total sums
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from sumway.core.models.results import SumSet

logger = logging.getLogger(__name__)


def generate_sums(groups: Sequence[Iterable[int]]) -> SumSet:
    """
    Compute all sums obtainable by picking one value from each group.

    Folds the groups left to right: the running set starts as the first
    group's values and is combined with each following group by cartesian
    sum. Duplicates are dropped at every step, which keeps the running set
    bounded by the sum range instead of the product of group sizes.

    Args:
        groups: Ordered groups of integer values (each non-empty)

    Returns:
        Distinct sums sorted descending; empty for zero groups

    Example:
        >>> generate_sums([[1, 2], [10, 20]])
        (22, 21, 12, 11)
        >>> generate_sums([])
        ()
    """
    if not groups:
        return ()

    sums = set(groups[0])
    for group in groups[1:]:
        values = set(group)
        sums = {running + value for running in sums for value in values}

    logger.debug(f"Generated {len(sums)} sums from {len(groups)} groups")
    return tuple(sorted(sums, reverse=True))
