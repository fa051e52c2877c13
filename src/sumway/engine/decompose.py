"""
Module: engine.decompose

Purpose:
    Exact-sum decomposition: find every way of choosing one value per group
    so that the chosen values add up to a target.

Key Functions:
    - decompose(): All exact decompositions, depth-first with a sum bound
    - search_space_size(): Unpruned number of combinations

Algorithm:
    Depth-first over group index 0..N-1, carrying the running sum and the
    partial decomposition. A candidate is skipped as soon as the running
    sum plus the candidate exceeds the target. All values are positive, so
    such a branch can never come back down to the target.

    The walk keeps one value iterator per open group on an explicit stack,
    so the number of groups is not limited by the interpreter recursion
    depth.

Used By:
    - engine.assignment: item-level and element-level searches
    - gradebook.controller: search-space ceiling
"""

from __future__ import annotations

import logging
from math import prod
from typing import Iterable, Iterator, List, Sequence

logger = logging.getLogger(__name__)

Decomposition = tuple[int, ...]


def decompose(target: int, groups: Sequence[Iterable[int]]) -> List[Decomposition]:
    """
    Find every combination (one value per group) summing exactly to target.

    Results come out in the order the group values are supplied, so a fixed
    input always yields the same list.

    Args:
        target: Sum to reach
        groups: Ordered groups of positive values (SumSets or ValueSets)

    Returns:
        List of decompositions; empty when the target is unreachable. With
        no groups the only decomposition is ``()``, and only for target 0.

    Example:
        >>> decompose(21, [[1, 2], [10, 20]])
        [(1, 20)]
        >>> decompose(3, [[2, 1], [2, 1]])
        [(2, 1), (1, 2)]
    """
    candidates = [tuple(group) for group in groups]
    if not candidates:
        return [()] if target == 0 else []

    found: List[Decomposition] = []
    current: List[int] = []
    running = 0
    # One iterator per group on the current path; the last is being tried.
    stack: List[Iterator[int]] = [iter(candidates[0])]
    last = len(candidates)

    while stack:
        value = next(stack[-1], None)
        if value is None:
            stack.pop()
            if current:
                running -= current.pop()
            continue
        if running + value > target:
            continue
        if len(stack) == last:
            if running + value == target:
                found.append(tuple(current) + (value,))
            continue
        current.append(value)
        running += value
        stack.append(iter(candidates[len(stack)]))

    logger.debug(
        f"Decomposed {target} over {len(candidates)} groups: {len(found)} exact matches"
    )
    return found


def search_space_size(groups: Sequence[Sequence[int]]) -> int:
    """
    Number of combinations an unpruned search would visit.

    Args:
        groups: Ordered groups

    Returns:
        Product of group sizes (1 for no groups)
    """
    return prod(len(group) for group in groups)
