"""
Module: engine.balance

Purpose:
    Pick one "fair" decomposition among many exact matches. Candidates are
    ranked by the population standard deviation of their values (lower is
    more evenly spread), and one is drawn at random from the most balanced
    fraction. The randomness gives variety between students with the same
    total; the random source is injectable so tests can pin it.

Key Functions:
    - select_balanced(): Balanced random pick
    - balance_ranking(): Candidates ranked by spread
    - spread(): Population standard deviation of one decomposition

Dependencies:
    - statistics (std): pstdev
    - random (std): default random source

Used By:
    - engine.assignment: item-level and element-level picks
"""

from __future__ import annotations

import logging
import math
import random
import statistics
from typing import List, Optional, Sequence

from .config import DEFAULT_BALANCE_FRACTION
from .decompose import Decomposition
from .errors import EmptyCandidateSetError

logger = logging.getLogger(__name__)


def spread(decomposition: Sequence[int]) -> float:
    """Population standard deviation of the values (0.0 when empty)."""
    if not decomposition:
        return 0.0
    return statistics.pstdev(decomposition)


def balance_ranking(
    decompositions: Sequence[Decomposition],
) -> List[tuple[Decomposition, float]]:
    """
    Rank decompositions from most to least balanced.

    The sort is stable: candidates with equal spread keep their input order.

    Returns:
        (decomposition, spread) pairs, ascending by spread
    """
    scored = [(d, spread(d)) for d in decompositions]
    scored.sort(key=lambda pair: pair[1])
    return scored


def top_fraction_size(count: int, fraction: float = DEFAULT_BALANCE_FRACTION) -> int:
    """Size of the balanced pool: max(1, ceil(fraction * count))."""
    return max(1, math.ceil(count * fraction))


def select_balanced(
    decompositions: Sequence[Decomposition],
    *,
    rng: Optional[random.Random] = None,
    fraction: float = DEFAULT_BALANCE_FRACTION,
) -> Decomposition:
    """
    Return one of the most balanced decompositions.

    Args:
        decompositions: Exact-sum candidates (at least one)
        rng: Random source for the pick (module ``random`` if None)
        fraction: Share of the ranking to draw from

    Returns:
        One input candidate, unchanged

    Raises:
        EmptyCandidateSetError: If no candidates are given

    Example:
        >>> select_balanced([(1, 20)])
        (1, 20)
        >>> select_balanced([(1, 2), (2, 1)], rng=random.Random(0)) in [(1, 2), (2, 1)]
        True
    """
    if not decompositions:
        raise EmptyCandidateSetError("select_balanced() needs at least one decomposition")
    if len(decompositions) == 1:
        return decompositions[0]

    ranked = balance_ranking(decompositions)
    pool = ranked[:top_fraction_size(len(ranked), fraction)]

    source = rng if rng is not None else random
    chosen, chosen_spread = pool[source.randrange(len(pool))]

    logger.debug(
        f"Picked {chosen} (spread {chosen_spread:.3f}) from the {len(pool)} most "
        f"balanced of {len(ranked)} candidates"
    )
    return chosen
