"""
Module: engine.assignment

Purpose:
    Turn a student's total score into a per-item and per-element breakdown.
    Decomposes the total over the item sums, picks a balanced item split,
    then decomposes each item score over that item's elements.

Key Functions:
    - assign(): Build an AssignmentOutcome for one total score

Key Classes:
    - AssignmentStatus: CLEARED / ASSIGNED / UNREACHABLE
    - AssignmentOutcome: Status plus the breakdown

Algorithm:
    1. No total → CLEARED, nothing searched
    2. Decompose total over results.item_sums
    3. No exact match → UNREACHABLE (caller leaves the student untouched)
    4. Balanced pick → item scores
    5. Per item: decompose the item score over its elements, balanced pick

    Step 5 cannot come back empty when the results belong to the hierarchy:
    every item score was drawn from that item's SumSet, which is exactly
    the set of sums its elements can make.

Used By:
    - gradebook.controller: Gradebook.set_total_score()
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from sumway.core.models import Hierarchy, Results, StudentRecord

from .balance import select_balanced
from .config import DEFAULT_BALANCE_FRACTION
from .decompose import decompose
from .errors import InconsistentResultsError

logger = logging.getLogger(__name__)


class AssignmentStatus(Enum):
    """
    Outcome of an assignment request.

    Attributes:
        CLEARED: No total given; the breakdown is removed
        ASSIGNED: A breakdown was found
        UNREACHABLE: The total has no exact decomposition; nothing changes
    """

    CLEARED = auto()
    ASSIGNED = auto()
    UNREACHABLE = auto()


@dataclass(frozen=True)
class AssignmentOutcome:
    """
    Result of assign() (immutable).

    Attributes:
        status: What happened
        total_score: The requested total (None for CLEARED)
        item_scores: Chosen score per item (empty unless ASSIGNED)
        element_scores: Chosen score per element, per item (empty unless ASSIGNED)
    """

    status: AssignmentStatus
    total_score: Optional[int] = None
    item_scores: tuple[int, ...] = ()
    element_scores: tuple[tuple[int, ...], ...] = ()

    @property
    def changed(self) -> bool:
        """True when applying the outcome modifies a student."""
        return self.status is not AssignmentStatus.UNREACHABLE

    def apply_to(self, student: StudentRecord) -> StudentRecord:
        """
        Apply the outcome to a student record.

        Returns:
            Updated record; the same record for UNREACHABLE
        """
        if self.status is AssignmentStatus.UNREACHABLE:
            return student
        if self.status is AssignmentStatus.CLEARED:
            return student.cleared()
        return StudentRecord(
            id=student.id,
            name=student.name,
            total_score=self.total_score,
            item_scores=self.item_scores,
            element_scores=self.element_scores,
        )


def assign(
    total_score: Optional[int],
    results: Results,
    hierarchy: Hierarchy,
    *,
    rng: Optional[random.Random] = None,
    fraction: float = DEFAULT_BALANCE_FRACTION,
) -> AssignmentOutcome:
    """
    Break a total score down to items and elements.

    Args:
        total_score: Total the student received, None to clear
        results: Results evaluated from ``hierarchy``
        hierarchy: The hierarchy the results were computed from
        rng: Random source for the balanced picks
        fraction: Balanced-pool fraction passed to select_balanced()

    Returns:
        AssignmentOutcome (CLEARED, ASSIGNED or UNREACHABLE)

    Raises:
        InconsistentResultsError: If results and hierarchy do not match

    Example:
        >>> h = Hierarchy.from_lists([[[1, 2], [10, 20]]])
        >>> assign(21, evaluate(h), h).element_scores
        ((1, 20),)
    """
    if total_score is None:
        return AssignmentOutcome(AssignmentStatus.CLEARED)

    if results.item_count != len(hierarchy.items):
        raise InconsistentResultsError(
            f"Results cover {results.item_count} items but the hierarchy has "
            f"{len(hierarchy.items)}"
        )

    item_candidates = decompose(total_score, results.item_sums)
    if not item_candidates:
        logger.info(f"No exact item breakdown for total {total_score}")
        return AssignmentOutcome(AssignmentStatus.UNREACHABLE, total_score=total_score)

    item_scores = select_balanced(item_candidates, rng=rng, fraction=fraction)

    element_scores = []
    for index, (item, item_score) in enumerate(zip(hierarchy.items, item_scores), start=1):
        element_candidates = decompose(item_score, item.value_sets)
        if not element_candidates:
            raise InconsistentResultsError(
                f"Item {index} cannot make {item_score}; results are stale"
            )
        element_scores.append(select_balanced(element_candidates, rng=rng, fraction=fraction))

    logger.debug(f"Assigned {total_score} as items {item_scores}, elements {element_scores}")
    return AssignmentOutcome(
        AssignmentStatus.ASSIGNED,
        total_score=total_score,
        item_scores=tuple(item_scores),
        element_scores=tuple(element_scores),
    )
