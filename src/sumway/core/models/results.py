"""
Module: results

Purpose:
    Provides the Results dataclass - the derived artifact of evaluating a
    Hierarchy. Holds the attainable sums of every item and the attainable
    grand totals. Results are recomputed wholesale, never patched.

Dependencies:
    - dataclasses (std)

Used By:
    - engine.evaluator: evaluate() builds it
    - engine.assignment: assign() decomposes over item_sums
    - gradebook.controller: cached until the hierarchy changes
"""

from __future__ import annotations

from dataclasses import dataclass

# Attainable sums of one group, sorted descending, no duplicates.
SumSet = tuple[int, ...]


@dataclass(frozen=True)
class Results:
    """
    Attainable sums per item and overall (immutable).

    Attributes:
        item_sums: One SumSet per item, in hierarchy order
        total_sums: Attainable grand totals

    Invariants:
        - total_sums == generate_sums(item_sums)

    Example:
        >>> results = evaluate(Hierarchy.from_lists([[[1, 2]], [[1, 2]]]))
        >>> results.total_sums
        (4, 3, 2)
    """

    item_sums: tuple[SumSet, ...]
    total_sums: SumSet

    @property
    def item_count(self) -> int:
        return len(self.item_sums)

    @property
    def max_total(self) -> int:
        """Highest attainable total (0 when nothing is attainable)."""
        return self.total_sums[0] if self.total_sums else 0

    @property
    def min_total(self) -> int:
        """Lowest attainable total (0 when nothing is attainable)."""
        return self.total_sums[-1] if self.total_sums else 0

    def is_attainable(self, score: int) -> bool:
        """Check whether ``score`` is one of the attainable totals."""
        return score in self.total_sums
