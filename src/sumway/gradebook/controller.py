"""
Module: gradebook.controller

Purpose:
    Own the application state around the engine: the hierarchy being
    edited, the Results derived from it and the student roster.
    Edit → Invalidate → Calculate → Assign → Persist

Key Classes:
    - Gradebook: State owner and single entry point for front ends
    - GradebookError: Exception for invalid gradebook requests

State Rules:
    - Every hierarchy edit replaces the hierarchy and runs _invalidate():
      cached Results are dropped and every student's scores are cleared
      (ids and names stay).
    - Results are only ever produced by calculate(), wholesale.
    - A total with no exact breakdown leaves the student untouched; the
      UNREACHABLE outcome is returned to the caller.

Dependencies:
    - sumway.engine: evaluate, assign, search_space_size
    - sumway.storage: GradebookStore

Used By:
    - sumway.cli: command-line front end
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sumway.core.errors import SumwayError
from sumway.core.models import Hierarchy, Results, Roster, StudentRecord
from sumway.engine import (
    AssignmentOutcome,
    AssignmentStatus,
    SearchSpaceError,
    assign,
    evaluate,
    filter_scores,
    search_space_size,
)
from sumway.storage import GradebookStore

from .config import GradebookConfig

logger = logging.getLogger(__name__)


class GradebookError(SumwayError):
    """Invalid request against the gradebook state."""
    pass


class Gradebook:
    """
    Hierarchy, Results and roster owner.

    Attributes:
        config: Gradebook configuration
        store: Optional persistence target (autosaved when config.autosave)

    Example:
        >>> book = Gradebook(Hierarchy.from_lists([[[1, 2], [10, 20]]]))
        >>> book.calculate().total_sums
        (22, 21, 12, 11)
        >>> student = book.add_student("Ana")
        >>> book.set_total_score(student.id, 21).item_scores
        (21,)
    """

    def __init__(
        self,
        hierarchy: Optional[Hierarchy] = None,
        roster: Optional[Roster] = None,
        *,
        config: Optional[GradebookConfig] = None,
        store: Optional[GradebookStore] = None,
    ) -> None:
        self.config = config or GradebookConfig()
        self.store = store
        self._hierarchy = hierarchy if hierarchy is not None else Hierarchy.default()
        self._roster = roster if roster is not None else Roster()
        self._results: Optional[Results] = None
        self._rng = self.config.engine.make_rng()

    @classmethod
    def open(cls, config: Optional[GradebookConfig] = None) -> Gradebook:
        """
        Load a gradebook from its data directory.

        Args:
            config: Configuration (data_dir selects the store)

        Returns:
            Gradebook with the stored hierarchy and roster, no Results yet
        """
        config = config or GradebookConfig()
        store = GradebookStore(config.resolved_data_dir)
        hierarchy = store.load_hierarchy()
        roster = _drop_mismatched_scores(store.load_roster(), len(hierarchy))
        logger.info(
            f"Opened gradebook in {store.root}: {len(hierarchy)} items, {len(roster)} students"
        )
        return cls(hierarchy, roster, config=config, store=store)

    # ─────────────────────────────────────────────────────────────────────────
    # State access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def hierarchy(self) -> Hierarchy:
        return self._hierarchy

    @property
    def results(self) -> Optional[Results]:
        """Cached Results, None until calculate() succeeds after an edit."""
        return self._results

    @property
    def roster(self) -> Roster:
        return self._roster

    @property
    def students(self) -> tuple[StudentRecord, ...]:
        return self._roster.students

    # ─────────────────────────────────────────────────────────────────────────
    # Evaluation
    # ─────────────────────────────────────────────────────────────────────────

    def calculate(self) -> Results:
        """
        Evaluate the hierarchy and cache the Results.

        On success the validated hierarchy is persisted.

        Raises:
            InvalidValueError: First invalid value; Results stay unset
        """
        results = evaluate(self._hierarchy)
        self._results = results
        if self.store is not None and self.config.autosave:
            self.store.save_hierarchy(self._hierarchy)
        return results

    def ensure_results(self) -> Results:
        """Cached Results, calculating them first if needed."""
        if self._results is None:
            return self.calculate()
        return self._results

    def attainable_scores(self, query: str = "") -> List[int]:
        """Attainable totals whose digits contain ``query``."""
        return filter_scores(self.ensure_results().total_sums, query)

    # ─────────────────────────────────────────────────────────────────────────
    # Hierarchy edits
    # ─────────────────────────────────────────────────────────────────────────

    def replace_hierarchy(self, hierarchy: Hierarchy) -> None:
        """Swap in a whole new hierarchy."""
        self._edit(lambda _: hierarchy)

    def add_item(self) -> None:
        self._edit(lambda h: h.add_item())

    def remove_item(self, item_index: int) -> None:
        self._edit(lambda h: h.remove_item(item_index))

    def add_element(self, item_index: int) -> None:
        self._edit(lambda h: h.add_element(item_index))

    def remove_element(self, item_index: int, element_index: int) -> None:
        self._edit(lambda h: h.remove_element(item_index, element_index))

    def add_value(self, item_index: int, element_index: int) -> None:
        self._edit(lambda h: h.add_value(item_index, element_index))

    def remove_value(self, item_index: int, element_index: int, value_index: int) -> None:
        self._edit(lambda h: h.remove_value(item_index, element_index, value_index))

    def update_value(
        self, item_index: int, element_index: int, value_index: int, value: int
    ) -> None:
        self._edit(lambda h: h.update_value(item_index, element_index, value_index, value))

    def _edit(self, change: Callable[[Hierarchy], Hierarchy]) -> None:
        """Apply an edit; a rejected edit leaves every piece of state as it was."""
        try:
            updated = change(self._hierarchy)
        except (IndexError, ValueError) as e:
            raise GradebookError(str(e)) from e
        self._hierarchy = updated
        self._invalidate()
        if self.store is not None and self.config.autosave:
            self.store.save_draft(self._hierarchy)

    def _invalidate(self) -> None:
        """Drop cached Results and every student's assignment."""
        self._results = None
        if any(s.has_score for s in self._roster):
            logger.info("Hierarchy changed: cleared all assigned scores")
        self._set_roster(self._roster.cleared())

    # ─────────────────────────────────────────────────────────────────────────
    # Students
    # ─────────────────────────────────────────────────────────────────────────

    def student(self, student_id: int) -> StudentRecord:
        """
        Look up a student.

        Raises:
            GradebookError: Unknown id
        """
        student = self._roster.get(student_id)
        if student is None:
            raise GradebookError(f"No student with id {student_id}")
        return student

    def add_student(self, name: Optional[str] = None) -> StudentRecord:
        """Add a student; the default name is ``"Student {id}"``."""
        self._set_roster(self._roster.add(name))
        student = self._roster.students[-1]
        logger.debug(f"Added student {student.id} ({student.name})")
        return student

    def remove_student(self, student_id: int) -> None:
        self.student(student_id)
        self._set_roster(self._roster.remove(student_id))

    def rename_student(self, student_id: int, name: str) -> StudentRecord:
        student = self.student(student_id).renamed(name)
        self._set_roster(self._roster.replace(student))
        return student

    def set_total_score(self, student_id: int, score: Optional[int]) -> AssignmentOutcome:
        """
        Set a student's total and recompute the breakdown.

        Args:
            student_id: Student to update
            score: Total received, None to clear

        Returns:
            The outcome; for UNREACHABLE the student is left unchanged

        Raises:
            GradebookError: Unknown id
            InvalidValueError: The hierarchy cannot be evaluated
            SearchSpaceError: A search would exceed max_search_space
        """
        student = self.student(student_id)

        if score is None:
            outcome = AssignmentOutcome(AssignmentStatus.CLEARED)
        else:
            results = self.ensure_results()
            if not results.is_attainable(score):
                outcome = AssignmentOutcome(AssignmentStatus.UNREACHABLE, total_score=score)
            else:
                self._check_search_space(results)
                outcome = assign(
                    score,
                    results,
                    self._hierarchy,
                    rng=self._rng,
                    fraction=self.config.engine.balance_fraction,
                )

        if not outcome.changed:
            logger.warning(
                f"Score {score} for {student.name} has no exact breakdown; left unchanged"
            )
            return outcome

        self._set_roster(self._roster.replace(outcome.apply_to(student)))
        logger.info(
            f"{student.name}: total {score}"
            + (f" → items {list(outcome.item_scores)}" if outcome.item_scores else "")
        )
        return outcome

    def _check_search_space(self, results: Results) -> None:
        if self.config.max_search_space is None:
            return
        size = search_space_size(results.item_sums)
        if self.config.exceeds_search_space(size):
            raise SearchSpaceError(size, self.config.max_search_space, "the item totals")
        for index, item in enumerate(self._hierarchy.items, start=1):
            size = search_space_size(item.value_sets)
            if self.config.exceeds_search_space(size):
                raise SearchSpaceError(size, self.config.max_search_space, f"item {index}")

    # ─────────────────────────────────────────────────────────────────────────
    # Reset / persistence
    # ─────────────────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Back to the default hierarchy with no students; storage is wiped."""
        self._hierarchy = Hierarchy.default()
        self._results = None
        self._roster = Roster()
        if self.store is not None:
            self.store.clear()
        logger.info("Gradebook reset")

    def _set_roster(self, roster: Roster) -> None:
        self._roster = roster
        if self.store is not None and self.config.autosave:
            self.store.save_roster(roster)


def _drop_mismatched_scores(roster: Roster, item_count: int) -> Roster:
    """Clear stored breakdowns that do not fit the loaded hierarchy."""
    stale = [s for s in roster if s.has_score and len(s.item_scores) != item_count]
    if not stale:
        return roster
    logger.warning(f"Cleared {len(stale)} stored breakdowns that do not match the hierarchy")
    for student in stale:
        roster = roster.replace(student.cleared())
    return roster
