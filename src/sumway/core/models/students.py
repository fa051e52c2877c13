"""
Module: students

Purpose:
    Provides StudentRecord (one student's total and its breakdown) and
    Roster (the persisted student collection with its id counter).

Key Functions:
    - StudentRecord.cleared(): Same student with no score assigned
    - Roster.add(name): Append a new student with the next id
    - Roster.replace(student): Swap in an updated record

Dependencies:
    - dataclasses (std)

Used By:
    - engine.assignment: AssignmentOutcome.apply_to()
    - gradebook.controller: roster management
    - storage.store: students.json
    - output: CSV and PDF exports
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Optional


@dataclass(frozen=True)
class StudentRecord:
    """
    A student and their assigned score breakdown (immutable).

    Attributes:
        id: Stable identifier within a roster
        name: Display name
        total_score: Total score received, None when unset
        item_scores: Assigned score per item
        element_scores: Assigned score per element, one tuple per item

    Invariants:
        - total_score set: sum(item_scores) == total_score and
          sum(element_scores[i]) == item_scores[i] for every item
        - total_score unset: item_scores and element_scores are empty

    Example:
        >>> StudentRecord(1, "Ana", 21, (21,), ((1, 20),)).has_score
        True
    """

    id: int
    name: str
    total_score: Optional[int] = None
    item_scores: tuple[int, ...] = ()
    element_scores: tuple[tuple[int, ...], ...] = ()

    def __post_init__(self) -> None:
        """Validate score consistency on construction."""
        object.__setattr__(self, "item_scores", tuple(self.item_scores))
        object.__setattr__(
            self, "element_scores", tuple(tuple(e) for e in self.element_scores)
        )

        if self.total_score is None:
            if self.item_scores or self.element_scores:
                raise ValueError(
                    f"Student {self.id} has no total score but carries a breakdown"
                )
            return

        if sum(self.item_scores) != self.total_score:
            raise ValueError(
                f"Item scores of student {self.id} sum to {sum(self.item_scores)}, "
                f"expected {self.total_score}"
            )
        if len(self.element_scores) != len(self.item_scores):
            raise ValueError(
                f"Student {self.id} has {len(self.element_scores)} element breakdowns "
                f"for {len(self.item_scores)} items"
            )
        for index, (item_score, elements) in enumerate(
            zip(self.item_scores, self.element_scores), start=1
        ):
            if sum(elements) != item_score:
                raise ValueError(
                    f"Element scores of student {self.id}, item {index} sum to "
                    f"{sum(elements)}, expected {item_score}"
                )

    @property
    def has_score(self) -> bool:
        return self.total_score is not None

    def cleared(self) -> StudentRecord:
        """Same student with total and breakdown removed."""
        return replace(self, total_score=None, item_scores=(), element_scores=())

    def renamed(self, name: str) -> StudentRecord:
        return replace(self, name=name)


@dataclass(frozen=True)
class Roster:
    """
    Ordered student collection plus the next id to hand out (immutable).

    Attributes:
        students: Students in insertion order
        next_id: Id for the next added student

    Invariants:
        - student ids are unique
        - next_id is greater than every existing id
    """

    students: tuple[StudentRecord, ...] = ()
    next_id: int = 1

    def __post_init__(self) -> None:
        """Validate ids on construction."""
        object.__setattr__(self, "students", tuple(self.students))
        ids = [s.id for s in self.students]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate student ids in roster: {ids}")
        if ids and self.next_id <= max(ids):
            raise ValueError(
                f"next_id ({self.next_id}) must exceed every student id (max {max(ids)})"
            )

    def __len__(self) -> int:
        return len(self.students)

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(self.students)

    def get(self, student_id: int) -> Optional[StudentRecord]:
        for student in self.students:
            if student.id == student_id:
                return student
        return None

    def add(self, name: Optional[str] = None) -> Roster:
        """Append a student named ``name`` (default ``"Student {id}"``)."""
        student = StudentRecord(id=self.next_id, name=name or f"Student {self.next_id}")
        return Roster(self.students + (student,), self.next_id + 1)

    def remove(self, student_id: int) -> Roster:
        return Roster(
            tuple(s for s in self.students if s.id != student_id),
            self.next_id,
        )

    def replace(self, student: StudentRecord) -> Roster:
        """Swap the record with the same id for ``student``."""
        return Roster(
            tuple(student if s.id == student.id else s for s in self.students),
            self.next_id,
        )

    def cleared(self) -> Roster:
        """Every student with their scores removed."""
        return Roster(tuple(s.cleared() for s in self.students), self.next_id)
