"""
Serialization Utilities

Provides to/from JSON-ready dict utilities for the core models.

- Hierarchies are stored as plain nested lists (items → elements → values).
- Rosters are stored as ``{"students": [...], "next_id": n}``.
- Results are never serialized; they are recomputed from the hierarchy.
"""

from __future__ import annotations

import logging
from typing import Any

from ..models.hierarchy import Hierarchy
from ..models.students import Roster, StudentRecord
from ..schemas.validator import (
    ValidationError,
    validate_hierarchy_payload,
    validate_roster_payload,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Hierarchy Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_hierarchy(hierarchy: Hierarchy) -> list[list[list[int]]]:
    """
    Serialize a Hierarchy to nested lists.

    Args:
        hierarchy: Hierarchy to serialize

    Returns:
        Nested list suitable for JSON serialization
    """
    return hierarchy.to_lists()


def deserialize_hierarchy(data: Any, *, validate: bool = True, strict: bool = False) -> Hierarchy:
    """
    Deserialize a Hierarchy from nested lists.

    Args:
        data: Decoded JSON
        validate: Whether to check the structure first
        strict: Also check against the JSON schema (needs validate)

    Returns:
        Hierarchy instance

    Raises:
        ValidationError: If validate=True and the structure is malformed
    """
    if validate:
        validate_hierarchy_payload(data, strict=strict)
    try:
        return Hierarchy.from_lists(data)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Cannot build hierarchy: {e}") from e


# ─────────────────────────────────────────────────────────────────────────────
# Roster Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_student(student: StudentRecord) -> dict[str, Any]:
    """Serialize a StudentRecord to a dictionary."""
    return {
        "id": student.id,
        "name": student.name,
        "total_score": student.total_score,
        "item_scores": list(student.item_scores),
        "element_scores": [list(e) for e in student.element_scores],
    }


def deserialize_student(data: dict[str, Any]) -> StudentRecord:
    """
    Deserialize a StudentRecord.

    Raises:
        ValidationError: If the scores break the record invariants
    """
    try:
        return StudentRecord(
            id=data["id"],
            name=data["name"],
            total_score=data.get("total_score"),
            item_scores=tuple(data.get("item_scores", [])),
            element_scores=tuple(tuple(e) for e in data.get("element_scores", [])),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Invalid student record {data.get('id')!r}: {e}"
        ) from e


def serialize_roster(roster: Roster) -> dict[str, Any]:
    """Serialize a Roster to the students.json payload."""
    return {
        "students": [serialize_student(s) for s in roster.students],
        "next_id": roster.next_id,
    }


def deserialize_roster(data: Any, *, validate: bool = True, strict: bool = False) -> Roster:
    """
    Deserialize a Roster from the students.json payload.

    A stale next_id (not above every student id) is raised to the largest
    id plus one so the students are kept.

    Args:
        data: Decoded JSON
        validate: Whether to check the payload first
        strict: Also check against the JSON schema (needs validate)

    Returns:
        Roster instance

    Raises:
        ValidationError: If the payload is malformed
    """
    if validate:
        validate_roster_payload(data, strict=strict)
    students = tuple(deserialize_student(s) for s in data.get("students", []))
    next_id = data.get("next_id", 1)
    try:
        if students and next_id <= max(s.id for s in students):
            repaired = max(s.id for s in students) + 1
            logger.warning(f"next_id {next_id} is not above every student id; using {repaired}")
            next_id = repaired
        return Roster(students=students, next_id=next_id)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid roster: {e}") from e
