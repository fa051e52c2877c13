"""
Validation Utilities

Validates hierarchies before evaluation and JSON payloads before
deserialization.

Policy:
- `validate_hierarchy()` stops at the FIRST invalid value and reports its
  1-based (item, element, value) position.
- `validate_*_payload()` fail fast on the first structural problem.
  With strict=True the payload is also checked against the JSON schema
  shipped next to this module.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import SumwayError
from ..models.hierarchy import Hierarchy, is_positive_number

logger = logging.getLogger(__name__)

POSITIVE_NUMBER_REASON = "must be a positive number"

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _validate_schema(data: Any, name: str) -> None:
    try:
        jsonschema.validate(data, _load_schema(name))
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


class ValidationError(SumwayError):
    """Raised when data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


class InvalidValueError(ValidationError):
    """
    A hierarchy value that is zero, negative or not a number.

    Attributes:
        item_index: 1-based item position
        element_index: 1-based element position within the item
        value_index: 1-based value position within the element
        reason: Why the value was rejected
    """

    def __init__(
        self,
        item_index: int,
        element_index: int,
        value_index: int,
        reason: str = POSITIVE_NUMBER_REASON,
    ):
        self.item_index = item_index
        self.element_index = element_index
        self.value_index = value_index
        self.reason = reason
        super().__init__(
            f"Item {item_index}, element {element_index}, value {value_index}: {reason}",
            path=f"items[{item_index - 1}][{element_index - 1}][{value_index - 1}]",
        )

    @property
    def position(self) -> tuple[int, int, int]:
        """1-based (item, element, value) triple."""
        return (self.item_index, self.element_index, self.value_index)


def validate_hierarchy(hierarchy: Hierarchy) -> None:
    """
    Check every value of a hierarchy, stopping at the first invalid one.

    Args:
        hierarchy: Hierarchy to validate

    Raises:
        InvalidValueError: For the first value that is not a positive number
    """
    for i, item in enumerate(hierarchy.items, start=1):
        for j, element in enumerate(item.elements, start=1):
            for k, value in enumerate(element.values, start=1):
                if not is_positive_number(value):
                    logger.debug(f"Rejected value {value!r} at item {i}, element {j}, value {k}")
                    raise InvalidValueError(i, j, k)


def validate_hierarchy_payload(data: Any, *, strict: bool = False) -> None:
    """
    Validate the nested-list JSON form of a hierarchy.

    Only structure is checked (non-empty lists at every level, numbers as
    leaves). Value positivity is left to validate_hierarchy() so drafts
    with placeholder zeros can still be stored and reloaded.

    Args:
        data: Decoded JSON
        strict: Also validate against hierarchy.schema.json

    Raises:
        ValidationError: If the structure is malformed
    """
    if not isinstance(data, list) or not data:
        raise ValidationError("Hierarchy must be a non-empty list of items", path="items")

    for i, item in enumerate(data):
        if not isinstance(item, list) or not item:
            raise ValidationError(
                f"Item {i + 1} must be a non-empty list of elements",
                path=f"items[{i}]",
            )
        for j, element in enumerate(item):
            if not isinstance(element, list) or not element:
                raise ValidationError(
                    f"Item {i + 1}, element {j + 1} must be a non-empty list of values",
                    path=f"items[{i}][{j}]",
                )
            for k, value in enumerate(element):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValidationError(
                        f"Item {i + 1}, element {j + 1}, value {k + 1}: "
                        f"expected an integer, got {value!r}",
                        path=f"items[{i}][{j}][{k}]",
                    )

    if strict:
        _validate_schema(data, "hierarchy")


def validate_roster_payload(data: Any, *, strict: bool = False) -> None:
    """
    Validate the students.json payload: ``{"students": [...], "next_id": n}``.

    Args:
        data: Decoded JSON
        strict: Also validate against roster.schema.json (score types)

    Raises:
        ValidationError: If required fields are missing or mistyped
    """
    if not isinstance(data, dict):
        raise ValidationError("Roster payload must be an object")

    students = data.get("students", [])
    if not isinstance(students, list):
        raise ValidationError("'students' must be a list", path="students")

    next_id = data.get("next_id", 1)
    if isinstance(next_id, bool) or not isinstance(next_id, int) or next_id < 1:
        raise ValidationError(f"Invalid next_id: {next_id!r}", path="next_id")

    required = ["id", "name"]
    for index, student in enumerate(students):
        if not isinstance(student, dict):
            raise ValidationError(
                f"Student entry {index} must be an object", path=f"students[{index}]"
            )
        missing = [f for f in required if f not in student]
        if missing:
            raise ValidationError(
                f"Student entry {index} is missing fields: {missing}",
                path=f"students[{index}]",
                errors=[f"Missing field: {f}" for f in missing],
            )

    if strict:
        _validate_schema(data, "roster")
