"""
Schema Validation Package

Validation of hierarchies (before evaluation) and JSON payloads (before
deserialization).
"""

from .validator import (
    ValidationError,
    InvalidValueError,
    POSITIVE_NUMBER_REASON,
    is_positive_number,
    validate_hierarchy,
    validate_hierarchy_payload,
    validate_roster_payload,
)

__all__ = [
    "ValidationError",
    "InvalidValueError",
    "POSITIVE_NUMBER_REASON",
    "is_positive_number",
    "validate_hierarchy",
    "validate_hierarchy_payload",
    "validate_roster_payload",
]
