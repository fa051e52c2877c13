"""Core utilities: JSON (de)serialization of the models."""

from .serialization import (
    serialize_hierarchy,
    deserialize_hierarchy,
    serialize_student,
    deserialize_student,
    serialize_roster,
    deserialize_roster,
)

__all__ = [
    "serialize_hierarchy",
    "deserialize_hierarchy",
    "serialize_student",
    "deserialize_student",
    "serialize_roster",
    "deserialize_roster",
]
