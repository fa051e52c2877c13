"""
Core Models Package

Immutable, validated data models that serve as the single source of truth.

All models in this package are frozen dataclasses. Edits build new
instances, so an edit to one item can never leak into another, and
derived Results can be cached safely until the hierarchy is replaced.
"""

from .hierarchy import ValueSet, Item, Hierarchy, PLACEHOLDER_VALUE
from .results import Results, SumSet
from .students import StudentRecord, Roster

__all__ = [
    "ValueSet",
    "Item",
    "Hierarchy",
    "PLACEHOLDER_VALUE",
    "Results",
    "SumSet",
    "StudentRecord",
    "Roster",
]
