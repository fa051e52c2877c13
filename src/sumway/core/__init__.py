"""
Sumway Core Package

Shared data models, validation and serialization. These models are the
single source of truth for every other package.

1. **Immutable Data Models**
   Frozen dataclasses; edits create new instances.

2. **Derived Values Are Never Stored**
   Results are recomputed from the hierarchy, never persisted or patched.

3. **Validation Before Computation**
   A hierarchy is checked value by value before any sums are generated.
"""

from .errors import SumwayError
from .models import Hierarchy, Item, ValueSet, Results, StudentRecord, Roster
from .schemas import ValidationError, InvalidValueError

__all__ = [
    "SumwayError",
    "Hierarchy",
    "Item",
    "ValueSet",
    "Results",
    "StudentRecord",
    "Roster",
    "ValidationError",
    "InvalidValueError",
]
