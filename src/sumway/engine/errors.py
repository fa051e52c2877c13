"""
Module: engine.errors

Purpose:
    Exceptions raised by the score engine. Invalid hierarchy values are
    reported by core.schemas.validator.InvalidValueError instead.

Used By:
    - engine.balance: EmptyCandidateSetError
    - engine.assignment: InconsistentResultsError
    - gradebook.controller: SearchSpaceError
"""

from sumway.core.errors import SumwayError


class EngineError(SumwayError):
    """Error raised by the score engine."""
    pass


class EmptyCandidateSetError(EngineError):
    """Balanced selection was asked to choose from no decompositions."""
    pass


class InconsistentResultsError(EngineError):
    """Results do not belong to the hierarchy they are used with."""
    pass


class SearchSpaceError(EngineError):
    """A decomposition search would exceed the configured ceiling."""

    def __init__(self, size: int, limit: int, context: str = ""):
        self.size = size
        self.limit = limit
        where = f" for {context}" if context else ""
        super().__init__(
            f"Search space{where} has {size} combinations, above the limit of {limit}"
        )
