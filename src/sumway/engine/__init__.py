"""
Module: engine

Purpose:
    Score combination and decomposition engine. Computes every attainable
    total of a scoring hierarchy and breaks a received total back down
    into a balanced per-item, per-element assignment.

Key Functions:
    - generate_sums(): Attainable sums, one value per group
    - evaluate(): Per-item and total sums of a hierarchy
    - decompose(): Every exact-sum decomposition of a target
    - select_balanced(): Balanced random pick among decompositions
    - assign(): Full breakdown of a student's total

Key Classes:
    - EngineConfig: Balanced-pool fraction and seed
    - AssignmentOutcome: Typed assignment result

Dependencies:
    - sumway.core.models: Hierarchy, Results, StudentRecord
    - sumway.core.schemas.validator: Hierarchy validation

Used By:
    - sumway.gradebook.controller: Gradebook
"""

from .config import EngineConfig
from .sums import generate_sums
from .evaluator import evaluate
from .decompose import decompose, search_space_size, Decomposition
from .balance import select_balanced, balance_ranking, spread
from .assignment import assign, AssignmentOutcome, AssignmentStatus
from .lookup import filter_scores, parse_score
from .errors import (
    EngineError,
    EmptyCandidateSetError,
    InconsistentResultsError,
    SearchSpaceError,
)

__all__ = [
    "EngineConfig",
    "generate_sums",
    "evaluate",
    "decompose",
    "search_space_size",
    "Decomposition",
    "select_balanced",
    "balance_ranking",
    "spread",
    "assign",
    "AssignmentOutcome",
    "AssignmentStatus",
    "filter_scores",
    "parse_score",
    "EngineError",
    "EmptyCandidateSetError",
    "InconsistentResultsError",
    "SearchSpaceError",
]
