"""
Module: engine.config

Purpose:
    Configuration dataclass for the score engine.
    Immutable configuration with validation on construction.

Key Classes:
    - EngineConfig: Balanced-selection fraction and random seed

Dependencies:
    - dataclasses (std)
    - random (std)

Used By:
    - gradebook.config: GradebookConfig.engine
    - gradebook.controller: RNG for assignments
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

DEFAULT_BALANCE_FRACTION = 0.3


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for the score engine (immutable).

    Attributes:
        balance_fraction: Share of the most balanced decompositions that the
            random pick is drawn from
        seed: Random seed for reproducible picks (None = unseeded)

    Invariants:
        - 0 < balance_fraction <= 1

    Example:
        >>> config = EngineConfig(seed=7)
        >>> config.make_rng().random() == EngineConfig(seed=7).make_rng().random()
        True
    """

    balance_fraction: float = DEFAULT_BALANCE_FRACTION
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not 0 < self.balance_fraction <= 1:
            raise ValueError(
                f"balance_fraction must be in (0, 1]: {self.balance_fraction}"
            )

    def make_rng(self) -> random.Random:
        """Random source for balanced selection, seeded when a seed is set."""
        return random.Random(self.seed)
