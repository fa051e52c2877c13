"""
Module: gradebook.config

Purpose:
    Configuration dataclass for the gradebook controller. Immutable
    configuration with validation on construction.

Key Classes:
    - GradebookConfig: Storage location, engine settings and search ceiling

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - gradebook.controller: Gradebook
    - cli: built from command-line options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from sumway.common.paths import get_app_data_dir
from sumway.engine.config import EngineConfig


@dataclass(frozen=True)
class GradebookConfig:
    """
    Configuration for a gradebook (immutable).

    Attributes:
        data_dir: Directory for the JSON files (None = app data dir)
        engine: Engine settings (balanced-pool fraction, seed)
        max_search_space: Largest unpruned combination count a single
            decomposition may have (None = unbounded)
        autosave: Persist every change to the store

    Invariants:
        - max_search_space is None or > 0

    Example:
        >>> config = GradebookConfig(data_dir=Path("workspace"), max_search_space=100_000)
        >>> config.resolved_data_dir
        PosixPath('workspace')
    """

    data_dir: Optional[Path] = None
    engine: EngineConfig = field(default_factory=EngineConfig)
    max_search_space: Optional[int] = None
    autosave: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_search_space is not None and self.max_search_space <= 0:
            raise ValueError(
                f"max_search_space must be positive: {self.max_search_space}"
            )

    @property
    def resolved_data_dir(self) -> Path:
        """data_dir, or the platform application data directory."""
        return Path(self.data_dir) if self.data_dir is not None else get_app_data_dir()

    def exceeds_search_space(self, size: int) -> bool:
        """True when ``size`` is above the configured ceiling."""
        return self.max_search_space is not None and size > self.max_search_space
