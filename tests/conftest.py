import random
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import sumway
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from sumway.core.models import Hierarchy


# Common test fixtures
@pytest.fixture
def single_item_hierarchy() -> Hierarchy:
    """One item with two elements: [1, 2] and [10, 20]."""
    return Hierarchy.from_lists([[[1, 2], [10, 20]]])


@pytest.fixture
def two_item_hierarchy() -> Hierarchy:
    """Two items, each with one element [1, 2]."""
    return Hierarchy.from_lists([[[1, 2]], [[1, 2]]])


@pytest.fixture
def rubric_hierarchy() -> Hierarchy:
    """A realistic rubric: three items with several elements each."""
    return Hierarchy.from_lists([
        [[2, 4, 6], [1, 3, 5], [5, 10]],
        [[3, 6, 9], [2, 4]],
        [[1, 2, 3, 4], [5, 10, 15], [2, 4]],
    ])


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic balanced picks."""
    return random.Random(1234)
