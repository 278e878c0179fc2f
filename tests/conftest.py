import os
import sys

import pytest

# Allow importing the root-level scripts next to the package.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from map_generator.map2d import Map2d
from map_generator.size import Size2d

EXAMPLES_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "examples"))


@pytest.fixture
def map3x3() -> Map2d:
    """A 3x3 map with a single attribute holding the values 1 to 9."""
    map2d = Map2d("test", Size2d(3, 3))
    map2d.create_attribute_from("values", list(range(1, 10)))
    return map2d


@pytest.fixture
def island_path() -> str:
    return os.path.join(EXAMPLES_DIR, "island.json")
