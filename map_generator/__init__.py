# map_generator/__init__.py

# This file makes the 'map_generator' directory a Python package.
# It also defines the public API of the generation core.

from .color import Color
from .errors import GenerationConfigError, UnknownAttributeError
from .generation import MapGeneration
from .map2d import Attribute, Map2d
from .size import Size2d

__all__ = [
    "Attribute",
    "Color",
    "GenerationConfigError",
    "Map2d",
    "MapGeneration",
    "Size2d",
    "UnknownAttributeError",
]
