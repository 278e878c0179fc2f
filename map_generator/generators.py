# map_generator/generators.py

"""
================================================================================
VALUE GENERATORS
================================================================================
Stateless functions that produce a byte from a scalar input (Generator1d) or
from the coordinates of a cell (Generator2d). Generation steps use them to
add, subtract or shift attribute values.

Data Contract:
---------------
- Generator1d.generate(input) -> byte, for any non-negative integer input.
- Generator2d.generate(x, y) -> byte, for any cell of any map.
- Generator2d.generate_grid(size) -> uint8 array of size.area, holding
  generate(x, y) for every cell in row-major order.
- Side Effects: None.
================================================================================
"""

import math
from dataclasses import dataclass

import numpy as np

from . import config as DEFAULTS
from .errors import GenerationConfigError, validate_byte
from .interpolation import VectorInterpolator, lerp
from .noise import Noise
from .size import Size2d


def calculate_distance(x0: int, y0: int, x1: int, y1: int) -> int:
    """Returns the euclidean distance between 2 points, rounded down."""
    diff_x = abs(x0 - x1)
    diff_y = abs(y0 - y1)
    return math.isqrt(diff_x * diff_x + diff_y * diff_y)


@dataclass(frozen=True)
class Gradient:
    """
    A linear ramp from value_start at start to value_end at start + length.
    """
    start: int
    length: int
    value_start: int
    value_end: int

    def __post_init__(self):
        validate_byte(self.value_start, "gradient's start value")
        validate_byte(self.value_end, "gradient's end value")
        if self.length == 0:
            raise GenerationConfigError("The gradient's length is 0!")
        if self.value_start == self.value_end:
            raise GenerationConfigError(
                f"The gradient's start & end value are both {self.value_start}!"
            )

    def generate(self, input_value: int) -> int:
        if input_value <= self.start:
            return self.value_start
        factor = np.float32(input_value - self.start) / np.float32(self.length)
        return lerp(self.value_start, self.value_end, factor)

    def generate_absolute(self, input_value: int) -> int:
        """Like generate(), but symmetric around start."""
        factor = np.float32(abs(self.start - input_value)) / np.float32(self.length)
        return lerp(self.value_start, self.value_end, factor)


# --- Generator1d ---

class Generator1d:
    """Produces a byte from a scalar input."""

    def generate(self, input_value: int) -> int:
        raise NotImplementedError


@dataclass(frozen=True)
class GradientGenerator(Generator1d):
    gradient: Gradient

    def generate(self, input_value: int) -> int:
        return self.gradient.generate(input_value)


@dataclass(frozen=True)
class AbsoluteGradientGenerator(Generator1d):
    gradient: Gradient

    def generate(self, input_value: int) -> int:
        return self.gradient.generate_absolute(input_value)


@dataclass(frozen=True)
class InputAsOutput(Generator1d):
    """Returns the input itself, limited to the byte range."""

    def generate(self, input_value: int) -> int:
        return min(input_value, DEFAULTS.MAX_VALUE)


@dataclass(frozen=True)
class InterpolateVector1d(Generator1d):
    interpolator: VectorInterpolator

    def generate(self, input_value: int) -> int:
        return self.interpolator.interpolate(input_value)


@dataclass(frozen=True)
class Noise1d(Generator1d):
    noise: Noise

    def generate(self, input_value: int) -> int:
        return self.noise.generate1d(input_value)


# --- Generator2d ---

class Generator2d:
    """Produces a byte from the coordinates of a cell."""

    def generate(self, x: int, y: int) -> int:
        raise NotImplementedError

    def generate_grid(self, size: Size2d) -> np.ndarray:
        values = np.empty(size.area, dtype=np.uint8)
        index = 0
        for y in range(size.height):
            for x in range(size.width):
                values[index] = self.generate(x, y)
                index += 1
        return values


@dataclass(frozen=True)
class ApplyToX(Generator2d):
    generator: Generator1d

    def generate(self, x: int, y: int) -> int:
        return self.generator.generate(x)

    def generate_grid(self, size: Size2d) -> np.ndarray:
        row = np.array([self.generator.generate(x) for x in range(size.width)], dtype=np.uint8)
        return np.tile(row, size.height)


@dataclass(frozen=True)
class ApplyToY(Generator2d):
    generator: Generator1d

    def generate(self, x: int, y: int) -> int:
        return self.generator.generate(y)

    def generate_grid(self, size: Size2d) -> np.ndarray:
        column = np.array([self.generator.generate(y) for y in range(size.height)], dtype=np.uint8)
        return np.repeat(column, size.width)


@dataclass(frozen=True)
class ApplyToDistance(Generator2d):
    """Feeds the distance between the cell and a center into a Generator1d."""
    generator: Generator1d
    center_x: int
    center_y: int

    def generate(self, x: int, y: int) -> int:
        distance = calculate_distance(self.center_x, self.center_y, x, y)
        return self.generator.generate(distance)


@dataclass(frozen=True)
class IndexGenerator(Generator2d):
    """Returns the index of the cell inside its own size, limited to the byte range."""
    size: Size2d

    def generate(self, x: int, y: int) -> int:
        return min(self.size.saturating_to_index(x, y), DEFAULTS.MAX_VALUE)


@dataclass(frozen=True)
class Noise2d(Generator2d):
    noise: Noise

    def generate(self, x: int, y: int) -> int:
        return self.noise.generate2d(x, y)

    def generate_grid(self, size: Size2d) -> np.ndarray:
        return self.noise.generate_grid(size)
