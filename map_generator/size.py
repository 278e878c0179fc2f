# map_generator/size.py

"""
================================================================================
GRID GEOMETRY
================================================================================
Defines the size of a map in 2 dimensions and the conversion between points
and indices of its cells.

      0   1
  +----------> x-axis
  |
  | +---+---+
0 | | 0 | 1 |
  | +---+---+
1 | | 2 | 3 |
  | +---+---+
2 | | 4 | 5 |
  | +---+---+
  v
y-axis

A size with width 2 & height 3. The number inside each cell is its index.

Data Contract:
---------------
- Inputs: width & height, both greater than 0.
- Outputs: row-major indices (index = y * width + x) and points.
- Side Effects: None.
- Invariants: A Size2d is immutable once built.
================================================================================
"""

from dataclasses import dataclass
from typing import Optional

from .errors import GenerationConfigError


@dataclass(frozen=True)
class Size2d:
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise GenerationConfigError(
                f"Size2d({self.width}, {self.height}) is invalid: "
                f"width & height must be greater than 0!"
            )

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_x(self, index: int) -> int:
        return index % self.width

    def to_y(self, index: int) -> int:
        return index // self.width

    def to_x_and_y(self, index: int) -> tuple[int, int]:
        return self.to_x(index), self.to_y(index)

    def to_index(self, x: int, y: int) -> Optional[int]:
        """Converts a point to the equivalent index, or None if it is outside."""
        if self.is_inside(x, y):
            return self.to_index_risky(x, y)
        return None

    def to_index_risky(self, x: int, y: int) -> int:
        """
        Converts a point to the equivalent index without any check.
        The result is wrong for points outside, so the caller must know better.
        """
        return y * self.width + x

    def saturating_to_index(self, x: int, y: int) -> int:
        """
        Converts a point to the equivalent index. Coordinates beyond the border
        are limited to the last column & row.
        """
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        return y * self.width + x

    def __add__(self, other: "Size2d") -> "Size2d":
        return Size2d(self.width + other.width, self.height + other.height)

    def __mul__(self, other: "Size2d") -> "Size2d":
        return Size2d(self.width * other.width, self.height * other.height)
