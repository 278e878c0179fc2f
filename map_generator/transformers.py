# map_generator/transformers.py

"""
================================================================================
TRANSFORMERS
================================================================================
Rules that turn 1 or 2 byte inputs into a byte output: threshold overwrites,
sparse overwrite maps, 2d lookup tables and constants.

A 2d lookup table partitions the input space [0, 255] x [0, 255] into
size.width x size.height equal cells. For example a table of size 3 x 2
splits the first input into [0, 85], [86, 171] & [172, 255] and the second
into [0, 127] & [128, 255]:

                 input 0
           0..85   86..171  172..255
         +-------+--------+---------+
  0..127 |   0   |   1    |    2    |
input 1  +-------+--------+---------+
128..255 |   3   |   4    |    5    |
         +-------+--------+---------+

Data Contract:
---------------
- Construction fails for values outside the byte range, for empty overwrite
  maps, and for lookup tables whose number of values differs from the area
  of their size or is below 2.
- Side Effects: None.
================================================================================
"""

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

from . import config as DEFAULTS
from .errors import GenerationConfigError, validate_byte
from .size import Size2d


@dataclass(frozen=True)
class OverwriteWithThreshold:
    value: int
    threshold: int

    def __post_init__(self):
        validate_byte(self.value, "overwrite value")
        validate_byte(self.threshold, "threshold")

    def overwrite_if_above(self, input_value: int) -> int:
        return self.value if input_value >= self.threshold else input_value

    def overwrite_output_if_above(self, input_value: int, output: int) -> int:
        return self.value if input_value >= self.threshold else output

    def overwrite_if_below(self, input_value: int) -> int:
        return self.value if input_value <= self.threshold else input_value

    def overwrite_output_if_below(self, input_value: int, output: int) -> int:
        return self.value if input_value <= self.threshold else output


def _calculate_cell_size(number_of_cells: int) -> int:
    return math.ceil(DEFAULTS.LOOKUP_TABLE_INPUT_RANGE / number_of_cells)


class LookupTable2d:
    def __init__(self, size: Size2d, values: Sequence[int]):
        values = [validate_byte(value, "lookup table value") for value in values]
        if size.area != len(values):
            raise GenerationConfigError(
                f"The size of the lookup table ({size.area}) doesn't match "
                f"the number of values ({len(values)})!"
            )
        if len(values) < 2:
            raise GenerationConfigError("The lookup table has too few values!")

        self.size = size
        self.cell_size = Size2d(_calculate_cell_size(size.width), _calculate_cell_size(size.height))
        self.values = values

    def lookup(self, input0: int, input1: int) -> int:
        x = input0 // self.cell_size.width
        y = input1 // self.cell_size.height
        return self.values[self.size.to_index_risky(x, y)]

    def __eq__(self, other):
        if not isinstance(other, LookupTable2d):
            return NotImplemented
        return self.size == other.size and self.values == other.values

    def __repr__(self):
        return f"LookupTable2d({self.size!r}, {self.values!r})"


# --- Transformer1d ---

class Transformer1d:
    def transform(self, input_value: int) -> int:
        raise NotImplementedError


@dataclass(frozen=True)
class OverwriteIfAbove1d(Transformer1d):
    threshold: OverwriteWithThreshold

    def transform(self, input_value: int) -> int:
        return self.threshold.overwrite_if_above(input_value)


@dataclass(frozen=True)
class OverwriteIfBelow1d(Transformer1d):
    threshold: OverwriteWithThreshold

    def transform(self, input_value: int) -> int:
        return self.threshold.overwrite_if_below(input_value)


class OverwriteWithMap1d(Transformer1d):
    """Replaces mapped inputs and passes all others through unchanged."""

    def __init__(self, overwrites: Mapping[int, int]):
        if not overwrites:
            raise GenerationConfigError("OverwriteWithMap with empty map is invalid!")
        self.overwrites = {
            validate_byte(key, "overwritten value"): validate_byte(value, "overwrite value")
            for key, value in overwrites.items()
        }

    def transform(self, input_value: int) -> int:
        return self.overwrites.get(input_value, input_value)

    def __eq__(self, other):
        return isinstance(other, OverwriteWithMap1d) and self.overwrites == other.overwrites

    def __repr__(self):
        return f"OverwriteWithMap1d({self.overwrites!r})"


def overwrite_if_above(value: int, threshold: int) -> Transformer1d:
    return OverwriteIfAbove1d(OverwriteWithThreshold(value, threshold))


def overwrite_if_below(value: int, threshold: int) -> Transformer1d:
    return OverwriteIfBelow1d(OverwriteWithThreshold(value, threshold))


# --- Transformer2d ---

class Transformer2d:
    def transform(self, input0: int, input1: int) -> int:
        raise NotImplementedError


class Lookup2d(Transformer2d):
    def __init__(self, table: LookupTable2d):
        self.table = table

    def transform(self, input0: int, input1: int) -> int:
        return self.table.lookup(input0, input1)

    def __eq__(self, other):
        return isinstance(other, Lookup2d) and self.table == other.table

    def __repr__(self):
        return f"Lookup2d({self.table!r})"


@dataclass(frozen=True)
class Const2d(Transformer2d):
    value: int

    def __post_init__(self):
        validate_byte(self.value, "constant value")

    def transform(self, input0: int, input1: int) -> int:
        return self.value


@dataclass(frozen=True)
class OverwriteIfAbove2d(Transformer2d):
    """Returns the value if the first input reaches the threshold, else the second input."""
    threshold: OverwriteWithThreshold

    def transform(self, input0: int, input1: int) -> int:
        return self.threshold.overwrite_output_if_above(input0, input1)


@dataclass(frozen=True)
class OverwriteIfBelow2d(Transformer2d):
    """Returns the value if the first input is at most the threshold, else the second input."""
    threshold: OverwriteWithThreshold

    def transform(self, input0: int, input1: int) -> int:
        return self.threshold.overwrite_output_if_below(input0, input1)
