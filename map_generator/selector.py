# map_generator/selector.py

"""
Selectors choose a value (a byte, a color, ...) for a byte input.

The rendering side uses a ColorSelector per attribute to color a map; the
generation core only defines the strategies.
"""

from typing import Generic, Mapping, Sequence, TypeVar

import numpy as np

from .color import Color
from .interpolation import VectorInterpolator, interpolate_value

V = TypeVar("V")


class Selector(Generic[V]):
    def get(self, input_value: int) -> V:
        raise NotImplementedError


class ConstSelector(Selector[V]):
    def __init__(self, value: V):
        self.value = value

    def get(self, input_value: int) -> V:
        return self.value

    def __eq__(self, other):
        return isinstance(other, ConstSelector) and self.value == other.value


class InterpolatePairSelector(Selector[V]):
    """Interpolates between 2 values, reaching the second one at input 255."""

    def __init__(self, first: V, second: V):
        self.first = first
        self.second = second

    def get(self, input_value: int) -> V:
        return interpolate_value(self.first, self.second, np.float32(input_value) / np.float32(255.0))

    def __eq__(self, other):
        return (
            isinstance(other, InterpolatePairSelector)
            and self.first == other.first
            and self.second == other.second
        )


class InterpolateVectorSelector(Selector[V]):
    def __init__(self, vector: Sequence[tuple]):
        self.interpolator = VectorInterpolator(vector)

    def get(self, input_value: int) -> V:
        return self.interpolator.interpolate(input_value)

    def __eq__(self, other):
        return isinstance(other, InterpolateVectorSelector) and self.interpolator == other.interpolator


class LookupSelector(Selector[V]):
    """Returns the value mapped to the input, or the default for unmapped inputs."""

    def __init__(self, lookup: Mapping[int, V], default: V):
        self.lookup = dict(lookup)
        self.default = default

    def get(self, input_value: int) -> V:
        return self.lookup.get(input_value, self.default)

    def __eq__(self, other):
        return (
            isinstance(other, LookupSelector)
            and self.lookup == other.lookup
            and self.default == other.default
        )


ColorSelector = Selector[Color]
