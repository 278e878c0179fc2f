# map_generator/interpolation.py

"""
================================================================================
INTERPOLATION UTILITIES
================================================================================
Linear interpolation between byte values (and anything built from them, like
colors) and the VectorInterpolator, which interpolates between the entries
of a sorted vector of (threshold, value) pairs.

Data Contract:
---------------
- Factors are evaluated in single precision and products are truncated
  toward zero, never rounded. A product below zero truncates to zero, so a
  negative factor returns the start value.
- Side Effects: None.
================================================================================
"""

from typing import Generic, Protocol, Sequence, TypeVar

import numpy as np

from . import config as DEFAULTS
from .errors import GenerationConfigError


class Interpolate(Protocol):
    """Any value that can be linearly interpolated towards another value."""

    def lerp(self, other, factor: float): ...


V = TypeVar("V")


def _truncate(value) -> int:
    return int(np.clip(value, DEFAULTS.MIN_VALUE, DEFAULTS.MAX_VALUE))


def lerp(start: int, end: int, factor: float) -> int:
    """
    Interpolates between 2 bytes.

    >>> lerp(100, 200, 0.5)
    150
    >>> lerp(200, 100, 0.5)
    150
    """
    factor = np.float32(factor)
    if factor > 1.0:
        return end

    if end >= start:
        return start + _truncate(np.float32(end - start) * factor)

    return start - _truncate(np.float32(start - end) * factor)


def interpolate_value(start: V, end: V, factor: float) -> V:
    """Interpolates bytes with lerp() and everything else with its own lerp method."""
    if isinstance(start, (int, np.integer)):
        return lerp(int(start), int(end), factor)
    return start.lerp(end, factor)


class InterpolationEntry(Generic[V]):
    __slots__ = ("threshold", "value")

    def __init__(self, threshold, value: V):
        self.threshold = threshold
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, InterpolationEntry):
            return NotImplemented
        return self.threshold == other.threshold and self.value == other.value

    def __repr__(self):
        return f"InterpolationEntry({self.threshold!r}, {self.value!r})"

    @staticmethod
    def interpolate(entry0: "InterpolationEntry[V]", entry1: "InterpolationEntry[V]", input_value) -> V:
        factor = (
            np.float32(input_value - entry0.threshold)
            / np.float32(entry1.threshold - entry0.threshold)
        )
        return interpolate_value(entry0.value, entry1.value, factor)


class VectorInterpolator(Generic[V]):
    """
    Interpolates between the values of a vector sorted by threshold.

    Inputs below the first threshold return the first value and inputs above
    the last threshold return the last value. Nothing is extrapolated.
    """

    def __init__(self, vector: Sequence[tuple]):
        if len(vector) < 2:
            raise GenerationConfigError("The vector needs at least 2 elements!")

        last_threshold = vector[0][0]
        for threshold, _ in vector:
            if threshold < last_threshold:
                raise GenerationConfigError("The vector is not sorted!")
            last_threshold = threshold

        self._entries = [InterpolationEntry(threshold, value) for threshold, value in vector]

    def get_all(self) -> list[InterpolationEntry[V]]:
        return self._entries

    def interpolate(self, input_value) -> V:
        last_entry = self._entries[0]

        if input_value <= last_entry.threshold:
            return last_entry.value

        for entry in self._entries[1:]:
            if input_value <= entry.threshold:
                return InterpolationEntry.interpolate(last_entry, entry, input_value)
            last_entry = entry

        return last_entry.value

    def __eq__(self, other):
        if not isinstance(other, VectorInterpolator):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self):
        pairs = [(entry.threshold, entry.value) for entry in self._entries]
        return f"VectorInterpolator({pairs!r})"
