# map_generator/generation/pipeline.py

"""
================================================================================
MAP GENERATION PIPELINE
================================================================================
This module contains the MapGeneration class, which turns an ordered list of
generation steps into a finished Map2d.

Data Contract:
---------------
- Inputs (on initialization):
    - name: The name of the map (trimmed, must not be empty).
    - size: The Size2d of the map.
    - steps: At least 2 GenerationSteps.
    - logger: An optional Python logging object for runtime messages.
- Outputs (from generate()):
    - A new Map2d, owned by the caller.
- Side Effects: Logs the progress & duration of the generation.
- Invariants: Steps run strictly in their given order, because later steps
  read attributes written by earlier ones. Given the same MapGeneration, the
  output is deterministic. A step that fails aborts the whole generation and
  no partial map is returned.
================================================================================
"""

import logging
import time
from typing import Optional, Sequence

from .. import config as DEFAULTS
from ..errors import GenerationConfigError, validate_name
from ..map2d import Map2d
from ..size import Size2d
from .steps import GenerationStep


class MapGeneration:
    """An ordered pipeline of steps plus the name & size of the map it generates."""

    def __init__(self, name: str, size: Size2d, steps: Sequence[GenerationStep],
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._name = validate_name(name)

        if len(steps) < DEFAULTS.MIN_GENERATION_STEPS:
            raise GenerationConfigError(f"Map generator '{self._name}' has too few steps!")

        self._size = size
        self._steps = tuple(steps)

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> Size2d:
        return self._size

    @property
    def steps(self) -> tuple[GenerationStep, ...]:
        return self._steps

    def generate(self) -> Map2d:
        """Builds an empty map and runs every step on it, one after the other."""
        start_time = time.perf_counter()
        self.logger.info(
            f"Generate the map '{self._name}' with {self._size.width}x{self._size.height} "
            f"cells in {len(self._steps)} steps:"
        )

        map2d = Map2d(self._name, self._size)
        step_start = start_time

        for step in self._steps:
            step.run(map2d)
            step_end = time.perf_counter()
            self.logger.debug(f"Step took {step_end - step_start:.4f} seconds.")
            step_start = step_end

        end_time = time.perf_counter()
        self.logger.info(f"Finished generation of '{self._name}' in {end_time - start_time:.2f} seconds.")

        return map2d

    def __eq__(self, other):
        if not isinstance(other, MapGeneration):
            return NotImplemented
        return (
            self._name == other._name
            and self._size == other._size
            and self._steps == other._steps
        )

    def __repr__(self):
        return f"MapGeneration(name={self._name!r}, size={self._size!r}, steps={len(self._steps)})"
