# map_generator/generation/steps.py

"""
================================================================================
GENERATION STEPS
================================================================================
Each step is a single mutation of a Map2d: it creates an attribute or reads
one or more attributes and rewrites another one using the numeric primitives
(generators, transformers, ...).

Data Contract:
---------------
- Inputs (on initialization): attribute ids & the primitives to apply.
  Invalid parameters raise GenerationConfigError right away.
- run(map2d): mutates the map in place.
- Side Effects: Logs what the step does to which attribute.
- Invariants: A step keeps no state besides its parameters. Referencing an
  attribute id the map doesn't have raises UnknownAttributeError, which
  aborts the generation.
================================================================================
"""

import logging

import numpy as np

from .. import config as DEFAULTS
from ..errors import GenerationConfigError, validate_byte, validate_name
from ..generators import Generator1d, Generator2d
from ..map2d import Map2d, get_attribute
from ..transformers import Transformer1d, Transformer2d

logger = logging.getLogger(__name__)


def _saturate(values: np.ndarray) -> np.ndarray:
    return np.clip(values, DEFAULTS.MIN_VALUE, DEFAULTS.MAX_VALUE).astype(np.uint8)


class GenerationStep:
    """One mutation applied to a Map2d during generation."""

    def run(self, map2d: Map2d) -> None:
        raise NotImplementedError


class CreateAttributeStep(GenerationStep):
    def __init__(self, attribute: str, default: int):
        self.attribute = validate_name(attribute)
        self.default = validate_byte(default, f"default value of attribute '{self.attribute}'")

    def run(self, map2d: Map2d) -> None:
        logger.info(f"Create attribute '{self.attribute}' of map '{map2d.name}'")
        map2d.create_attribute(self.attribute, self.default)

    def __eq__(self, other):
        return (
            isinstance(other, CreateAttributeStep)
            and self.attribute == other.attribute
            and self.default == other.default
        )


class Distortion1dStep:
    """
    Shifts each row (or column) of an attribute by the value the generator
    returns for the row's y (or the column's x). The first value of the line
    fills the cells in front of the shifted values, the ones shifted past the
    end are dropped.
    """

    def __init__(self, attribute_id: int, generator: Generator1d):
        self.attribute_id = attribute_id
        self.generator = generator

    def distort_along_x(self, map2d: Map2d) -> None:
        attribute = get_attribute(map2d, self.attribute_id)
        logger.info(f"Distort attribute '{attribute.name}' of map '{map2d.name}' along the x-axis.")

        size = map2d.size
        values = attribute.get_all().reshape(size.height, size.width)
        distorted = np.empty_like(values)

        for y in range(size.height):
            shift = min(self.generator.generate(y), size.width)
            distorted[y, :shift] = values[y, 0]
            distorted[y, shift:] = values[y, :size.width - shift]

        attribute.replace_all(distorted)

    def distort_along_y(self, map2d: Map2d) -> None:
        attribute = get_attribute(map2d, self.attribute_id)
        logger.info(f"Distort attribute '{attribute.name}' of map '{map2d.name}' along the y-axis.")

        size = map2d.size
        values = attribute.get_all().reshape(size.height, size.width)
        distorted = np.empty_like(values)

        for x in range(size.width):
            shift = min(self.generator.generate(x), size.height)
            distorted[:shift, x] = values[0, x]
            distorted[shift:, x] = values[:size.height - shift, x]

        attribute.replace_all(distorted)

    def __eq__(self, other):
        return (
            isinstance(other, Distortion1dStep)
            and self.attribute_id == other.attribute_id
            and self.generator == other.generator
        )


class DistortAlongX(GenerationStep):
    def __init__(self, step: Distortion1dStep):
        self.step = step

    def run(self, map2d: Map2d) -> None:
        self.step.distort_along_x(map2d)

    def __eq__(self, other):
        return isinstance(other, DistortAlongX) and self.step == other.step


class DistortAlongY(GenerationStep):
    def __init__(self, step: Distortion1dStep):
        self.step = step

    def run(self, map2d: Map2d) -> None:
        self.step.distort_along_y(map2d)

    def __eq__(self, other):
        return isinstance(other, DistortAlongY) and self.step == other.step


class Distortion2dStep(GenerationStep):
    """
    Replaces each cell with the value at (x + shift_x, y + shift_y).
    Shifts beyond the border read the last column or row instead of wrapping.
    """

    def __init__(self, attribute_id: int, generator_x: Generator2d, generator_y: Generator2d):
        self.attribute_id = attribute_id
        self.generator_x = generator_x
        self.generator_y = generator_y

    def run(self, map2d: Map2d) -> None:
        attribute = get_attribute(map2d, self.attribute_id)
        logger.info(f"Distort attribute '{attribute.name}' of map '{map2d.name}' in 2 dimensions.")

        size = map2d.size
        shape = (size.height, size.width)
        values = attribute.get_all().reshape(shape)
        shift_x = self.generator_x.generate_grid(size).reshape(shape).astype(np.int64)
        shift_y = self.generator_y.generate_grid(size).reshape(shape).astype(np.int64)
        y_indices, x_indices = np.indices(shape)

        # Same clamping as Size2d.saturating_to_index()
        source_x = np.minimum(x_indices + shift_x, size.width - 1)
        source_y = np.minimum(y_indices + shift_y, size.height - 1)

        attribute.replace_all(values[source_y, source_x])

    def __eq__(self, other):
        return (
            isinstance(other, Distortion2dStep)
            and self.attribute_id == other.attribute_id
            and self.generator_x == other.generator_x
            and self.generator_y == other.generator_y
        )


class GeneratorStep:
    """Adds or subtracts the values of a generator, saturating at the byte range."""

    def __init__(self, name: str, attribute_id: int, generator: Generator2d):
        self.name = validate_name(name)
        self.attribute_id = attribute_id
        self.generator = generator

    def add(self, map2d: Map2d) -> None:
        attribute = get_attribute(map2d, self.attribute_id)
        logger.info(f"Add '{self.name}' to attribute '{attribute.name}' of map '{map2d.name}'")

        generated = self.generator.generate_grid(map2d.size).astype(np.int16)
        attribute.replace_all(_saturate(attribute.get_all().astype(np.int16) + generated))

    def sub(self, map2d: Map2d) -> None:
        attribute = get_attribute(map2d, self.attribute_id)
        logger.info(f"Subtract '{self.name}' from attribute '{attribute.name}' of map '{map2d.name}'")

        generated = self.generator.generate_grid(map2d.size).astype(np.int16)
        attribute.replace_all(_saturate(attribute.get_all().astype(np.int16) - generated))

    def __eq__(self, other):
        return (
            isinstance(other, GeneratorStep)
            and self.name == other.name
            and self.attribute_id == other.attribute_id
            and self.generator == other.generator
        )


class GeneratorAdd(GenerationStep):
    def __init__(self, step: GeneratorStep):
        self.step = step

    def run(self, map2d: Map2d) -> None:
        self.step.add(map2d)

    def __eq__(self, other):
        return isinstance(other, GeneratorAdd) and self.step == other.step


class GeneratorSub(GenerationStep):
    def __init__(self, step: GeneratorStep):
        self.step = step

    def run(self, map2d: Map2d) -> None:
        self.step.sub(map2d)

    def __eq__(self, other):
        return isinstance(other, GeneratorSub) and self.step == other.step


class ModifyWithAttributeStep(GenerationStep):
    """
    Increases (or decreases for a negative percentage) the target by the part
    of the source above the minimum.
    """

    def __init__(self, source_id: int, target_id: int, percentage: int, minimum: int):
        self.source_id = source_id
        self.target_id = target_id
        self.percentage = percentage
        self.minimum = validate_byte(minimum, "minimum of the source attribute")
        self._factor = np.float32(percentage / 100.0)

    def run(self, map2d: Map2d) -> None:
        source = get_attribute(map2d, self.source_id)
        target = get_attribute(map2d, self.target_id)
        logger.info(
            f"{'Decrease' if self.percentage < 0 else 'Increase'} attribute '{target.name}' "
            f"with attribute '{source.name}' of map '{map2d.name}'"
        )

        source_values = source.get_all().astype(np.float32)
        delta = np.maximum(source_values, self.minimum) - np.float32(self.minimum)
        modified = target.get_all().astype(np.float32) + delta * self._factor
        # Truncate toward zero like an integer cast, never round.
        target.replace_all(_saturate(np.trunc(modified)))

    def __eq__(self, other):
        return (
            isinstance(other, ModifyWithAttributeStep)
            and self.source_id == other.source_id
            and self.target_id == other.target_id
            and self.percentage == other.percentage
            and self.minimum == other.minimum
        )


class TransformAttribute1dStep(GenerationStep):
    def __init__(self, name: str, attribute_id: int, transformer: Transformer1d):
        self.name = validate_name(name)
        self.attribute_id = attribute_id
        self.transformer = transformer

    def run(self, map2d: Map2d) -> None:
        attribute = get_attribute(map2d, self.attribute_id)
        logger.info(f"Apply transformation '{self.name}' to '{attribute.name}' of map '{map2d.name}'")

        # Evaluate each distinct byte once and map the whole attribute through the table.
        table = np.array(
            [self.transformer.transform(value) for value in range(DEFAULTS.MAX_VALUE + 1)],
            dtype=np.uint8,
        )
        attribute.replace_all(table[attribute.get_all()])

    def __eq__(self, other):
        return (
            isinstance(other, TransformAttribute1dStep)
            and self.name == other.name
            and self.attribute_id == other.attribute_id
            and self.transformer == other.transformer
        )


class TransformAttribute2dStep(GenerationStep):
    def __init__(self, name: str, source_id0: int, source_id1: int, target_id: int,
                 transformer: Transformer2d):
        self.name = validate_name(name)

        if source_id0 == source_id1:
            raise GenerationConfigError(f"Both source ids are {source_id0}!")

        self.source_id0 = source_id0
        self.source_id1 = source_id1
        self.target_id = target_id
        self.transformer = transformer

    def run(self, map2d: Map2d) -> None:
        source0 = get_attribute(map2d, self.source_id0)
        source1 = get_attribute(map2d, self.source_id1)
        target = get_attribute(map2d, self.target_id)
        logger.info(
            f"Apply transformation '{self.name}' using '{source0.name}' & '{source1.name}' "
            f"to '{target.name}' of map '{map2d.name}'"
        )

        values0 = source0.get_all()
        values1 = source1.get_all()
        transformed = np.fromiter(
            (self.transformer.transform(int(a), int(b)) for a, b in zip(values0, values1)),
            dtype=np.uint8,
            count=values0.size,
        )
        target.replace_all(transformed)

    def __eq__(self, other):
        return (
            isinstance(other, TransformAttribute2dStep)
            and self.name == other.name
            and self.source_id0 == other.source_id0
            and self.source_id1 == other.source_id1
            and self.target_id == other.target_id
            and self.transformer == other.transformer
        )


class DebugStep(GenerationStep):
    """Changes nothing. Marks a point in the pipeline in the log."""

    def __init__(self, text: str):
        self.text = text

    def run(self, map2d: Map2d) -> None:
        logger.info(f"Debug '{self.text}' for map '{map2d.name}'")

    def __eq__(self, other):
        return isinstance(other, DebugStep) and self.text == other.text
