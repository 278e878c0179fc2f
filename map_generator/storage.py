# map_generator/storage.py

"""
================================================================================
STORAGE PORTS & JSON ADAPTERS
================================================================================
The generation core only needs fully built, validated values. Reading and
writing them is the job of a storage collaborator, described here by two
protocols:

- MapStorage: reads & writes a MapGeneration.
- SelectorStorage: reads & writes a ColorSelector for the rendering side.

JsonMapStorage & JsonSelectorStorage implement them with JSON documents.
Inside a document, attributes are referenced by name. Reading resolves the
names to ids in the order the CreateAttribute steps introduce them, writing
does the reverse. The generated grid itself is never stored.

Data Contract:
---------------
- read(path): returns the value or raises GenerationConfigError for a
  malformed or invalid document. A missing file raises FileNotFoundError.
- write(value, path): writes the document, overwriting any existing file.
================================================================================
"""

import json
import logging
from typing import Any, Protocol

from . import config as DEFAULTS
from .color import Color
from .errors import GenerationConfigError
from .generation import (
    CreateAttributeStep,
    DebugStep,
    DistortAlongX,
    DistortAlongY,
    Distortion1dStep,
    Distortion2dStep,
    GenerationStep,
    GeneratorAdd,
    GeneratorStep,
    GeneratorSub,
    MapGeneration,
    ModifyWithAttributeStep,
    TransformAttribute1dStep,
    TransformAttribute2dStep,
)
from .generators import (
    AbsoluteGradientGenerator,
    ApplyToDistance,
    ApplyToX,
    ApplyToY,
    Generator1d,
    Generator2d,
    Gradient,
    GradientGenerator,
    IndexGenerator,
    InputAsOutput,
    InterpolateVector1d,
    Noise1d,
    Noise2d,
)
from .interpolation import VectorInterpolator
from .noise import Noise
from .selector import (
    ColorSelector,
    ConstSelector,
    InterpolatePairSelector,
    InterpolateVectorSelector,
    LookupSelector,
)
from .size import Size2d
from .transformers import (
    Const2d,
    Lookup2d,
    LookupTable2d,
    OverwriteIfAbove1d,
    OverwriteIfAbove2d,
    OverwriteIfBelow1d,
    OverwriteIfBelow2d,
    OverwriteWithMap1d,
    OverwriteWithThreshold,
    Transformer1d,
    Transformer2d,
)

logger = logging.getLogger(__name__)


class MapStorage(Protocol):
    """The interface the core expects from anything that stores map generations."""

    def read(self, path: str) -> MapGeneration: ...
    def write(self, generation: MapGeneration, path: str) -> None: ...


class SelectorStorage(Protocol):
    """The interface the rendering side expects from anything that stores color selectors."""

    def read(self, path: str) -> ColorSelector: ...
    def write(self, selector: ColorSelector, path: str) -> None: ...


def _load_json(path: str) -> Any:
    with open(path, 'r') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise GenerationConfigError(f"Failed to parse '{path}': {e}") from e


def _save_json(data: Any, path: str) -> None:
    with open(path, 'w') as f:
        json.dump(data, f, indent=DEFAULTS.JSON_INDENT)


# --- Size, Color, Vectors ---

def size_to_dict(size: Size2d) -> dict:
    return {'width': size.width, 'height': size.height}


def size_from_dict(data: dict) -> Size2d:
    return Size2d(
        data.get('width', DEFAULTS.DEFAULT_MAP_WIDTH),
        data.get('height', DEFAULTS.DEFAULT_MAP_HEIGHT),
    )


def _interpolator_to_list(interpolator: VectorInterpolator, encode=lambda value: value) -> list:
    return [[entry.threshold, encode(entry.value)] for entry in interpolator.get_all()]


def _interpolator_from_list(data: list, decode=lambda value: value) -> list:
    return [(threshold, decode(value)) for threshold, value in data]


# --- Generators ---

def generator1d_to_dict(generator: Generator1d) -> dict:
    if isinstance(generator, (GradientGenerator, AbsoluteGradientGenerator)):
        gradient = generator.gradient
        return {
            'type': 'Gradient' if isinstance(generator, GradientGenerator) else 'AbsoluteGradient',
            'start': gradient.start,
            'length': gradient.length,
            'value_start': gradient.value_start,
            'value_end': gradient.value_end,
        }
    if isinstance(generator, InputAsOutput):
        return {'type': 'InputAsOutput'}
    if isinstance(generator, InterpolateVector1d):
        return {'type': 'InterpolateVector', 'vector': _interpolator_to_list(generator.interpolator)}
    if isinstance(generator, Noise1d):
        return noise_to_dict(generator.noise)
    raise TypeError(f"Unknown Generator1d {generator!r}")


def generator1d_from_dict(data: dict) -> Generator1d:
    kind = data['type']
    if kind in ('Gradient', 'AbsoluteGradient'):
        gradient = Gradient(data['start'], data['length'], data['value_start'], data['value_end'])
        return GradientGenerator(gradient) if kind == 'Gradient' else AbsoluteGradientGenerator(gradient)
    if kind == 'InputAsOutput':
        return InputAsOutput()
    if kind == 'InterpolateVector':
        return InterpolateVector1d(VectorInterpolator(_interpolator_from_list(data['vector'])))
    if kind == 'Noise':
        return Noise1d(noise_from_dict(data))
    raise GenerationConfigError(f"Unknown Generator1d type '{kind}'!")


def noise_to_dict(noise: Noise) -> dict:
    return {
        'type': 'Noise',
        'seed': noise.seed,
        'scale': noise.scale,
        'min': noise.min_value,
        'max': noise.max_value,
    }


def noise_from_dict(data: dict) -> Noise:
    return Noise(data.get('seed', DEFAULTS.DEFAULT_SEED), data['scale'], data['min'], data['max'])


def generator2d_to_dict(generator: Generator2d) -> dict:
    if isinstance(generator, ApplyToX):
        return {'type': 'ApplyToX', 'generator': generator1d_to_dict(generator.generator)}
    if isinstance(generator, ApplyToY):
        return {'type': 'ApplyToY', 'generator': generator1d_to_dict(generator.generator)}
    if isinstance(generator, ApplyToDistance):
        return {
            'type': 'ApplyToDistance',
            'generator': generator1d_to_dict(generator.generator),
            'center_x': generator.center_x,
            'center_y': generator.center_y,
        }
    if isinstance(generator, IndexGenerator):
        return {'type': 'IndexGenerator', 'size': size_to_dict(generator.size)}
    if isinstance(generator, Noise2d):
        return noise_to_dict(generator.noise)
    raise TypeError(f"Unknown Generator2d {generator!r}")


def generator2d_from_dict(data: dict) -> Generator2d:
    kind = data['type']
    if kind == 'ApplyToX':
        return ApplyToX(generator1d_from_dict(data['generator']))
    if kind == 'ApplyToY':
        return ApplyToY(generator1d_from_dict(data['generator']))
    if kind == 'ApplyToDistance':
        return ApplyToDistance(generator1d_from_dict(data['generator']), data['center_x'], data['center_y'])
    if kind == 'IndexGenerator':
        return IndexGenerator(size_from_dict(data['size']))
    if kind == 'Noise':
        return Noise2d(noise_from_dict(data))
    raise GenerationConfigError(f"Unknown Generator2d type '{kind}'!")


# --- Transformers ---

def transformer1d_to_dict(transformer: Transformer1d) -> dict:
    if isinstance(transformer, (OverwriteIfAbove1d, OverwriteIfBelow1d)):
        kind = 'OverwriteIfAbove' if isinstance(transformer, OverwriteIfAbove1d) else 'OverwriteIfBelow'
        return {'type': kind, 'value': transformer.threshold.value, 'threshold': transformer.threshold.threshold}
    if isinstance(transformer, OverwriteWithMap1d):
        # JSON keys are always strings.
        return {'type': 'OverwriteWithMap', 'map': {str(k): v for k, v in transformer.overwrites.items()}}
    raise TypeError(f"Unknown Transformer1d {transformer!r}")


def transformer1d_from_dict(data: dict) -> Transformer1d:
    kind = data['type']
    if kind == 'OverwriteIfAbove':
        return OverwriteIfAbove1d(OverwriteWithThreshold(data['value'], data['threshold']))
    if kind == 'OverwriteIfBelow':
        return OverwriteIfBelow1d(OverwriteWithThreshold(data['value'], data['threshold']))
    if kind == 'OverwriteWithMap':
        return OverwriteWithMap1d({int(k): v for k, v in data['map'].items()})
    raise GenerationConfigError(f"Unknown Transformer1d type '{kind}'!")


def transformer2d_to_dict(transformer: Transformer2d) -> dict:
    if isinstance(transformer, Lookup2d):
        return {
            'type': 'LookupTable',
            'size': size_to_dict(transformer.table.size),
            'values': list(transformer.table.values),
        }
    if isinstance(transformer, Const2d):
        return {'type': 'Const', 'value': transformer.value}
    if isinstance(transformer, (OverwriteIfAbove2d, OverwriteIfBelow2d)):
        kind = 'OverwriteIfAbove' if isinstance(transformer, OverwriteIfAbove2d) else 'OverwriteIfBelow'
        return {'type': kind, 'value': transformer.threshold.value, 'threshold': transformer.threshold.threshold}
    raise TypeError(f"Unknown Transformer2d {transformer!r}")


def transformer2d_from_dict(data: dict) -> Transformer2d:
    kind = data['type']
    if kind == 'LookupTable':
        return Lookup2d(LookupTable2d(size_from_dict(data['size']), data['values']))
    if kind == 'Const':
        return Const2d(data['value'])
    if kind == 'OverwriteIfAbove':
        return OverwriteIfAbove2d(OverwriteWithThreshold(data['value'], data['threshold']))
    if kind == 'OverwriteIfBelow':
        return OverwriteIfBelow2d(OverwriteWithThreshold(data['value'], data['threshold']))
    raise GenerationConfigError(f"Unknown Transformer2d type '{kind}'!")


# --- Steps ---

def _attribute_id(name: str, attributes: list[str]) -> int:
    try:
        return attributes.index(name)
    except ValueError:
        raise GenerationConfigError(f"Unknown attribute '{name}'!") from None


def step_to_dict(step: GenerationStep, attributes: list[str]) -> dict:
    """Converts a step. Attribute names created by the step are appended to attributes."""
    if isinstance(step, CreateAttributeStep):
        attributes.append(step.attribute)
        return {'type': 'CreateAttribute', 'attribute': step.attribute, 'default': step.default}
    if isinstance(step, (DistortAlongX, DistortAlongY)):
        return {
            'type': 'DistortAlongX' if isinstance(step, DistortAlongX) else 'DistortAlongY',
            'attribute': attributes[step.step.attribute_id],
            'generator': generator1d_to_dict(step.step.generator),
        }
    if isinstance(step, Distortion2dStep):
        return {
            'type': 'Distortion2d',
            'attribute': attributes[step.attribute_id],
            'generator_x': generator2d_to_dict(step.generator_x),
            'generator_y': generator2d_to_dict(step.generator_y),
        }
    if isinstance(step, (GeneratorAdd, GeneratorSub)):
        return {
            'type': 'GeneratorAdd' if isinstance(step, GeneratorAdd) else 'GeneratorSub',
            'name': step.step.name,
            'attribute': attributes[step.step.attribute_id],
            'generator': generator2d_to_dict(step.step.generator),
        }
    if isinstance(step, ModifyWithAttributeStep):
        return {
            'type': 'ModifyWithAttribute',
            'source': attributes[step.source_id],
            'target': attributes[step.target_id],
            'percentage': step.percentage,
            'minimum': step.minimum,
        }
    if isinstance(step, TransformAttribute1dStep):
        return {
            'type': 'TransformAttribute1d',
            'name': step.name,
            'attribute': attributes[step.attribute_id],
            'transformer': transformer1d_to_dict(step.transformer),
        }
    if isinstance(step, TransformAttribute2dStep):
        return {
            'type': 'TransformAttribute2d',
            'name': step.name,
            'source0': attributes[step.source_id0],
            'source1': attributes[step.source_id1],
            'target': attributes[step.target_id],
            'transformer': transformer2d_to_dict(step.transformer),
        }
    if isinstance(step, DebugStep):
        return {'type': 'Debug', 'text': step.text}
    raise TypeError(f"Unknown GenerationStep {step!r}")


def step_from_dict(data: dict, attributes: list[str]) -> GenerationStep:
    """Builds a step. Attribute names created by the step are appended to attributes."""
    kind = data['type']
    if kind == 'CreateAttribute':
        step = CreateAttributeStep(data['attribute'], data.get('default', DEFAULTS.DEFAULT_ATTRIBUTE_VALUE))
        attributes.append(step.attribute)
        return step
    if kind in ('DistortAlongX', 'DistortAlongY'):
        distortion = Distortion1dStep(
            _attribute_id(data['attribute'], attributes),
            generator1d_from_dict(data['generator']),
        )
        return DistortAlongX(distortion) if kind == 'DistortAlongX' else DistortAlongY(distortion)
    if kind == 'Distortion2d':
        return Distortion2dStep(
            _attribute_id(data['attribute'], attributes),
            generator2d_from_dict(data['generator_x']),
            generator2d_from_dict(data['generator_y']),
        )
    if kind in ('GeneratorAdd', 'GeneratorSub'):
        generator_step = GeneratorStep(
            data['name'],
            _attribute_id(data['attribute'], attributes),
            generator2d_from_dict(data['generator']),
        )
        return GeneratorAdd(generator_step) if kind == 'GeneratorAdd' else GeneratorSub(generator_step)
    if kind == 'ModifyWithAttribute':
        return ModifyWithAttributeStep(
            _attribute_id(data['source'], attributes),
            _attribute_id(data['target'], attributes),
            data['percentage'],
            data.get('minimum', DEFAULTS.DEFAULT_MINIMUM),
        )
    if kind == 'TransformAttribute1d':
        return TransformAttribute1dStep(
            data['name'],
            _attribute_id(data['attribute'], attributes),
            transformer1d_from_dict(data['transformer']),
        )
    if kind == 'TransformAttribute2d':
        return TransformAttribute2dStep(
            data['name'],
            _attribute_id(data['source0'], attributes),
            _attribute_id(data['source1'], attributes),
            _attribute_id(data['target'], attributes),
            transformer2d_from_dict(data['transformer']),
        )
    if kind == 'Debug':
        return DebugStep(data['text'])
    raise GenerationConfigError(f"Unknown step type '{kind}'!")


def generation_to_dict(generation: MapGeneration) -> dict:
    attributes: list[str] = []
    return {
        'name': generation.name,
        'size': size_to_dict(generation.size),
        'steps': [step_to_dict(step, attributes) for step in generation.steps],
    }


def generation_from_dict(data: dict) -> MapGeneration:
    attributes: list[str] = []
    steps = []
    for index, step_data in enumerate(data['steps']):
        try:
            steps.append(step_from_dict(step_data, attributes))
        except GenerationConfigError as e:
            raise GenerationConfigError(f"Failed to convert step {index}: {e}") from e
    return MapGeneration(
        data.get('name', DEFAULTS.DEFAULT_MAP_NAME),
        size_from_dict(data.get('size', {})),
        steps,
    )


# --- Selectors ---

def selector_to_dict(selector: ColorSelector) -> dict:
    if isinstance(selector, ConstSelector):
        return {'type': 'Const', 'value': selector.value.to_hex()}
    if isinstance(selector, InterpolatePairSelector):
        return {'type': 'InterpolatePair', 'first': selector.first.to_hex(), 'second': selector.second.to_hex()}
    if isinstance(selector, InterpolateVectorSelector):
        return {
            'type': 'InterpolateVector',
            'vector': _interpolator_to_list(selector.interpolator, Color.to_hex),
        }
    if isinstance(selector, LookupSelector):
        return {
            'type': 'Lookup',
            'lookup': {str(k): v.to_hex() for k, v in selector.lookup.items()},
            'default': selector.default.to_hex(),
        }
    raise TypeError(f"Unknown Selector {selector!r}")


def selector_from_dict(data: dict) -> ColorSelector:
    kind = data['type']
    if kind == 'Const':
        return ConstSelector(Color.from_hex(data['value']))
    if kind == 'InterpolatePair':
        return InterpolatePairSelector(Color.from_hex(data['first']), Color.from_hex(data['second']))
    if kind == 'InterpolateVector':
        return InterpolateVectorSelector(_interpolator_from_list(data['vector'], Color.from_hex))
    if kind == 'Lookup':
        lookup = {int(k): Color.from_hex(v) for k, v in data['lookup'].items()}
        return LookupSelector(lookup, Color.from_hex(data['default']))
    raise GenerationConfigError(f"Unknown Selector type '{kind}'!")


# --- Adapters ---

class JsonMapStorage:
    """Stores map generations as JSON documents."""

    def read(self, path: str) -> MapGeneration:
        logger.info(f"Read map generation from '{path}'")
        data = _load_json(path)
        try:
            return generation_from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GenerationConfigError(f"Invalid map generation in '{path}': {e}") from e

    def write(self, generation: MapGeneration, path: str) -> None:
        logger.info(f"Write map generation '{generation.name}' to '{path}'")
        _save_json(generation_to_dict(generation), path)


class JsonSelectorStorage:
    """Stores color selectors as JSON documents."""

    def read(self, path: str) -> ColorSelector:
        logger.info(f"Read color selector from '{path}'")
        data = _load_json(path)
        try:
            return selector_from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GenerationConfigError(f"Invalid color selector in '{path}': {e}") from e

    def write(self, selector: ColorSelector, path: str) -> None:
        logger.info(f"Write color selector to '{path}'")
        _save_json(selector_to_dict(selector), path)
