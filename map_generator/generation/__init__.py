# map_generator/generation/__init__.py

# The generation steps and the pipeline that runs them.

from .pipeline import MapGeneration
from .steps import (
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
    ModifyWithAttributeStep,
    TransformAttribute1dStep,
    TransformAttribute2dStep,
)

__all__ = [
    "CreateAttributeStep",
    "DebugStep",
    "DistortAlongX",
    "DistortAlongY",
    "Distortion1dStep",
    "Distortion2dStep",
    "GenerationStep",
    "GeneratorAdd",
    "GeneratorStep",
    "GeneratorSub",
    "MapGeneration",
    "ModifyWithAttributeStep",
    "TransformAttribute1dStep",
    "TransformAttribute2dStep",
]
