import logging

import numpy as np
import pytest

from map_generator.errors import GenerationConfigError, UnknownAttributeError
from map_generator.generation import (
    CreateAttributeStep,
    DebugStep,
    DistortAlongX,
    Distortion1dStep,
    GeneratorAdd,
    GeneratorStep,
    MapGeneration,
    ModifyWithAttributeStep,
)
from map_generator.generators import IndexGenerator, InputAsOutput, Noise2d
from map_generator.noise import Noise
from map_generator.size import Size2d


@pytest.fixture
def size():
    return Size2d(3, 3)


@pytest.fixture
def steps(size):
    return [
        CreateAttributeStep("elevation", 0),
        GeneratorAdd(GeneratorStep("index", 0, IndexGenerator(size))),
        DistortAlongX(Distortion1dStep(0, InputAsOutput())),
    ]


class TestMapGeneration:

    def test_too_few_steps(self, size):
        with pytest.raises(GenerationConfigError, match="too few steps"):
            MapGeneration("island", size, [CreateAttributeStep("elevation", 0)])

    @pytest.mark.parametrize("name", ["", "  "])
    def test_invalid_name(self, size, steps, name):
        with pytest.raises(GenerationConfigError, match="invalid"):
            MapGeneration(name, size, steps)

    def test_name_is_trimmed(self, size, steps):
        assert MapGeneration(" island ", size, steps).name == "island"

    def test_generate_runs_the_steps_in_order(self, size, steps):
        map2d = MapGeneration("island", size, steps).generate()

        assert map2d.name == "island"
        assert map2d.size == size
        assert map2d.get_attribute_id("elevation") == 0
        assert map2d.get_attribute(0).get_all().tolist() == [0, 1, 2, 3, 3, 4, 6, 6, 6]

    def test_every_generate_returns_a_new_map(self, size, steps):
        generation = MapGeneration("island", size, steps)

        first = generation.generate()
        second = generation.generate()

        assert first is not second
        assert first.get_attribute(0) == second.get_attribute(0)

    def test_deterministic_with_noise(self):
        size = Size2d(20, 10)
        steps = [
            CreateAttributeStep("elevation", 10),
            GeneratorAdd(GeneratorStep("hills", 0, Noise2d(Noise(4, 6.0, 0, 100)))),
            CreateAttributeStep("rainfall", 50),
            ModifyWithAttributeStep(0, 1, percentage=40, minimum=30),
        ]

        first = MapGeneration("island", size, steps).generate()
        second = MapGeneration("island", size, steps).generate()

        for attribute0, attribute1 in zip(first.get_all(), second.get_all()):
            assert np.array_equal(attribute0.get_all(), attribute1.get_all())

    def test_unknown_attribute_aborts_the_generation(self, size):
        steps = [
            CreateAttributeStep("elevation", 0),
            GeneratorAdd(GeneratorStep("index", 1, IndexGenerator(size))),
            DebugStep("never reached"),
        ]

        with pytest.raises(UnknownAttributeError, match="Unknown attribute id 1 in map 'island'"):
            MapGeneration("island", size, steps).generate()

    def test_logs_progress(self, size, steps, caplog):
        logger = logging.getLogger("test_pipeline")

        with caplog.at_level(logging.DEBUG):
            MapGeneration("island", size, steps, logger=logger).generate()

        assert "Generate the map 'island' with 3x3 cells in 3 steps" in caplog.text
        assert "Finished generation of 'island'" in caplog.text

    def test_equality(self, size, steps):
        assert MapGeneration("island", size, steps) == MapGeneration("island", size, list(steps))
        assert MapGeneration("island", size, steps) != MapGeneration("other", size, steps)
