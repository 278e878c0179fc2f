import logging

import pytest

from map_generator.errors import GenerationConfigError, UnknownAttributeError
from map_generator.generation import (
    CreateAttributeStep,
    DebugStep,
    DistortAlongX,
    DistortAlongY,
    Distortion1dStep,
    Distortion2dStep,
    GeneratorAdd,
    GeneratorStep,
    GeneratorSub,
    MapGeneration,
    ModifyWithAttributeStep,
    TransformAttribute1dStep,
    TransformAttribute2dStep,
)
from map_generator.generators import ApplyToX, ApplyToY, IndexGenerator, InputAsOutput, InterpolateVector1d
from map_generator.interpolation import VectorInterpolator
from map_generator.map2d import Map2d
from map_generator.size import Size2d
from map_generator.transformers import Lookup2d, LookupTable2d, OverwriteWithMap1d, overwrite_if_above


def values_of(map2d: Map2d, attribute_id: int = 0) -> list:
    return map2d.get_attribute(attribute_id).get_all().tolist()


def const_shift(value: int) -> InterpolateVector1d:
    return InterpolateVector1d(VectorInterpolator([(0, value), (1, value)]))


class TestCreateAttributeStep:

    def test_run(self):
        map2d = Map2d("test", Size2d(2, 3))

        CreateAttributeStep("test0", 9).run(map2d)

        assert map2d.get_attribute_id("test0") == 0
        assert values_of(map2d) == [9] * 6

    def test_invalid_name(self):
        with pytest.raises(GenerationConfigError):
            CreateAttributeStep("  ", 9)

    def test_duplicate_attribute(self):
        map2d = Map2d("test", Size2d(2, 3))
        CreateAttributeStep("test0", 9).run(map2d)

        with pytest.raises(GenerationConfigError):
            CreateAttributeStep("test0", 1).run(map2d)


class TestDistortion1dStep:

    def test_along_x(self, map3x3):
        DistortAlongX(Distortion1dStep(0, InputAsOutput())).run(map3x3)

        assert values_of(map3x3) == [1, 2, 3, 4, 4, 5, 7, 7, 7]

    def test_along_y(self, map3x3):
        DistortAlongY(Distortion1dStep(0, InputAsOutput())).run(map3x3)

        assert values_of(map3x3) == [1, 2, 3, 4, 2, 3, 7, 5, 3]

    def test_shift_beyond_the_row_keeps_its_length(self, map3x3):
        DistortAlongX(Distortion1dStep(0, const_shift(5))).run(map3x3)

        assert values_of(map3x3) == [1, 1, 1, 4, 4, 4, 7, 7, 7]

    def test_zero_shift_changes_nothing(self, map3x3):
        DistortAlongY(Distortion1dStep(0, const_shift(0))).run(map3x3)

        assert values_of(map3x3) == list(range(1, 10))

    def test_unknown_attribute(self, map3x3):
        with pytest.raises(UnknownAttributeError):
            DistortAlongX(Distortion1dStep(1, InputAsOutput())).run(map3x3)


class TestDistortion2dStep:

    def test_shift_along_x(self, map3x3):
        step = Distortion2dStep(0, ApplyToX(InputAsOutput()), ApplyToY(const_shift(0)))

        step.run(map3x3)

        assert values_of(map3x3) == [1, 3, 3, 4, 6, 6, 7, 9, 9]

    def test_shift_is_clamped_to_the_border(self, map3x3):
        step = Distortion2dStep(0, ApplyToX(InputAsOutput()), ApplyToX(InputAsOutput()))

        step.run(map3x3)

        assert values_of(map3x3) == [1, 6, 9, 4, 9, 9, 7, 9, 9]


class TestGeneratorStep:

    def make_map(self, default: int) -> Map2d:
        map2d = Map2d("test", Size2d(2, 3))
        map2d.create_attribute("elevation", default)
        return map2d

    def test_add(self):
        map2d = self.make_map(250)

        GeneratorAdd(GeneratorStep("index", 0, IndexGenerator(Size2d(2, 3)))).run(map2d)

        assert values_of(map2d) == [250, 251, 252, 253, 254, 255]

    def test_add_saturates(self):
        map2d = self.make_map(252)

        GeneratorAdd(GeneratorStep("index", 0, IndexGenerator(Size2d(2, 3)))).run(map2d)

        assert values_of(map2d) == [252, 253, 254, 255, 255, 255]

    def test_sub_saturates(self):
        map2d = self.make_map(2)

        GeneratorSub(GeneratorStep("index", 0, IndexGenerator(Size2d(2, 3)))).run(map2d)

        assert values_of(map2d) == [2, 1, 0, 0, 0, 0]

    def test_invalid_name(self):
        with pytest.raises(GenerationConfigError):
            GeneratorStep("", 0, IndexGenerator(Size2d(2, 3)))


class TestModifyWithAttributeStep:

    def make_map(self, source: list, target: list) -> Map2d:
        map2d = Map2d("test", Size2d(len(source), 1))
        map2d.create_attribute_from("source", source)
        map2d.create_attribute_from("target", target)
        return map2d

    def test_increase(self):
        map2d = self.make_map([0, 50, 100, 200], [10, 10, 10, 10])

        ModifyWithAttributeStep(0, 1, percentage=50, minimum=50).run(map2d)

        assert values_of(map2d, 1) == [10, 10, 35, 85]

    def test_decrease(self):
        map2d = self.make_map([0, 50, 100, 200], [10, 10, 100, 200])

        ModifyWithAttributeStep(0, 1, percentage=-50, minimum=50).run(map2d)

        assert values_of(map2d, 1) == [10, 10, 75, 125]

    def test_truncates(self):
        map2d = self.make_map([53], [10])

        ModifyWithAttributeStep(0, 1, percentage=33, minimum=50).run(map2d)

        assert values_of(map2d, 1) == [10]

    def test_saturates(self):
        map2d = self.make_map([250, 250], [10, 200])

        ModifyWithAttributeStep(0, 1, percentage=-100, minimum=0).run(map2d)
        assert values_of(map2d, 1) == [0, 0]

        ModifyWithAttributeStep(0, 1, percentage=100, minimum=0).run(map2d)
        assert values_of(map2d, 1) == [250, 250]

        ModifyWithAttributeStep(0, 1, percentage=100, minimum=0).run(map2d)
        assert values_of(map2d, 1) == [255, 255]

    def test_source_is_unchanged(self):
        map2d = self.make_map([0, 50, 100, 200], [10, 10, 10, 10])

        ModifyWithAttributeStep(0, 1, percentage=50, minimum=50).run(map2d)

        assert values_of(map2d, 0) == [0, 50, 100, 200]

    def test_unknown_target(self):
        map2d = self.make_map([0], [0])

        with pytest.raises(UnknownAttributeError):
            ModifyWithAttributeStep(0, 2, percentage=50, minimum=0).run(map2d)


class TestTransformAttribute1dStep:

    def test_overwrite_if_above(self):
        map2d = Map2d("test", Size2d(3, 1))
        map2d.create_attribute_from("values", [100, 200, 250])

        TransformAttribute1dStep("clip", 0, overwrite_if_above(0, 200)).run(map2d)

        assert values_of(map2d) == [100, 0, 0]

    def test_overwrite_with_map(self, map3x3):
        TransformAttribute1dStep("swap", 0, OverwriteWithMap1d({1: 9, 9: 1})).run(map3x3)

        assert values_of(map3x3) == [9, 2, 3, 4, 5, 6, 7, 8, 1]


class TestTransformAttribute2dStep:

    def test_same_source_ids(self):
        table = Lookup2d(LookupTable2d(Size2d(2, 1), [0, 1]))

        with pytest.raises(GenerationConfigError, match="Both source ids are 0"):
            TransformAttribute2dStep("biomes", 0, 0, 2, table)

    def test_lookup(self):
        map2d = Map2d("test", Size2d(4, 1))
        map2d.create_attribute_from("temperature", [0, 200, 0, 200])
        map2d.create_attribute_from("rainfall", [0, 0, 200, 200])
        map2d.create_attribute("biome", 0)
        table = Lookup2d(LookupTable2d(Size2d(2, 2), [1, 2, 3, 4]))

        TransformAttribute2dStep("biomes", 0, 1, 2, table).run(map2d)

        assert values_of(map2d, 2) == [1, 2, 3, 4]


class TestDebugStep:

    def test_changes_nothing(self, map3x3, caplog):
        with caplog.at_level(logging.INFO):
            DebugStep("checkpoint").run(map3x3)

        assert values_of(map3x3) == list(range(1, 10))
        assert "checkpoint" in caplog.text


def test_steps_compare_by_parameters():
    assert CreateAttributeStep("a", 1) == CreateAttributeStep("a", 1)
    assert CreateAttributeStep("a", 1) != CreateAttributeStep("a", 2)
    assert DistortAlongX(Distortion1dStep(0, InputAsOutput())) == DistortAlongX(Distortion1dStep(0, InputAsOutput()))
    assert DistortAlongX(Distortion1dStep(0, InputAsOutput())) != DistortAlongY(Distortion1dStep(0, InputAsOutput()))


class TestByteParameters:
    """Byte parameters outside [0, 255] fail when a step is built, not when it runs."""

    @pytest.mark.parametrize("default", [-1, 256, 300, 1.5])
    def test_create_attribute_default(self, default):
        with pytest.raises(GenerationConfigError, match="must be a byte"):
            CreateAttributeStep("elevation", default)

    @pytest.mark.parametrize("minimum", [-1, 256])
    def test_modify_minimum(self, minimum):
        with pytest.raises(GenerationConfigError, match="must be a byte"):
            ModifyWithAttributeStep(0, 1, percentage=50, minimum=minimum)

    def test_generation_with_invalid_default_is_never_built(self):
        with pytest.raises(GenerationConfigError):
            MapGeneration("m", Size2d(2, 2), [CreateAttributeStep("a", 300), DebugStep("x")])

    def test_map_rejects_invalid_default(self):
        map2d = Map2d("test", Size2d(2, 2))

        with pytest.raises(GenerationConfigError, match="must be a byte"):
            map2d.create_attribute("elevation", 300)
        assert map2d.get_all() == []
