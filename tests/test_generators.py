import numpy as np
import pytest

from map_generator.errors import GenerationConfigError
from map_generator.generators import (
    AbsoluteGradientGenerator,
    ApplyToDistance,
    ApplyToX,
    ApplyToY,
    Gradient,
    GradientGenerator,
    IndexGenerator,
    InputAsOutput,
    InterpolateVector1d,
    calculate_distance,
)
from map_generator.interpolation import VectorInterpolator
from map_generator.size import Size2d


@pytest.fixture
def gradient():
    return Gradient(start=100, length=50, value_start=10, value_end=60)


def test_calculate_distance():
    assert calculate_distance(0, 0, 3, 4) == 5
    assert calculate_distance(3, 4, 0, 0) == 5
    assert calculate_distance(0, 0, 1, 1) == 1
    assert calculate_distance(2, 2, 2, 2) == 0


class TestGradient:

    def test_zero_length(self):
        with pytest.raises(GenerationConfigError, match="length"):
            Gradient(100, 0, 10, 60)

    @pytest.mark.parametrize("value_start, value_end", [(256, 0), (0, 300), (-1, 10)])
    def test_values_outside_the_bytes(self, value_start, value_end):
        with pytest.raises(GenerationConfigError, match="must be a byte"):
            Gradient(100, 50, value_start, value_end)

    def test_same_values(self):
        with pytest.raises(GenerationConfigError, match="both 10"):
            Gradient(100, 50, 10, 10)

    @pytest.mark.parametrize(
        "input_value, expected",
        [(0, 10), (100, 10), (125, 35), (150, 60), (200, 60)],
    )
    def test_generate(self, gradient, input_value, expected):
        assert gradient.generate(input_value) == expected

    @pytest.mark.parametrize(
        "input_value, expected",
        [(100, 10), (75, 35), (125, 35), (50, 60), (0, 60), (255, 60)],
    )
    def test_generate_absolute(self, gradient, input_value, expected):
        assert gradient.generate_absolute(input_value) == expected

    def test_descending(self):
        gradient = Gradient(start=0, length=100, value_start=200, value_end=100)

        assert gradient.generate(50) == 150


class TestGenerator1d:

    def test_gradient_generators(self, gradient):
        assert GradientGenerator(gradient).generate(75) == 10
        assert AbsoluteGradientGenerator(gradient).generate(75) == 35

    @pytest.mark.parametrize("input_value, expected", [(0, 0), (42, 42), (255, 255), (300, 255)])
    def test_input_as_output(self, input_value, expected):
        assert InputAsOutput().generate(input_value) == expected

    def test_interpolate_vector(self):
        generator = InterpolateVector1d(VectorInterpolator([(0, 0), (10, 100)]))

        assert generator.generate(5) == 50
        assert generator.generate(20) == 100


class TestGenerator2d:

    def test_apply_to_x_and_y(self):
        assert ApplyToX(InputAsOutput()).generate(3, 7) == 3
        assert ApplyToY(InputAsOutput()).generate(3, 7) == 7

    def test_apply_to_distance(self):
        generator = ApplyToDistance(InputAsOutput(), center_x=1, center_y=1)

        assert generator.generate(1, 1) == 0
        assert generator.generate(4, 5) == 5

    def test_index_generator(self):
        generator = IndexGenerator(Size2d(2, 3))

        assert generator.generate(0, 0) == 0
        assert generator.generate(1, 2) == 5
        assert generator.generate(5, 5) == 5

    def test_index_generator_saturates(self):
        generator = IndexGenerator(Size2d(20, 20))

        assert generator.generate(15, 12) == 255
        assert generator.generate(19, 19) == 255

    def test_grid_of_apply_to_x(self):
        values = ApplyToX(InputAsOutput()).generate_grid(Size2d(3, 2))

        assert values.dtype == np.uint8
        assert values.tolist() == [0, 1, 2, 0, 1, 2]

    def test_grid_of_apply_to_y(self):
        values = ApplyToY(InputAsOutput()).generate_grid(Size2d(3, 2))

        assert values.tolist() == [0, 0, 0, 1, 1, 1]

    @pytest.mark.parametrize(
        "generator",
        [
            IndexGenerator(Size2d(2, 3)),
            ApplyToDistance(GradientGenerator(Gradient(0, 4, 200, 0)), center_x=2, center_y=1),
            ApplyToY(AbsoluteGradientGenerator(Gradient(2, 2, 0, 100))),
        ],
    )
    def test_grid_matches_each_cell(self, generator):
        size = Size2d(5, 4)
        values = generator.generate_grid(size)

        expected = [generator.generate(x, y) for y in range(size.height) for x in range(size.width)]
        assert values.tolist() == expected
