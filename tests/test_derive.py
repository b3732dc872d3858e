import math

import pytest

from geoconstruct.derive import (
    bisector_direction,
    distance,
    distance_to_line,
    midpoint,
    perp_bisector_direction,
    unit,
)


def test_distance_and_midpoint():
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert midpoint((0, 0), (10, -4)) == (5.0, -2.0)


def test_unit_rejects_zero_vector():
    assert unit((0.0, 0.0)) is None
    ux, uy = unit((3.0, 4.0))
    assert math.isclose(ux, 0.6) and math.isclose(uy, 0.8)


def test_distance_to_line_is_unsigned():
    assert distance_to_line((2, -5), (0, 0), (1, 0)) == pytest.approx(5.0)
    assert distance_to_line((2, 5), (0, 0), (1, 0)) == pytest.approx(5.0)


def test_perp_bisector_direction_is_rotated_segment():
    assert perp_bisector_direction((0, 0), (10, 0)) == (-0.0, 10.0)
    assert perp_bisector_direction((1, 1), (1, 1)) is None


def test_bisector_direction_of_right_angle():
    dx, dy = bisector_direction((0, 0), (10, 0), (0, 3))
    assert dx == pytest.approx(math.sqrt(0.5))
    assert dy == pytest.approx(math.sqrt(0.5))


@pytest.mark.parametrize(
    "a, b",
    [
        ((10, 0), (-4, 0)),  # anti-parallel rays
        ((0, 0), (5, 5)),  # collapsed first ray
    ],
)
def test_bisector_direction_degenerate(a, b):
    assert bisector_direction((0, 0), a, b) is None
