import pytest

from chaosgame.analysis.migration import migrate_point
from chaosgame.model.geometry_primitives import Point
from chaosgame.utils import COORDINATE_LIMIT, round_half_away_from_zero, saturate_coordinate


def test_halfway():
    assert migrate_point(Point(0, 0), Point(10, 20), 50) == Point(5, 10)


def test_zero_and_full_percent():
    p1, p2 = Point(3, 7), Point(40, -2)
    assert migrate_point(p1, p2, 0) == p1
    assert migrate_point(p1, p2, 100) == p2


def test_ties_round_away_from_zero():
    assert migrate_point(Point(0, 0), Point(1, 1), 50) == Point(1, 1)
    assert migrate_point(Point(0, 0), Point(-1, -1), 50) == Point(-1, -1)


def test_coordinates_round_independently():
    assert migrate_point(Point(0, 0), Point(3, 10), 33) == Point(1, 3)


def test_percent_above_hundred_extrapolates():
    assert migrate_point(Point(10, 10), Point(20, 10), 150) == Point(25, 10)


def test_negative_percent_moves_away():
    assert migrate_point(Point(10, 10), Point(20, 30), -50) == Point(5, 0)


@pytest.mark.parametrize("value,expected", [
    (0.5, 1), (-0.5, -1), (1.49, 1), (2.5, 3), (-2.5, -3), (0.0, 0), (-0.49, 0),
    (0.49999999999999994, 0), (-0.49999999999999994, 0), (4503599627370495.5, 4503599627370496),
])
def test_round_half_away_from_zero(value, expected):
    assert round_half_away_from_zero(value) == expected


@pytest.mark.parametrize("value,expected", [
    (1e300, COORDINATE_LIMIT),
    (-1e300, -COORDINATE_LIMIT),
    (float("inf"), COORDINATE_LIMIT),
    (float("-inf"), -COORDINATE_LIMIT),
    (float("nan"), COORDINATE_LIMIT),
    (-7.5, -8),
])
def test_saturate_coordinate(value, expected):
    assert saturate_coordinate(value) == expected


def test_repeated_extrapolation_stays_bounded():
    current, target = Point(50, 50), Point(0, 100)
    for _ in range(2000):
        current = migrate_point(current, target, 300)
        target = Point(100 - target.x, target.y)
        assert abs(current.x) <= COORDINATE_LIMIT
        assert abs(current.y) <= COORDINATE_LIMIT
