from __future__ import annotations

import itertools

import pytest

from pdfrulingx import Point, compare_points, order_points, round_half_up


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1.005, 1.01),
        (-1.005, -1.01),
        (2.344, 2.34),
        (99.995, 100.0),
        (0.0, 0.0),
    ],
)
def test_round_half_up(value: float, expected: float) -> None:
    assert round_half_up(value, 2) == expected


def test_compare_points_orders_by_y_then_x() -> None:
    assert compare_points((5.0, 1.0), (1.0, 2.0)) == -1
    assert compare_points((1.0, 2.0), (5.0, 1.0)) == 1
    assert compare_points((1.0, 2.0), (3.0, 2.0)) == -1
    assert compare_points((1.001, 2.002), (1.0, 2.0)) == 0


def test_compare_points_is_a_total_order() -> None:
    points = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.004, 0.0), (-3.5, 2.25)]
    for a, b in itertools.product(points, repeat=2):
        forward = compare_points(a, b)
        backward = compare_points(b, a)
        assert forward in (-1, 0, 1)
        assert forward == -backward


def test_order_points_ignores_drawing_direction() -> None:
    a = (10.0, 190.0)
    b = (110.0, 140.0)

    assert order_points(a, b) == order_points(b, a) == (Point(110.0, 140.0), Point(10.0, 190.0))


def test_order_points_keeps_second_first_when_equal() -> None:
    first, second = order_points((1.001, 1.0), (1.0, 1.0))

    assert first == Point(1.0, 1.0)
    assert second == Point(1.001, 1.0)
