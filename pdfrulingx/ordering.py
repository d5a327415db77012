"""Deterministic point ordering used to canonicalize ruling endpoints."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .geometry import Point

__all__ = [
    "round_half_up",
    "rounded_point",
    "compare_points",
    "order_points",
    "point_sort_key",
]


def round_half_up(value: float, places: int = 2) -> float:
    """Round *value* to *places* decimals, ties away from zero.

    Rounding works on the shortest decimal representation of the float,
    so ``1.005`` rounds to ``1.01`` rather than ``1.0``.
    """

    try:
        quantum = Decimal(1).scaleb(-places)
        return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # nan and infinities have no decimal quantization.
        return float(value)


def rounded_point(point: tuple[float, float], places: int = 2) -> Point:
    return Point(round_half_up(point[0], places), round_half_up(point[1], places))


def point_sort_key(point: tuple[float, float]) -> tuple[float, float]:
    """Key ordering points by rounded Y, then rounded X."""

    x, y = rounded_point(point)
    return (y, x)


def compare_points(first: tuple[float, float], second: tuple[float, float]) -> int:
    """Return -1, 0 or 1 comparing rounded Y first and rounded X second."""

    first_key = point_sort_key(first)
    second_key = point_sort_key(second)
    if first_key < second_key:
        return -1
    if first_key > second_key:
        return 1
    return 0


def order_points(first: tuple[float, float], second: tuple[float, float]) -> tuple[Point, Point]:
    """Return both points with the smaller one first.

    Points that compare equal keep the second point first.
    """

    a = Point(float(first[0]), float(first[1]))
    b = Point(float(second[0]), float(second[1]))
    if compare_points(a, b) == -1:
        return a, b
    return b, a
