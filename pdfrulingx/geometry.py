"""Geometry primitives and the page-space transform used by :mod:`pdfrulingx`."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence

__all__ = [
    "Point",
    "Rect",
    "AffineTransform",
    "PageGeometry",
    "build_page_transform",
]


class Point(NamedTuple):
    """Two-dimensional point."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle stored as its minimum and maximum corners."""

    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> "Rect":
        xs: list[float] = []
        ys: list[float] = []
        for x, y in points:
            xs.append(float(x))
            ys.append(float(y))
        if not xs:
            return EMPTY_RECT
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def from_box(cls, values: Sequence[float]) -> "Rect":
        """Build a rectangle from a ``[llx, lly, urx, ury]`` style box."""

        left, bottom, right, top = (float(values[i]) for i in range(4))
        return cls(min(left, right), min(bottom, top), max(left, right), max(bottom, top))

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (
            Point(self.x0, self.y0),
            Point(self.x1, self.y0),
            Point(self.x1, self.y1),
            Point(self.x0, self.y1),
        )

    def intersection(self, other: "Rect") -> "Rect":
        """Return the overlap of both rectangles, or an empty rectangle."""

        if self.is_empty or other.is_empty:
            return EMPTY_RECT
        x0 = max(self.x0, other.x0)
        y0 = max(self.y0, other.y0)
        x1 = min(self.x1, other.x1)
        y1 = min(self.y1, other.y1)
        if x1 < x0 or y1 < y0:
            return EMPTY_RECT
        return Rect(x0, y0, x1, y1)


EMPTY_RECT = Rect(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class AffineTransform:
    """Affine matrix ``[a c e; b d f]`` in the PDF operand order."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> "AffineTransform":
        return cls(1.0, 0.0, 0.0, 1.0, float(tx), float(ty))

    @classmethod
    def scaling(cls, sx: float, sy: float) -> "AffineTransform":
        return cls(float(sx), 0.0, 0.0, float(sy), 0.0, 0.0)

    @classmethod
    def rotation(cls, radians: float) -> "AffineTransform":
        sin = math.sin(radians)
        cos = math.cos(radians)
        # Quadrant rotations must map axis-aligned lines onto axis-aligned lines.
        if sin in (1.0, -1.0):
            cos = 0.0
        elif cos in (1.0, -1.0):
            sin = 0.0
        elif abs(sin) < 1e-12:
            sin = 0.0
        elif abs(cos) < 1e-12:
            cos = 0.0
            sin = 1.0 if sin > 0 else -1.0
        return cls(cos, sin, -sin, cos, 0.0, 0.0)

    @classmethod
    def from_operands(cls, operands: Sequence[float]) -> "AffineTransform":
        a, b, c, d, e, f = (float(value) for value in operands[:6])
        return cls(a, b, c, d, e, f)

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def concatenate(self, other: "AffineTransform") -> "AffineTransform":
        """Return ``self * other``: *other* is applied first, then *self*."""

        a1, b1, c1, d1, e1, f1 = self.as_tuple()
        a2, b2, c2, d2, e2, f2 = other.as_tuple()
        return AffineTransform(
            a1 * a2 + c1 * b2,
            b1 * a2 + d1 * b2,
            a1 * c2 + c1 * d2,
            b1 * c2 + d1 * d2,
            a1 * e2 + c1 * f2 + e1,
            b1 * e2 + d1 * f2 + f1,
        )

    def apply(self, x: float, y: float) -> Point:
        return Point(
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )

    def apply_point(self, point: tuple[float, float]) -> Point:
        return self.apply(point[0], point[1])

    def transform_rect(self, rect: Rect) -> Rect:
        """Return the bounding box of *rect* after transformation."""

        if rect.is_empty:
            return EMPTY_RECT
        return Rect.from_points(self.apply_point(corner) for corner in rect.corners())


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Crop box and rotation of a page, fixed for the page's lifetime."""

    crop_box: Rect
    rotation: int = 0

    @property
    def width(self) -> float:
        return self.crop_box.width

    @property
    def height(self) -> float:
        return self.crop_box.height


def build_page_transform(geometry: PageGeometry) -> AffineTransform:
    """Map device coordinates into normalized page space (top-left origin, Y down).

    Pages rotated by 90 or 270 degrees use a pure rotation about the
    origin. Every other rotation value, including unexpected ones, uses
    the crop-box flip: ``(x - llx, height - (y - lly))``.
    """

    rotation = geometry.rotation
    if abs(rotation) in (90, 270):
        return AffineTransform.rotation(rotation * (math.pi / 180.0))

    crop = geometry.crop_box
    transform = AffineTransform.translation(0.0, crop.height)
    transform = transform.concatenate(AffineTransform.scaling(1.0, -1.0))
    return transform.concatenate(AffineTransform.translation(-crop.x0, -crop.y0))
