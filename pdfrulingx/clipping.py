"""Deferred clipping support for :mod:`pdfrulingx`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .geometry import AffineTransform, Point, Rect
from .paths import PathBuilder

LOGGER = logging.getLogger("pdfrulingx.clipping")

__all__ = [
    "WindingRule",
    "ClipRegion",
    "ClipRegionTracker",
    "clip_segment",
    "fill_pieces",
]


class WindingRule(str, Enum):
    """Rule used to decide the interior of a clipping path."""

    NONZERO = "nonzero"
    EVEN_ODD = "evenodd"


def _signed_area(points: Sequence[Point]) -> float:
    area = 0.0
    for (x0, y0), (x1, y1) in zip(points, points[1:] + points[:1]):
        area += x0 * y1 - x1 * y0
    return area / 2.0


def fill_pieces(subpaths: Sequence[Sequence[Point]], winding_rule: WindingRule) -> tuple[Rect, ...]:
    """Cover the interior of a clipping path with disjoint rectangles.

    Each subpath stands in for its bounding box, oriented by the sign of
    its enclosed area. The boxes cut the plane into grid cells and a cell
    is kept when the winding rule places its centre inside the path, so
    nested subpaths become holes under the even-odd rule or when they wind
    the opposite way under the nonzero rule. Kept cells are merged along
    each row.
    """

    boxes: list[tuple[Rect, int]] = []
    for points in subpaths:
        box = Rect.from_points(points)
        area = _signed_area(tuple(points))
        if box.is_empty or area == 0.0:
            continue
        boxes.append((box, 1 if area > 0 else -1))
    if not boxes:
        return ()

    xs = sorted({value for box, _ in boxes for value in (box.x0, box.x1)})
    ys = sorted({value for box, _ in boxes for value in (box.y0, box.y1)})
    pieces: list[Rect] = []
    for y0, y1 in zip(ys, ys[1:]):
        cy = (y0 + y1) / 2.0
        run_start: float | None = None
        run_end = 0.0
        for x0, x1 in zip(xs, xs[1:]):
            cx = (x0 + x1) / 2.0
            covering = [
                direction for box, direction in boxes if box.x0 < cx < box.x1 and box.y0 < cy < box.y1
            ]
            if winding_rule is WindingRule.EVEN_ODD:
                inside = len(covering) % 2 == 1
            else:
                inside = sum(covering) != 0
            if inside:
                if run_start is None:
                    run_start = x0
                run_end = x1
            elif run_start is not None:
                pieces.append(Rect(run_start, y0, run_end, y1))
                run_start = None
        if run_start is not None:
            pieces.append(Rect(run_start, y0, run_end, y1))
    return tuple(pieces)


@dataclass(frozen=True, slots=True)
class ClipRegion:
    """Active clipping area in device space, held as disjoint rectangles."""

    pieces: tuple[Rect, ...]
    winding_rule: WindingRule | None = None

    @classmethod
    def from_rect(cls, rect: Rect) -> "ClipRegion":
        return cls(() if rect.is_empty else (rect,))

    @property
    def bounds(self) -> Rect:
        return Rect.from_points(corner for piece in self.pieces for corner in piece.corners())

    def intersect(self, pieces: Iterable[Rect], winding_rule: WindingRule) -> "ClipRegion":
        others = tuple(pieces)
        overlaps = []
        for own in self.pieces:
            for other in others:
                overlap = own.intersection(other)
                if not overlap.is_empty:
                    overlaps.append(overlap)
        return ClipRegion(tuple(overlaps), winding_rule)

    def intersect_path(self, subpaths: Sequence[Sequence[Point]], winding_rule: WindingRule) -> "ClipRegion":
        return self.intersect(fill_pieces(subpaths, winding_rule), winding_rule)

    def page_bounds(self, transform: AffineTransform) -> Rect:
        """Bounding rectangle of the region in normalized page space."""

        return Rect.from_points(
            corner for piece in self.pieces for corner in transform.transform_rect(piece).corners()
        )


class ClipRegionTracker:
    """Holds the active clip region and a pending clip declaration.

    A clip declaration only takes effect at the next path termination, so
    path construction between ``W`` and ``n`` still contributes to the
    clipping path.
    """

    def __init__(self, initial: ClipRegion) -> None:
        self._region = initial
        self._pending: WindingRule | None = None
        self._stack: list[ClipRegion] = []

    @property
    def region(self) -> ClipRegion:
        return self._region

    @property
    def pending(self) -> WindingRule | None:
        return self._pending

    def set_pending_clip(self, winding_rule: WindingRule) -> None:
        self._pending = WindingRule(winding_rule)

    def on_path_termination(self, path: PathBuilder) -> None:
        if self._pending is not None:
            self._region = self._region.intersect_path(path.subpaths(), self._pending)
            LOGGER.debug(
                "Clip applied with %s rule, region now %s",
                self._pending.value,
                self._region.bounds,
            )
            self._pending = None
        path.reset()

    def intersect(self, rect: Rect, winding_rule: WindingRule = WindingRule.NONZERO) -> None:
        """Narrow the active region immediately, bypassing the pending clip."""

        self._region = self._region.intersect((rect,), winding_rule)

    def save(self) -> None:
        self._stack.append(self._region)

    def restore(self) -> None:
        if self._stack:
            self._region = self._stack.pop()


_INSIDE = 0
_LEFT = 1
_RIGHT = 2
_LOW = 4
_HIGH = 8


def _outcode(x: float, y: float, rect: Rect) -> int:
    code = _INSIDE
    if x < rect.x0:
        code |= _LEFT
    elif x > rect.x1:
        code |= _RIGHT
    if y < rect.y0:
        code |= _LOW
    elif y > rect.y1:
        code |= _HIGH
    return code


def clip_segment(
    start: tuple[float, float],
    end: tuple[float, float],
    rect: Rect,
) -> tuple[Point, Point] | None:
    """Clip the segment to *rect* with Cohen-Sutherland outcodes.

    Rectangle edges are inclusive. Returns ``None`` when the segment does
    not intersect the rectangle; direction is preserved otherwise.
    """

    if rect.is_empty:
        return None
    x1, y1 = float(start[0]), float(start[1])
    x2, y2 = float(end[0]), float(end[1])
    code1 = _outcode(x1, y1, rect)
    code2 = _outcode(x2, y2, rect)

    while True:
        if not (code1 | code2):
            return Point(x1, y1), Point(x2, y2)
        if code1 & code2:
            return None
        out = code1 or code2
        if out & _HIGH:
            x = x1 + (x2 - x1) * (rect.y1 - y1) / (y2 - y1)
            y = rect.y1
        elif out & _LOW:
            x = x1 + (x2 - x1) * (rect.y0 - y1) / (y2 - y1)
            y = rect.y0
        elif out & _RIGHT:
            y = y1 + (y2 - y1) * (rect.x1 - x1) / (x2 - x1)
            x = rect.x1
        else:
            y = y1 + (y2 - y1) * (rect.x0 - x1) / (x2 - x1)
            x = rect.x0
        if out == code1:
            x1, y1 = x, y
            code1 = _outcode(x1, y1, rect)
        else:
            x2, y2 = x, y
            code2 = _outcode(x2, y2, rect)
