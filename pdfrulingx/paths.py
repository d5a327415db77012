"""Current-path accumulation and line-only classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .geometry import Point

__all__ = [
    "SegmentKind",
    "PathSegment",
    "PathState",
    "PathBuilder",
    "is_line_only",
]


class SegmentKind(str, Enum):
    """Kinds of path segments produced by the path-construction operators."""

    MOVE = "move"
    LINE = "line"
    CURVE = "curve"
    CLOSE = "close"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One segment of the current path.

    Curves carry two control points followed by their endpoint, moves and
    lines carry a single endpoint and closes carry no coordinates.
    """

    kind: SegmentKind
    points: tuple[Point, ...] = ()

    @property
    def end_point(self) -> Point:
        """Endpoint of the segment.

        Raises :class:`IndexError` when the segment carries no coordinates.
        """

        return self.points[-1]


class PathState(str, Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"


class PathBuilder:
    """Single mutable accumulator for the page's current path.

    The builder has two states and two transitions: :meth:`append` moves
    it to ``ACCUMULATING`` and :meth:`reset` moves it back to ``EMPTY``.
    No validation happens here; see :func:`is_line_only`.
    """

    def __init__(self) -> None:
        self._segments: list[PathSegment] = []

    @property
    def state(self) -> PathState:
        return PathState.ACCUMULATING if self._segments else PathState.EMPTY

    @property
    def segments(self) -> tuple[PathSegment, ...]:
        return tuple(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def append(self, segment: PathSegment) -> None:
        self._segments.append(segment)

    def reset(self) -> None:
        self._segments.clear()

    def move_to(self, x: float, y: float) -> None:
        self.append(PathSegment(SegmentKind.MOVE, (Point(float(x), float(y)),)))

    def line_to(self, x: float, y: float) -> None:
        self.append(PathSegment(SegmentKind.LINE, (Point(float(x), float(y)),)))

    def curve_to(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        x3: float,
        y3: float,
    ) -> None:
        points = (
            Point(float(x1), float(y1)),
            Point(float(x2), float(y2)),
            Point(float(x3), float(y3)),
        )
        self.append(PathSegment(SegmentKind.CURVE, points))

    def close_path(self) -> None:
        if not self._segments or self._segments[-1].kind is SegmentKind.CLOSE:
            return
        self.append(PathSegment(SegmentKind.CLOSE))

    def append_rectangle(
        self,
        p0: tuple[float, float],
        p1: tuple[float, float],
        p2: tuple[float, float],
        p3: tuple[float, float],
    ) -> None:
        self.move_to(*p0)
        self.line_to(*p1)
        self.line_to(*p2)
        self.line_to(*p3)
        self.close_path()

    def current_point(self) -> Point | None:
        """Return the pen position, or the last move point after a close."""

        if not self._segments:
            return None
        last = self._segments[-1]
        if last.kind is SegmentKind.CLOSE:
            for segment in reversed(self._segments):
                if segment.kind is SegmentKind.MOVE and segment.points:
                    return segment.end_point
            return None
        return last.end_point if last.points else None

    def subpaths(self) -> list[tuple[Point, ...]]:
        """Split the path at every move into the coordinates of each subpath."""

        subpaths: list[list[Point]] = []
        for segment in self._segments:
            if segment.kind is SegmentKind.MOVE or not subpaths:
                subpaths.append([])
            subpaths[-1].extend(segment.points)
        return [tuple(points) for points in subpaths if points]


_LINE_KINDS = frozenset({SegmentKind.MOVE, SegmentKind.LINE, SegmentKind.CLOSE})


def is_line_only(segments: Sequence[PathSegment] | Iterable[PathSegment]) -> bool:
    """Return ``True`` when the path starts with a move and contains no curves."""

    iterator = iter(segments)
    first = next(iterator, None)
    if first is None or first.kind is not SegmentKind.MOVE:
        return False
    return all(segment.kind in _LINE_KINDS for segment in iterator)
