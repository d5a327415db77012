"""Ruling records emitted for table gridline detection."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .clipping import clip_segment
from .geometry import Point, Rect

__all__ = ["Ruling", "RULING_MINIMUM_LENGTH"]

RULING_MINIMUM_LENGTH = 0.01


@dataclass(frozen=True, slots=True)
class Ruling:
    """Undirected straight segment in normalized page space."""

    start: Point
    end: Point

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y and self.start.x != self.end.x

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x and self.start.y != self.end.y

    def intersect(self, rect: Rect) -> "Ruling | None":
        """Return the part of the ruling inside *rect*, or ``None``."""

        clipped = clip_segment(self.start, self.end, rect)
        if clipped is None:
            return None
        return Ruling(*clipped)
