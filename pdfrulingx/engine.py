"""Ruling extraction driven by content-stream callbacks.

:class:`RulingExtractor` receives path-construction, clipping and painting
callbacks in stream order from a content-stream interpreter and collects
the straight segments of every line-only path as :class:`Ruling` values in
normalized page space.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Sequence

from .clipping import ClipRegion, ClipRegionTracker, WindingRule
from .geometry import AffineTransform, PageGeometry, Point, Rect, build_page_transform
from .options import ExtractionOptions
from .ordering import order_points, rounded_point
from .paths import PathBuilder, PathSegment, SegmentKind, is_line_only
from .rulings import RULING_MINIMUM_LENGTH, Ruling

LOGGER = logging.getLogger("pdfrulingx.engine")

__all__ = ["RulingExtractor", "iter_candidate_segments"]


def iter_candidate_segments(
    segments: Sequence[PathSegment],
    transform: AffineTransform,
) -> Iterator[tuple[Point, Point]]:
    """Yield the straight segments of a line-only path in page space.

    The first segment only seeds the chain. Lines connect the previous
    endpoint to their own endpoint and closes connect the previous endpoint
    back to the most recent move point. Segments whose coordinates cannot
    be read are skipped without breaking the chain.
    """

    if not segments:
        return
    try:
        start_point: Point | None = rounded_point(transform.apply_point(segments[0].end_point))
    except (IndexError, TypeError, ValueError):
        LOGGER.debug("First path segment has no readable coordinates")
        start_point = None
    last_move = start_point
    end_point: Point | None = None

    for index in range(1, len(segments)):
        segment = segments[index]
        try:
            if segment.kind is SegmentKind.LINE:
                end_point = transform.apply_point(segment.end_point)
                if start_point is not None:
                    yield start_point, end_point
            elif segment.kind is SegmentKind.MOVE:
                last_move = transform.apply_point(segment.end_point)
                end_point = last_move
            elif segment.kind is SegmentKind.CLOSE:
                if end_point is not None and last_move is not None:
                    yield end_point, last_move
        except (IndexError, TypeError, ValueError):
            # TODO: count skipped segments per page so callers can tell data loss apart from empty paths.
            LOGGER.debug("Skipping unreadable %s segment at index %d", segment.kind, index)
            continue
        start_point = end_point


class RulingExtractor:
    """Collects rulings for one page.

    One instance owns one current path, one clip region and one ruling
    collection. Callbacks must be delivered sequentially; independent
    instances share no state and may run on separate workers.
    """

    def __init__(
        self,
        geometry: PageGeometry,
        options: ExtractionOptions | None = None,
        *,
        initial_clip: Rect | None = None,
    ) -> None:
        self.geometry = geometry
        self.options = options or ExtractionOptions()
        self._page_transform = build_page_transform(geometry)
        self._path = PathBuilder()
        clip_bounds = initial_clip if initial_clip is not None else geometry.crop_box
        self._clip = ClipRegionTracker(ClipRegion.from_rect(clip_bounds))
        self._rulings: list[Ruling] = []

    # -- Exposed state ------------------------------------------------------

    @property
    def page_transform(self) -> AffineTransform:
        return self._page_transform

    @property
    def rulings(self) -> tuple[Ruling, ...]:
        return tuple(self._rulings)

    @property
    def path(self) -> PathBuilder:
        return self._path

    @property
    def clip_tracker(self) -> ClipRegionTracker:
        return self._clip

    def current_clip_bounds(self) -> Rect:
        return self._clip.region.page_bounds(self._page_transform)

    # -- Path construction --------------------------------------------------

    def append_rectangle(
        self,
        p0: tuple[float, float],
        p1: tuple[float, float],
        p2: tuple[float, float],
        p3: tuple[float, float],
    ) -> None:
        self._path.append_rectangle(p0, p1, p2, p3)

    def move_to(self, x: float, y: float) -> None:
        self._path.move_to(x, y)

    def line_to(self, x: float, y: float) -> None:
        self._path.line_to(x, y)

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        self._path.curve_to(x1, y1, x2, y2, x3, y3)

    def close_path(self) -> None:
        self._path.close_path()

    def get_current_point(self) -> Point | None:
        return self._path.current_point()

    # -- Clipping -----------------------------------------------------------

    def clip(self, winding_rule: WindingRule | str) -> None:
        # Takes effect at the next end_path, not here.
        try:
            rule = WindingRule(winding_rule)
        except ValueError:
            LOGGER.debug("Unknown winding rule %r, using nonzero", winding_rule)
            rule = WindingRule.NONZERO
        self._clip.set_pending_clip(rule)

    def end_path(self) -> None:
        self._clip.on_path_termination(self._path)

    def clip_to_rect(self, rect: Rect) -> None:
        self._clip.intersect(rect)

    def save_graphics_state(self) -> None:
        self._clip.save()

    def restore_graphics_state(self) -> None:
        self._clip.restore()

    # -- Painting -----------------------------------------------------------

    def stroke_path(self) -> None:
        self.on_paint(True, False)

    def fill_path(self, winding_rule: WindingRule | str = WindingRule.NONZERO) -> None:
        self.on_paint(False, True)

    def fill_and_stroke_path(self, winding_rule: WindingRule | str = WindingRule.NONZERO) -> None:
        self.on_paint(True, True)

    def draw_image(self, image: Any = None) -> None:
        """Images never produce rulings."""

    def shading_fill(self, name: Any = None) -> None:
        """Shadings never produce rulings."""

    def on_paint(self, is_stroke: bool, is_fill: bool) -> None:
        """Turn the current path into rulings and reset it.

        Stroked and filled paths are treated alike: tables are often drawn
        as thin filled rectangles.
        """

        try:
            if not self.options.extract_rulings:
                return
            segments = self._path.segments
            if not is_line_only(segments):
                LOGGER.debug("Discarding path of %d segments with curves or no initial move", len(segments))
                return
            clip_rect = self.current_clip_bounds()
            for start, end in iter_candidate_segments(segments, self._page_transform):
                self._add_candidate(start, end, clip_rect)
        finally:
            self._path.reset()

    def _add_candidate(self, start: Point, end: Point, clip_rect: Rect) -> None:
        first, second = order_points(start, end)
        ruling = Ruling(first, second).intersect(clip_rect)
        if ruling is None:
            LOGGER.debug("Segment %s-%s lies outside the clip region", first, second)
            return
        if ruling.length > RULING_MINIMUM_LENGTH:
            self._rulings.append(ruling)
