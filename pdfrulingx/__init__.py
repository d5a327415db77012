"""Extract table rulings from the vector drawing operations of PDF pages."""

from __future__ import annotations

from .clipping import ClipRegion, ClipRegionTracker, WindingRule, clip_segment, fill_pieces
from .engine import RulingExtractor, iter_candidate_segments
from .exceptions import InvalidPageSelectionError, PdfRulingError, PdfValidationError
from .extractor import PageRulings, extract_page_rulings, extract_rulings
from .geometry import AffineTransform, PageGeometry, Point, Rect, build_page_transform
from .interpreter import ContentStreamInterpreter, GraphicsState, page_geometry
from .options import ExtractionOptions
from .ordering import compare_points, order_points, point_sort_key, round_half_up, rounded_point
from .paths import PathBuilder, PathSegment, PathState, SegmentKind, is_line_only
from .rulings import RULING_MINIMUM_LENGTH, Ruling
from .validators import validate_pdf

__all__ = [
    "AffineTransform",
    "ClipRegion",
    "ClipRegionTracker",
    "ContentStreamInterpreter",
    "ExtractionOptions",
    "GraphicsState",
    "InvalidPageSelectionError",
    "PageGeometry",
    "PageRulings",
    "PathBuilder",
    "PathSegment",
    "PathState",
    "PdfRulingError",
    "PdfValidationError",
    "Point",
    "RULING_MINIMUM_LENGTH",
    "Rect",
    "Ruling",
    "RulingExtractor",
    "SegmentKind",
    "WindingRule",
    "build_page_transform",
    "clip_segment",
    "compare_points",
    "extract_page_rulings",
    "extract_rulings",
    "fill_pieces",
    "is_line_only",
    "iter_candidate_segments",
    "order_points",
    "page_geometry",
    "point_sort_key",
    "round_half_up",
    "rounded_point",
    "validate_pdf",
]
