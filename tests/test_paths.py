from __future__ import annotations

import pytest

from pdfrulingx import PathBuilder, PathSegment, PathState, Point, SegmentKind, is_line_only


def _kinds(builder: PathBuilder) -> list[SegmentKind]:
    return [segment.kind for segment in builder.segments]


def test_builder_transitions_between_empty_and_accumulating() -> None:
    builder = PathBuilder()
    assert builder.state is PathState.EMPTY

    builder.move_to(1, 2)
    assert builder.state is PathState.ACCUMULATING
    assert len(builder) == 1

    builder.reset()
    assert builder.state is PathState.EMPTY
    assert builder.segments == ()


def test_append_rectangle_expands_to_move_three_lines_and_close() -> None:
    builder = PathBuilder()
    builder.append_rectangle((0, 0), (10, 0), (10, 5), (0, 5))

    assert _kinds(builder) == [
        SegmentKind.MOVE,
        SegmentKind.LINE,
        SegmentKind.LINE,
        SegmentKind.LINE,
        SegmentKind.CLOSE,
    ]
    assert builder.subpaths() == [(Point(0.0, 0.0), Point(10.0, 0.0), Point(10.0, 5.0), Point(0.0, 5.0))]


def test_close_path_collapses_and_ignores_empty_path() -> None:
    builder = PathBuilder()
    builder.close_path()
    assert builder.state is PathState.EMPTY

    builder.move_to(0, 0)
    builder.line_to(1, 0)
    builder.close_path()
    builder.close_path()
    assert _kinds(builder).count(SegmentKind.CLOSE) == 1


def test_current_point_follows_close_semantics() -> None:
    builder = PathBuilder()
    assert builder.current_point() is None

    builder.move_to(3, 4)
    builder.line_to(8, 4)
    assert builder.current_point() == Point(8.0, 4.0)

    builder.close_path()
    assert builder.current_point() == Point(3.0, 4.0)

    builder.curve_to(1, 1, 2, 2, 9, 9)
    assert builder.current_point() == Point(9.0, 9.0)


def test_curve_anywhere_disqualifies_path() -> None:
    builder = PathBuilder()
    builder.move_to(0, 0)
    builder.line_to(10, 0)
    builder.line_to(10, 10)
    builder.curve_to(5, 15, 0, 15, 0, 10)
    builder.close_path()

    assert not is_line_only(builder.segments)

    without_curve = [s for s in builder.segments if s.kind is not SegmentKind.CURVE]
    assert is_line_only(without_curve)


def test_path_must_start_with_move() -> None:
    line_first = [
        PathSegment(SegmentKind.LINE, (Point(1.0, 1.0),)),
        PathSegment(SegmentKind.LINE, (Point(2.0, 1.0),)),
    ]

    assert not is_line_only(line_first)
    assert not is_line_only([])


def test_segment_without_coordinates_has_no_end_point() -> None:
    segment = PathSegment(SegmentKind.CLOSE)

    with pytest.raises(IndexError):
        segment.end_point


def test_subpaths_split_at_each_move() -> None:
    builder = PathBuilder()
    builder.move_to(0, 0)
    builder.line_to(5, 0)
    builder.close_path()
    builder.move_to(10, 10)
    builder.curve_to(11, 11, 12, 12, 13, 10)

    assert builder.subpaths() == [
        (Point(0.0, 0.0), Point(5.0, 0.0)),
        (Point(10.0, 10.0), Point(11.0, 11.0), Point(12.0, 12.0), Point(13.0, 10.0)),
    ]
