import math

import pytest

from conftest import make_shape
from geometry import (
    PATH_BUILDERS,
    bounding_box,
    contains,
    fill_target,
    normalize_symmetric,
    segment_from_drag,
    shape_at,
    shape_paths,
)
from model import Coordinate, ToolKind


def test_bounding_box_ignores_draw_direction():
    forward = make_shape(start=(0, 0), end=(100, 50))
    backward = make_shape(start=(100, 50), end=(0, 0))

    assert bounding_box(forward) == bounding_box(backward) == (0, 0, 100, 50)


def test_contains_is_inclusive_and_supports_padding():
    shape = make_shape(start=(0, 0), end=(100, 50))

    assert contains(shape, (100, 50))
    assert not contains(shape, (105, 25))
    assert contains(shape, (105, 25), padding=10)


def test_shape_at_prefers_highest_z_index():
    bottom = make_shape(shape_id="bottom", z_index=0)
    top = make_shape(shape_id="top", start=(50, 0), end=(150, 50), z_index=3)

    assert shape_at((75, 25), [top, bottom]) is top
    assert shape_at((25, 25), [top, bottom]) is bottom
    assert shape_at((500, 500), [top, bottom]) is None


def test_shape_at_uses_bounding_box_for_triangles():
    triangle = make_shape(kind=ToolKind.TRIANGLE_UP, start=(0, 0), end=(100, 100))

    # Outside the outline, inside the box.
    assert shape_at((2, 2), [triangle]) is triangle


def test_freehand_strokes_are_not_hit():
    stroke = make_shape(kind=ToolKind.FREEHAND_DRAW, z_index=5)
    eraser = make_shape(kind=ToolKind.ERASER, z_index=6)
    rect = make_shape(shape_id="rect", z_index=0)

    assert shape_at((10, 10), [stroke, eraser, rect]) is rect
    assert shape_at((10, 10), [stroke, eraser]) is None


def test_fill_target_returns_lines_for_caller_to_reject():
    line = make_shape(kind=ToolKind.LINE, start=(0, 0), end=(100, 100))

    assert fill_target((50, 50), [line]) is line


def test_equal_z_goes_to_later_shape():
    first = make_shape(shape_id="first", z_index=1)
    second = make_shape(shape_id="second", z_index=1)

    assert shape_at((10, 10), [first, second]) is second


@pytest.mark.parametrize(
    "end, expected",
    [
        ((30, -10), (30, -30)),
        ((-5, 20), (-20, 20)),
        ((40, 40), (40, 40)),
    ],
)
def test_normalize_symmetric_preserves_signs(end, expected):
    assert normalize_symmetric(Coordinate(0, 0), Coordinate(*end)) == Coordinate(*expected)


def test_segment_from_drag_only_normalizes_symmetric():
    start, end = Coordinate(0, 0), Coordinate(30, 10)

    assert segment_from_drag(start, end, symmetric=False).end == end
    assert segment_from_drag(start, end, symmetric=True).end == Coordinate(30, 30)


def test_every_tool_kind_has_a_path_builder():
    assert set(PATH_BUILDERS) == set(ToolKind)


def test_line_and_rectangle_paths():
    line = shape_paths(make_shape(kind=ToolKind.LINE, start=(0, 0), end=(10, 5)))
    rect = shape_paths(make_shape(kind=ToolKind.RECTANGLE, start=(0, 0), end=(100, 50)))

    assert len(line) == 1 and not line[0].closed
    assert line[0].points == (Coordinate(0, 0), Coordinate(10, 5))
    assert rect[0].closed
    assert set(rect[0].points) == {(0, 0), (100, 0), (100, 50), (0, 50)}


def test_square_clamps_to_shorter_side_from_start():
    (path,) = shape_paths(make_shape(kind=ToolKind.SQUARE, start=(0, 0), end=(50, -80)))

    assert set(path.points) == {(0, 0), (50, 0), (50, -50), (0, -50)}


def test_circle_is_inscribed_and_anchored_at_start():
    (path,) = shape_paths(make_shape(kind=ToolKind.CIRCLE, start=(100, 100), end=(0, 40)))

    assert path.closed
    for point in path.points:
        assert math.hypot(point.x - 70, point.y - 70) == pytest.approx(30)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ToolKind.TRIANGLE_UP, {(50, 0), (100, 50), (0, 50)}),
        (ToolKind.TRIANGLE_DOWN, {(50, 50), (0, 0), (100, 0)}),
        (ToolKind.TRIANGLE_LEFT, {(0, 25), (100, 0), (100, 50)}),
        (ToolKind.TRIANGLE_RIGHT, {(100, 25), (0, 50), (0, 0)}),
    ],
)
def test_triangle_orientations(kind, expected):
    (path,) = shape_paths(make_shape(kind=kind, start=(100, 50), end=(0, 0)))

    assert path.closed
    assert set(path.points) == expected


def test_freehand_paths_follow_segments_and_fill_change_has_none():
    stroke = make_shape(kind=ToolKind.FREEHAND_DRAW)
    marker = make_shape(kind=ToolKind.FILL_CHANGE)

    assert len(shape_paths(stroke)) == 1
    assert shape_paths(marker) == []
