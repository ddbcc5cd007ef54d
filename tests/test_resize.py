import pytest

from conftest import make_shape
from geometry import bounding_box
from model import Coordinate, Segment, ToolKind
from resize import ResizeDirection, handle_at, resize_segment, resized


def _size(revision):
    min_x, min_y, max_x, max_y = bounding_box(revision)
    return max_x - min_x, max_y - min_y


@pytest.mark.parametrize(
    "point, expected",
    [
        ((-10, -10), ResizeDirection.NORTH_WEST),
        ((110, -10), ResizeDirection.NORTH_EAST),
        ((-10, 60), ResizeDirection.SOUTH_WEST),
        ((110, 60), ResizeDirection.SOUTH_EAST),
        ((50, -12), ResizeDirection.NORTH),
        ((50, 62), ResizeDirection.SOUTH),
        ((-8, 25), ResizeDirection.WEST),
        ((112, 25), ResizeDirection.EAST),
        ((50, 25), None),
        ((300, 300), None),
    ],
)
def test_handles_on_padded_box(point, expected):
    shape = make_shape(start=(0, 0), end=(100, 50))

    assert handle_at(shape, point) == expected


def test_symmetric_shapes_expose_only_corners():
    square = make_shape(kind=ToolKind.SQUARE, start=(0, 0), end=(50, 50))

    assert handle_at(square, (25, -10)) is None
    assert handle_at(square, (60, 60)) == ResizeDirection.SOUTH_EAST


def test_handle_tolerance_is_in_screen_pixels():
    shape = make_shape(start=(0, 0), end=(100, 50))

    assert handle_at(shape, (120, 70), zoom=1.0) is None
    assert handle_at(shape, (120, 70), zoom=0.5) == ResizeDirection.SOUTH_EAST


def test_east_moves_the_rightmost_endpoint_whatever_the_draw_direction():
    forward = Segment(Coordinate(0, 0), Coordinate(100, 50))
    backward = Segment(Coordinate(100, 50), Coordinate(0, 0))

    assert resize_segment(forward, ResizeDirection.EAST, 20, 99) == Segment(Coordinate(0, 0), Coordinate(120, 50))
    assert resize_segment(backward, ResizeDirection.EAST, 20, 99) == Segment(Coordinate(120, 50), Coordinate(0, 0))


def test_west_and_north_move_the_near_endpoint():
    segment = Segment(Coordinate(100, 50), Coordinate(0, 0))

    assert resize_segment(segment, ResizeDirection.WEST, -10, 0) == Segment(Coordinate(100, 50), Coordinate(-10, 0))
    assert resize_segment(segment, ResizeDirection.NORTH, 0, -5) == Segment(Coordinate(100, 50), Coordinate(0, -5))
    assert resize_segment(segment, ResizeDirection.SOUTH, 0, 5) == Segment(Coordinate(100, 55), Coordinate(0, 0))


def test_corner_moves_both_axes():
    segment = Segment(Coordinate(0, 0), Coordinate(100, 50))

    assert resize_segment(segment, ResizeDirection.SOUTH_EAST, 20, 10) == Segment(Coordinate(0, 0), Coordinate(120, 60))
    assert resize_segment(segment, ResizeDirection.NORTH_WEST, 5, 5) == Segment(Coordinate(5, 5), Coordinate(100, 50))


def test_dragging_past_the_opposite_edge_flips():
    shape = make_shape(start=(0, 0), end=(100, 50))

    flipped = resized(shape, ResizeDirection.EAST, -150, 0)

    assert bounding_box(flipped) == (-50, 0, 0, 50)


@pytest.mark.parametrize("kind", [ToolKind.RECTANGLE, ToolKind.LINE, ToolKind.TRIANGLE_LEFT])
@pytest.mark.parametrize("direction", list(ResizeDirection))
def test_zero_delta_keeps_geometry(kind, direction):
    shape = make_shape(kind=kind, start=(100, 50), end=(0, 0))

    assert resized(shape, direction, 0, 0).segments == shape.segments


@pytest.mark.parametrize("kind", [ToolKind.SQUARE, ToolKind.CIRCLE])
def test_symmetric_zero_delta_keeps_bounds(kind):
    shape = make_shape(kind=kind, start=(50, 50), end=(0, 0))

    for direction in ResizeDirection:
        assert bounding_box(resized(shape, direction, 0, 0)) == (0, 0, 50, 50)


def test_symmetric_resize_projects_onto_square():
    square = make_shape(kind=ToolKind.SQUARE, start=(0, 0), end=(50, 50))

    assert resized(square, ResizeDirection.SOUTH_EAST, 30, 10).segments[0] == Segment(Coordinate(0, 0), Coordinate(80, 80))
    assert bounding_box(resized(square, ResizeDirection.NORTH_WEST, -10, -30)) == (-30, -30, 50, 50)


@pytest.mark.parametrize("direction", list(ResizeDirection))
@pytest.mark.parametrize("delta", [(13, -4), (-70, 22), (5, 5), (-120, -3)])
def test_symmetric_resize_keeps_aspect_lock(direction, delta):
    circle = make_shape(kind=ToolKind.CIRCLE, start=(0, 0), end=(40, 40))

    width, height = _size(resized(circle, direction, *delta))

    assert width == pytest.approx(height)


def test_resize_keeps_identity_fields():
    shape = make_shape(shape_id="keep", z_index=7, fill="#ff0000")

    result = resized(shape, ResizeDirection.SOUTH, 0, 10)

    assert (result.id, result.z_index, result.fill_color) == ("keep", 7, "#ff0000")


def test_aspect_lock_holds_to_float_rounding_off_grid():
    square = make_shape(kind=ToolKind.SQUARE, start=(0.7, 1.1), end=(1.7, 2.1))

    width, height = _size(resized(square, ResizeDirection.SOUTH_EAST, 0.7, 0.0))

    assert width == pytest.approx(1.7)
    assert height == pytest.approx(width)
