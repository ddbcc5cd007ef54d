import config
from conftest import make_shape
from model import Coordinate, Segment, ToolKind
from renderer import draw_segment, draw_shape, render_scene
from viewport import Viewport


def test_render_scene_clears_then_draws_bottom_up(surface):
    viewport = Viewport(800, 600)
    viewport.pan = Coordinate(5.0, 6.0)
    viewport.zoom = 2.0
    low = make_shape(shape_id="low", fill="#ff0000", z_index=0)
    high = make_shape(shape_id="high", fill="#00ff00", z_index=1)

    render_scene(surface, viewport, [low, high])

    assert [call[0] for call in surface.calls] == ["clear", "set_transform", "fill", "stroke", "fill", "stroke"]
    assert surface.calls[1] == ("set_transform", (5.0, 6.0), 2.0)
    fills = [call[2] for call in surface.named("fill")]
    assert fills == ["#ff0000", "#00ff00"]


def test_closed_shapes_fill_before_stroke(surface):
    draw_shape(surface, make_shape(fill="#123456", stroke="#654321"))

    (fill,) = surface.named("fill")
    (stroke,) = surface.named("stroke")
    assert fill[2] == "#123456"
    assert stroke[2:5] == ("#654321", 2, True)


def test_lines_and_freehand_are_never_filled(surface):
    draw_shape(surface, make_shape(kind=ToolKind.LINE))
    draw_shape(surface, make_shape(kind=ToolKind.FREEHAND_DRAW))

    assert surface.named("fill") == []
    assert len(surface.named("stroke")) == 2


def test_eraser_width_is_scaled(surface):
    draw_shape(surface, make_shape(kind=ToolKind.ERASER, stroke="#ffffff"))

    (stroke,) = surface.named("stroke")
    assert stroke[3] == 2 * config.ERASER_SCALE


def test_selection_is_a_dashed_padded_box(surface):
    shape = make_shape(start=(0, 0), end=(100, 50))

    render_scene(surface, Viewport(800, 600), [shape], selected=shape)

    selection = surface.calls[-1]
    assert selection[0] == "stroke"
    assert set(selection[1]) == {(-10, -10), (110, -10), (110, 60), (-10, 60)}
    assert selection[2:] == (config.SELECTION_COLOR, config.SELECT_BORDER_WIDTH, True, config.SELECT_BORDER_DASH)


def test_draw_segment_strokes_one_open_path(surface):
    draw_segment(surface, Segment(Coordinate(0, 0), Coordinate(3, 4)), "#000000", 6)

    assert surface.calls == [("stroke", (Coordinate(0, 0), Coordinate(3, 4)), "#000000", 6, False, None)]
