# Scene rendering through an abstract drawing surface.

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, Tuple

import config
from geometry import ShapePath, shape_paths
from model import Coordinate, Segment, ShapeRevision, ToolKind
from resize import padded_bounds
from viewport import Viewport


class DrawingSurface(Protocol):
    """Pixel backend. Points are world coordinates; the surface applies the
    transform from the last :meth:`set_transform` call."""

    def clear(self) -> None:
        ...

    def set_transform(self, pan: Tuple[float, float], zoom: float) -> None:
        ...

    def stroke_path(
        self,
        points: Sequence[Coordinate],
        color: str,
        width: float,
        closed: bool = False,
        dash: Optional[Tuple[int, ...]] = None,
    ) -> None:
        ...

    def fill_path(self, points: Sequence[Coordinate], color: str) -> None:
        ...


def stroke_width_for(revision: ShapeRevision) -> float:
    if revision.tool_kind == ToolKind.ERASER:
        return revision.stroke_width * config.ERASER_SCALE
    return revision.stroke_width


def draw_shape(surface: DrawingSurface, revision: ShapeRevision) -> None:
    """Description: Draw shape
    Inputs: surface: DrawingSurface, revision: ShapeRevision
    """
    width = stroke_width_for(revision)
    for path in shape_paths(revision):
        _draw_path(surface, path, revision, width)


def _draw_path(surface: DrawingSurface, path: ShapePath, revision: ShapeRevision, width: float) -> None:
    if path.closed:
        surface.fill_path(path.points, revision.fill_color)
    surface.stroke_path(path.points, revision.stroke_color, width, closed=path.closed)


def draw_segment(surface: DrawingSurface, segment: Segment, color: str, width: float) -> None:
    """Description: Draw one freehand segment as it is sampled
    Inputs: surface: DrawingSurface, segment: Segment, color: str, width: float
    """
    surface.stroke_path((segment.start, segment.end), color, width)


def draw_selection(surface: DrawingSurface, revision: ShapeRevision) -> None:
    bounds = padded_bounds(revision)
    if bounds is None:
        return
    left, top, right, bottom = bounds
    corners = (
        Coordinate(left, top),
        Coordinate(right, top),
        Coordinate(right, bottom),
        Coordinate(left, bottom),
    )
    surface.stroke_path(
        corners,
        config.SELECTION_COLOR,
        config.SELECT_BORDER_WIDTH,
        closed=True,
        dash=config.SELECT_BORDER_DASH,
    )


def render_scene(
    surface: DrawingSurface,
    viewport: Viewport,
    shapes: Iterable[ShapeRevision],
    selected: Optional[ShapeRevision] = None,
) -> None:
    """Description: Redraw everything, bottom shape first
    Inputs: surface: DrawingSurface, viewport: Viewport, shapes: Iterable[ShapeRevision], selected: Optional[ShapeRevision]
    """
    surface.clear()
    surface.set_transform(viewport.pan, viewport.zoom)
    for revision in shapes:
        draw_shape(surface, revision)
    if selected is not None:
        draw_selection(surface, selected)
