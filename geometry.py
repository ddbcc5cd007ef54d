# Bounding boxes, hit-testing and shape path construction.

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import math

import numpy as np

import config
from model import UNSELECTABLE_KINDS, Coordinate, Segment, ShapeRevision, ToolKind

Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class ShapePath:
    points: Tuple[Coordinate, ...]
    closed: bool = False


def bounding_box(revision: ShapeRevision) -> Optional[Bounds]:
    """Description: Axis-aligned bounds of every segment endpoint
    Inputs: revision: ShapeRevision
    """
    if not revision.segments:
        return None
    xs: List[float] = []
    ys: List[float] = []
    for segment in revision.segments:
        xs.extend([segment.start.x, segment.end.x])
        ys.extend([segment.start.y, segment.end.y])
    return min(xs), min(ys), max(xs), max(ys)


def contains(revision: ShapeRevision, point: Tuple[float, float], padding: float = 0.0) -> bool:
    """Description: Bounding-box containment
    Inputs: revision: ShapeRevision, point: Tuple[float, float], padding: float
    """
    bounds = bounding_box(revision)
    if bounds is None:
        return False
    min_x, min_y, max_x, max_y = bounds
    return (min_x - padding) <= point[0] <= (max_x + padding) and (min_y - padding) <= point[1] <= (max_y + padding)


def is_selectable(revision: ShapeRevision) -> bool:
    return revision.tool_kind not in UNSELECTABLE_KINDS and bool(revision.segments)


def shape_at(point: Tuple[float, float], shapes: Sequence[ShapeRevision]) -> Optional[ShapeRevision]:
    """Topmost selectable shape whose bounding box contains ``point``.

    Bounding boxes stand in for outlines on purpose, so a click anywhere in a
    triangle's box hits the triangle. Ties on ``z_index`` go to the shape drawn
    later in ``shapes``.
    """
    candidates = sorted((shape for shape in shapes if is_selectable(shape)), key=lambda shape: shape.z_index)
    if not candidates:
        return None
    boxes = np.array([bounding_box(shape) for shape in candidates], dtype=float)
    x, y = point
    mask = (boxes[:, 0] <= x) & (x <= boxes[:, 2]) & (boxes[:, 1] <= y) & (y <= boxes[:, 3])
    hits = np.flatnonzero(mask)
    if hits.size == 0:
        return None
    return candidates[int(hits[-1])]


def fill_target(point: Tuple[float, float], shapes: Sequence[ShapeRevision]) -> Optional[ShapeRevision]:
    """Description: Shape a fill click lands on; Line targets are the caller's to reject
    Inputs: point: Tuple[float, float], shapes: Sequence[ShapeRevision]
    """
    return shape_at(point, shapes)


def normalize_symmetric(start: Coordinate, end: Coordinate) -> Coordinate:
    """Description: Move end so width equals height, keeping the drag direction.
        Width and height agree to float rounding, not bit for bit.
    Inputs: start: Coordinate, end: Coordinate
    """
    width = end.x - start.x
    height = end.y - start.y
    side = max(abs(width), abs(height))
    return Coordinate(start.x + math.copysign(side, width), start.y + math.copysign(side, height))


def _sign(value: float) -> float:
    return -1.0 if value < 0 else 1.0


def _line_paths(revision: ShapeRevision) -> List[ShapePath]:
    return [ShapePath((segment.start, segment.end)) for segment in revision.segments]


def _rectangle_paths(revision: ShapeRevision) -> List[ShapePath]:
    segment = revision.segments[0]
    a, b = segment.start, segment.end
    return [ShapePath((a, Coordinate(b.x, a.y), b, Coordinate(a.x, b.y)), closed=True)]


def _square_paths(revision: ShapeRevision) -> List[ShapePath]:
    segment = revision.segments[0]
    a = segment.start
    width = segment.end.x - a.x
    height = segment.end.y - a.y
    side = min(abs(width), abs(height))
    b = Coordinate(a.x + _sign(width) * side, a.y + _sign(height) * side)
    return [ShapePath((a, Coordinate(b.x, a.y), b, Coordinate(a.x, b.y)), closed=True)]


def _circle_paths(revision: ShapeRevision) -> List[ShapePath]:
    segment = revision.segments[0]
    a = segment.start
    width = segment.end.x - a.x
    height = segment.end.y - a.y
    radius = min(abs(width), abs(height)) / 2
    cx = a.x + _sign(width) * radius
    cy = a.y + _sign(height) * radius
    angles = np.linspace(0.0, 2 * np.pi, config.CIRCLE_SEGMENTS, endpoint=False)
    xs = cx + radius * np.cos(angles)
    ys = cy + radius * np.sin(angles)
    return [ShapePath(tuple(Coordinate(float(x), float(y)) for x, y in zip(xs, ys)), closed=True)]


def _triangle(revision: ShapeRevision, apex: str) -> List[ShapePath]:
    min_x, min_y, max_x, max_y = bounding_box(revision)
    mid_x = (min_x + max_x) / 2
    mid_y = (min_y + max_y) / 2
    if apex == "up":
        points = ((mid_x, min_y), (max_x, max_y), (min_x, max_y))
    elif apex == "down":
        points = ((mid_x, max_y), (min_x, min_y), (max_x, min_y))
    elif apex == "left":
        points = ((min_x, mid_y), (max_x, min_y), (max_x, max_y))
    else:
        points = ((max_x, mid_y), (min_x, max_y), (min_x, min_y))
    return [ShapePath(tuple(Coordinate(x, y) for x, y in points), closed=True)]


def _no_paths(_revision: ShapeRevision) -> List[ShapePath]:
    return []


PATH_BUILDERS: Dict[ToolKind, Callable[[ShapeRevision], List[ShapePath]]] = {
    ToolKind.FREEHAND_DRAW: _line_paths,
    ToolKind.ERASER: _line_paths,
    ToolKind.LINE: _line_paths,
    ToolKind.RECTANGLE: _rectangle_paths,
    ToolKind.SQUARE: _square_paths,
    ToolKind.CIRCLE: _circle_paths,
    ToolKind.TRIANGLE_UP: lambda revision: _triangle(revision, "up"),
    ToolKind.TRIANGLE_DOWN: lambda revision: _triangle(revision, "down"),
    ToolKind.TRIANGLE_LEFT: lambda revision: _triangle(revision, "left"),
    ToolKind.TRIANGLE_RIGHT: lambda revision: _triangle(revision, "right"),
    ToolKind.FILL_CHANGE: _no_paths,
}


def shape_paths(revision: ShapeRevision) -> List[ShapePath]:
    """Description: Drawable paths for a revision, keyed by tool kind
    Inputs: revision: ShapeRevision
    """
    if not revision.segments:
        return []
    try:
        builder = PATH_BUILDERS[revision.tool_kind]
    except KeyError:
        raise ValueError(f"No path builder for tool kind {revision.tool_kind!r}") from None
    return builder(revision)


def segment_from_drag(start: Coordinate, end: Coordinate, symmetric: bool) -> Segment:
    """Description: Candidate segment of a shape draft
    Inputs: start: Coordinate, end: Coordinate, symmetric: bool
    """
    if symmetric:
        end = normalize_symmetric(start, end)
    return Segment(start, end)
