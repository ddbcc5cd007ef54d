# Resize handles and the endpoint math behind drag-to-resize.

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

import config
from geometry import bounding_box, normalize_symmetric
from model import SYMMETRIC_KINDS, Coordinate, Segment, ShapeRevision


class ResizeDirection(str, Enum):
    NORTH = "n"
    SOUTH = "s"
    EAST = "e"
    WEST = "w"
    NORTH_EAST = "ne"
    NORTH_WEST = "nw"
    SOUTH_EAST = "se"
    SOUTH_WEST = "sw"

    @property
    def is_corner(self) -> bool:
        return len(self.value) == 2


class Cursor(str, Enum):
    MOVE = "move"
    NONE = "none"
    DEFAULT = "default"
    GRABBING = "grabbing"
    GRAB = "grab"
    NWSE_RESIZE = "nwse-resize"
    NESW_RESIZE = "nesw-resize"
    EW_RESIZE = "ew-resize"
    NS_RESIZE = "ns-resize"
    CROSSHAIR = "crosshair"


RESIZE_CURSORS: Dict[ResizeDirection, Cursor] = {
    ResizeDirection.NORTH_WEST: Cursor.NWSE_RESIZE,
    ResizeDirection.SOUTH_EAST: Cursor.NWSE_RESIZE,
    ResizeDirection.NORTH_EAST: Cursor.NESW_RESIZE,
    ResizeDirection.SOUTH_WEST: Cursor.NESW_RESIZE,
    ResizeDirection.EAST: Cursor.EW_RESIZE,
    ResizeDirection.WEST: Cursor.EW_RESIZE,
    ResizeDirection.NORTH: Cursor.NS_RESIZE,
    ResizeDirection.SOUTH: Cursor.NS_RESIZE,
}


def padded_bounds(revision: ShapeRevision, padding: float = config.SELECT_BOX_PADDING) -> Optional[Tuple[float, float, float, float]]:
    bounds = bounding_box(revision)
    if bounds is None:
        return None
    min_x, min_y, max_x, max_y = bounds
    return min_x - padding, min_y - padding, max_x + padding, max_y + padding


def handle_at(revision: ShapeRevision, point: Tuple[float, float], zoom: float = 1.0) -> Optional[ResizeDirection]:
    """Resize handle of the selection box under a world ``point``.

    Handles sit on the selection border padded by ``SELECT_BOX_PADDING``;
    the hit tolerance is ``HANDLE_TOLERANCE`` screen pixels. Corners win over
    edges, and Circle/Square only expose corners.
    """
    bounds = padded_bounds(revision)
    if bounds is None:
        return None
    left, top, right, bottom = bounds
    tol = config.HANDLE_TOLERANCE / max(zoom, 0.001)
    x, y = point

    near_left = abs(x - left) <= tol
    near_right = abs(x - right) <= tol
    near_top = abs(y - top) <= tol
    near_bottom = abs(y - bottom) <= tol

    corners: List[Tuple[bool, ResizeDirection]] = [
        (near_top and near_left, ResizeDirection.NORTH_WEST),
        (near_top and near_right, ResizeDirection.NORTH_EAST),
        (near_bottom and near_left, ResizeDirection.SOUTH_WEST),
        (near_bottom and near_right, ResizeDirection.SOUTH_EAST),
    ]
    for hit, direction in corners:
        if hit:
            return direction

    if revision.tool_kind in SYMMETRIC_KINDS:
        return None

    inside_x = left < x < right
    inside_y = top < y < bottom
    if near_top and inside_x:
        return ResizeDirection.NORTH
    if near_bottom and inside_x:
        return ResizeDirection.SOUTH
    if near_left and inside_y:
        return ResizeDirection.WEST
    if near_right and inside_y:
        return ResizeDirection.EAST
    return None


def _resize_free(segment: Segment, direction: ResizeDirection, dx: float, dy: float) -> Segment:
    sx, sy = segment.start
    ex, ey = segment.end
    # The endpoint further along an axis is the far edge on that axis.
    end_is_right = ex >= sx
    end_is_below = ey >= sy
    if "e" in direction.value:
        if end_is_right:
            ex += dx
        else:
            sx += dx
    if "w" in direction.value:
        if end_is_right:
            sx += dx
        else:
            ex += dx
    if "s" in direction.value:
        if end_is_below:
            ey += dy
        else:
            sy += dy
    if "n" in direction.value:
        if end_is_below:
            sy += dy
        else:
            ey += dy
    return Segment(Coordinate(sx, sy), Coordinate(ex, ey))


def _resize_symmetric(segment: Segment, direction: ResizeDirection, dx: float, dy: float) -> Segment:
    min_x = min(segment.start.x, segment.end.x)
    max_x = max(segment.start.x, segment.end.x)
    min_y = min(segment.start.y, segment.end.y)
    max_y = max(segment.start.y, segment.end.y)

    if "w" in direction.value:
        corner_x, anchor_x = min_x + dx, max_x
    elif "e" in direction.value:
        corner_x, anchor_x = max_x + dx, min_x
    else:
        corner_x, anchor_x = max_x, min_x
    if "n" in direction.value:
        corner_y, anchor_y = min_y + dy, max_y
    elif "s" in direction.value:
        corner_y, anchor_y = max_y + dy, min_y
    else:
        corner_y, anchor_y = max_y, min_y

    anchor = Coordinate(anchor_x, anchor_y)
    return Segment(anchor, normalize_symmetric(anchor, Coordinate(corner_x, corner_y)))


def resize_segment(segment: Segment, direction: ResizeDirection, dx: float, dy: float, symmetric: bool = False) -> Segment:
    """Description: Segment after dragging ``direction`` by (dx, dy)
    Inputs: segment: Segment, direction: ResizeDirection, dx: float, dy: float, symmetric: bool
    """
    if symmetric:
        return _resize_symmetric(segment, direction, dx, dy)
    return _resize_free(segment, direction, dx, dy)


def resized(revision: ShapeRevision, direction: ResizeDirection, dx: float, dy: float) -> ShapeRevision:
    """Description: Next revision of a shape resized from a handle drag
    Inputs: revision: ShapeRevision, direction: ResizeDirection, dx: float, dy: float
    """
    if not revision.segments:
        return revision
    symmetric = revision.tool_kind in SYMMETRIC_KINDS
    segment = resize_segment(revision.segments[0], direction, dx, dy, symmetric)
    return revision.revise(segments=[segment, *revision.segments[1:]])
