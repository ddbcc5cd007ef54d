# Screen <-> world transform with pan and center-anchored zoom.

from __future__ import annotations

import logging
from typing import Optional, Tuple

import config
from model import Coordinate

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class Viewport:
    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        min_zoom: float = config.ZOOM_MIN,
        max_zoom: float = config.ZOOM_MAX,
        zoom_step: float = config.ZOOM_STEP,
    ) -> None:
        self.width = float(width)
        self.height = float(height)
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom_step = zoom_step
        self.zoom = 1.0
        self.pan = Coordinate(0.0, 0.0)

        self._drag_start_screen: Optional[Point] = None
        self._drag_start_pan: Optional[Coordinate] = None

    @property
    def center(self) -> Coordinate:
        return Coordinate(self.width / 2, self.height / 2)

    def to_world(self, screen: Point) -> Coordinate:
        """Description: Screen to world
        Inputs: screen: Point
        """
        return Coordinate((screen[0] - self.pan.x) / self.zoom, (screen[1] - self.pan.y) / self.zoom)

    def to_screen(self, world: Point) -> Coordinate:
        """Description: World to screen
        Inputs: world: Point
        """
        return Coordinate(world[0] * self.zoom + self.pan.x, world[1] * self.zoom + self.pan.y)

    def resize(self, width: float, height: float) -> None:
        self.width = max(0.0, float(width))
        self.height = max(0.0, float(height))

    def set_zoom(self, new_zoom: float) -> bool:
        """Change zoom keeping the viewport center fixed.

        Requests outside ``[min_zoom, max_zoom]`` leave the viewport untouched
        and return False.
        """
        if not self.min_zoom <= new_zoom <= self.max_zoom:
            logger.debug("Zoom %.3f outside [%s, %s], ignored", new_zoom, self.min_zoom, self.max_zoom)
            return False
        if new_zoom == self.zoom:
            return False
        ratio = new_zoom / self.zoom
        center = self.center
        digits = config.PAN_PRECISION
        self.pan = Coordinate(
            round(center.x - (center.x - self.pan.x) * ratio, digits),
            round(center.y - (center.y - self.pan.y) * ratio, digits),
        )
        self.zoom = new_zoom
        return True

    def zoom_in(self) -> bool:
        return self.set_zoom(round(self.zoom + self.zoom_step, 3))

    def zoom_out(self) -> bool:
        return self.set_zoom(round(self.zoom - self.zoom_step, 3))

    def begin_pan(self, screen: Point) -> None:
        self._drag_start_screen = (screen[0], screen[1])
        self._drag_start_pan = self.pan

    def pan_to(self, screen: Point) -> None:
        """Description: Pan relative to the drag start
        Inputs: screen: Point
        """
        if self._drag_start_screen is None or self._drag_start_pan is None:
            return
        self.pan = Coordinate(
            self._drag_start_pan.x + (screen[0] - self._drag_start_screen[0]),
            self._drag_start_pan.y + (screen[1] - self._drag_start_screen[1]),
        )

    def cancel_pan(self) -> None:
        if self._drag_start_pan is not None:
            self.pan = self._drag_start_pan
        self.end_pan()

    def end_pan(self) -> None:
        self._drag_start_screen = None
        self._drag_start_pan = None
