from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

import tkinter as tk

import config
from canvas_controller import CanvasController, Notifier
from model import Coordinate
from resize import Cursor


Point = Tuple[float, float]

TK_CURSORS: Dict[Cursor, str] = {
    Cursor.MOVE: "fleur",
    Cursor.NONE: "dotbox",
    Cursor.DEFAULT: "arrow",
    Cursor.GRABBING: "fleur",
    Cursor.GRAB: "hand2",
    Cursor.NWSE_RESIZE: "bottom_right_corner",
    Cursor.NESW_RESIZE: "bottom_left_corner",
    Cursor.EW_RESIZE: "sb_h_double_arrow",
    Cursor.NS_RESIZE: "sb_v_double_arrow",
    Cursor.CROSSHAIR: "crosshair",
}


class CanvasView:
    """tkinter drawing surface that forwards pointer input to a CanvasController."""

    def __init__(
        self,
        master: tk.Widget,
        notify: Optional[Notifier] = None,
        on_change: Optional[Callable[[], None]] = None,
        on_view_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        """Description: Init
        Inputs: master: tk.Widget, notify: Optional[Notifier], on_change: Optional[Callable[[], None]], on_view_changed: Optional[Callable[[], None]]
        """
        self.canvas = tk.Canvas(master, bg=config.BACKGROUND_COLOR, highlightthickness=0)
        self.pan: Point = (0.0, 0.0)
        self.zoom = 1.0
        self._on_view_changed = on_view_changed

        self.controller = CanvasController(surface=self, notify=notify, on_change=on_change)

        self.canvas.bind("<Configure>", self._on_resize)
        self.canvas.bind("<ButtonPress-1>", self._on_left_press)
        self.canvas.bind("<B1-Motion>", self._on_left_drag)
        self.canvas.bind("<ButtonRelease-1>", self._on_left_release)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<MouseWheel>", self._on_mouse_wheel)
        self.canvas.bind("<Button-4>", lambda _event: self._zoom(1))
        self.canvas.bind("<Button-5>", lambda _event: self._zoom(-1))
        self.canvas.bind("<KeyPress-Escape>", self._on_escape)
        self.canvas.focus_set()

    # DrawingSurface ---------------------------------------------------------

    def clear(self) -> None:
        self.canvas.delete("shape")

    def set_transform(self, pan: Point, zoom: float) -> None:
        self.pan = (pan[0], pan[1])
        self.zoom = zoom

    def stroke_path(
        self,
        points: Sequence[Coordinate],
        color: str,
        width: float,
        closed: bool = False,
        dash: Optional[Tuple[int, ...]] = None,
    ) -> None:
        """Description: Stroke path
        Inputs: points: Sequence[Coordinate], color: str, width: float, closed: bool, dash: Optional[Tuple[int, ...]]
        """
        coords = self._screen_coords(points)
        if len(coords) < 4:
            return
        line_width = max(1.0, width * self.zoom)
        if closed:
            self.canvas.create_polygon(
                coords,
                outline=color,
                fill="",
                width=line_width,
                dash=dash or "",
                tags="shape",
            )
        else:
            self.canvas.create_line(
                coords,
                fill=color,
                width=line_width,
                capstyle=tk.ROUND,
                dash=dash or "",
                tags="shape",
            )

    def fill_path(self, points: Sequence[Coordinate], color: str) -> None:
        coords = self._screen_coords(points)
        if len(coords) < 6:
            return
        self.canvas.create_polygon(coords, fill=color, outline="", tags="shape")

    def world_to_screen(self, point: Point) -> Point:
        """Description: World to screen
        Inputs: point: Point
        """
        return (point[0] * self.zoom + self.pan[0], point[1] * self.zoom + self.pan[1])

    def _screen_coords(self, points: Sequence[Coordinate]) -> List[float]:
        coords: List[float] = []
        for point in points:
            sx, sy = self.world_to_screen(point)
            coords.extend([sx, sy])
        return coords

    # Events -----------------------------------------------------------------

    def _on_resize(self, event: tk.Event) -> None:
        self.controller.apply_resize((event.width, event.height))
        self._notify_view_changed()

    def _on_left_press(self, event: tk.Event) -> None:
        self.canvas.focus_set()
        self.controller.apply_pointer_down((event.x, event.y))
        self._update_cursor(event)

    def _on_left_drag(self, event: tk.Event) -> None:
        self.controller.apply_pointer_move((event.x, event.y))
        self._update_cursor(event)

    def _on_left_release(self, event: tk.Event) -> None:
        self.controller.apply_pointer_up((event.x, event.y))
        self._update_cursor(event)
        self._notify_view_changed()

    def _on_motion(self, event: tk.Event) -> None:
        self._update_cursor(event)

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        self._zoom(1 if event.delta > 0 else -1)

    def _on_escape(self, _event: tk.Event) -> None:
        self.controller.cancel_gesture()

    def _zoom(self, direction: int) -> None:
        if self.controller.apply_wheel_zoom(direction):
            self._notify_view_changed()

    def _update_cursor(self, event: tk.Event) -> None:
        cursor = self.controller.cursor_at((event.x, event.y))
        self.canvas.configure(cursor=TK_CURSORS[cursor])

    def _notify_view_changed(self) -> None:
        if self._on_view_changed:
            self._on_view_changed()
