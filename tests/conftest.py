from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pytest

from canvas_controller import CanvasController
from model import Coordinate, Segment, ShapeRevision, ToolKind
from viewport import Viewport


class RecordingSurface:
    """Drawing surface that keeps every call for inspection."""

    def __init__(self) -> None:
        self.calls: List[Tuple] = []
        self.pan: Tuple[float, float] = (0.0, 0.0)
        self.zoom = 1.0

    def clear(self) -> None:
        self.calls.append(("clear",))

    def set_transform(self, pan, zoom: float) -> None:
        self.pan = (pan[0], pan[1])
        self.zoom = zoom
        self.calls.append(("set_transform", self.pan, zoom))

    def stroke_path(self, points: Sequence[Coordinate], color: str, width: float, closed: bool = False, dash: Optional[Tuple[int, ...]] = None) -> None:
        self.calls.append(("stroke", tuple(points), color, width, closed, dash))

    def fill_path(self, points: Sequence[Coordinate], color: str) -> None:
        self.calls.append(("fill", tuple(points), color))

    def named(self, name: str) -> List[Tuple]:
        return [call for call in self.calls if call[0] == name]

    def reset(self) -> None:
        self.calls.clear()


class Notifications:
    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def __call__(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    @property
    def warnings(self) -> List[str]:
        return [message for level, message in self.messages if level == "warning"]

    @property
    def errors(self) -> List[str]:
        return [message for level, message in self.messages if level == "error"]


def make_shape(
    kind: ToolKind = ToolKind.RECTANGLE,
    start=(0.0, 0.0),
    end=(100.0, 50.0),
    z_index: int = 0,
    shape_id: str = "shape",
    fill: str = "#ffffff",
    stroke: str = "#000000",
    disabled: bool = False,
) -> ShapeRevision:
    return ShapeRevision(
        id=shape_id,
        tool_kind=kind,
        stroke_color=stroke,
        fill_color=fill,
        stroke_width=2,
        z_index=z_index,
        segments=(Segment(Coordinate(*start), Coordinate(*end)),),
        disabled=disabled,
    )


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def notifications() -> Notifications:
    return Notifications()


@pytest.fixture
def controller(surface, notifications) -> CanvasController:
    return CanvasController(surface=surface, notify=notifications, viewport=Viewport(800, 600))


def drag(controller: CanvasController, start, end, steps: int = 4) -> None:
    controller.apply_pointer_down(start)
    for i in range(1, steps + 1):
        t = i / steps
        controller.apply_pointer_move((start[0] + (end[0] - start[0]) * t, start[1] + (end[1] - start[1]) * t))
    controller.apply_pointer_up(end)
