from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, NamedTuple, Optional, Tuple
import uuid


class Coordinate(NamedTuple):
    x: float
    y: float


class ToolKind(str, Enum):
    FREEHAND_DRAW = "FreehandDraw"
    ERASER = "Eraser"
    LINE = "Line"
    CIRCLE = "Circle"
    SQUARE = "Square"
    RECTANGLE = "Rectangle"
    TRIANGLE_UP = "TriangleUp"
    TRIANGLE_DOWN = "TriangleDown"
    TRIANGLE_LEFT = "TriangleLeft"
    TRIANGLE_RIGHT = "TriangleRight"
    # Read from documents only; fill edits keep the target shape's kind.
    FILL_CHANGE = "FillChange"


FREEHAND_KINDS = frozenset({ToolKind.FREEHAND_DRAW, ToolKind.ERASER})
SYMMETRIC_KINDS = frozenset({ToolKind.CIRCLE, ToolKind.SQUARE})
# Kinds that carry no geometry and are never selected or filled.
UNSELECTABLE_KINDS = FREEHAND_KINDS | {ToolKind.FILL_CHANGE}


class Tool(str, Enum):
    SELECT = "Select"
    PAN = "Pan"
    FILL = "Fill"
    DRAW = "Draw"
    ERASER = "Eraser"
    LINE = "Line"
    CIRCLE = "Circle"
    SQUARE = "Square"
    RECTANGLE = "Rectangle"
    TRIANGLE_UP = "TriangleUp"
    TRIANGLE_DOWN = "TriangleDown"
    TRIANGLE_LEFT = "TriangleLeft"
    TRIANGLE_RIGHT = "TriangleRight"

    @property
    def tool_kind(self) -> Optional[ToolKind]:
        """Description: Revision kind produced by this tool
        Inputs: None
        """
        return _TOOL_KINDS.get(self)

    @property
    def is_freehand(self) -> bool:
        return self in (Tool.DRAW, Tool.ERASER)

    @property
    def is_shape(self) -> bool:
        return self.tool_kind is not None and not self.is_freehand


_TOOL_KINDS: Dict[Tool, ToolKind] = {
    Tool.DRAW: ToolKind.FREEHAND_DRAW,
    Tool.ERASER: ToolKind.ERASER,
    Tool.LINE: ToolKind.LINE,
    Tool.CIRCLE: ToolKind.CIRCLE,
    Tool.SQUARE: ToolKind.SQUARE,
    Tool.RECTANGLE: ToolKind.RECTANGLE,
    Tool.TRIANGLE_UP: ToolKind.TRIANGLE_UP,
    Tool.TRIANGLE_DOWN: ToolKind.TRIANGLE_DOWN,
    Tool.TRIANGLE_LEFT: ToolKind.TRIANGLE_LEFT,
    Tool.TRIANGLE_RIGHT: ToolKind.TRIANGLE_RIGHT,
}


@dataclass(frozen=True)
class Segment:
    start: Coordinate
    end: Coordinate

    def translated(self, dx: float, dy: float) -> "Segment":
        """Description: Translated
        Inputs: dx: float, dy: float
        """
        return Segment(
            Coordinate(self.start.x + dx, self.start.y + dy),
            Coordinate(self.end.x + dx, self.end.y + dy),
        )

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "from": {"x": self.start.x, "y": self.start.y},
            "to": {"x": self.end.x, "y": self.end.y},
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "Segment":
        """Description: From dict
        Inputs: cls, payload: Dict
        """
        start = payload["from"]
        end = payload["to"]
        return cls(
            Coordinate(float(start["x"]), float(start["y"])),
            Coordinate(float(end["x"]), float(end["y"])),
        )


def new_shape_id() -> str:
    """Description: New shape id
    Inputs: None
    """
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ShapeRevision:
    id: str
    tool_kind: ToolKind
    stroke_color: str
    fill_color: str
    stroke_width: float
    z_index: int
    segments: Tuple[Segment, ...] = field(default_factory=tuple)
    disabled: bool = False

    @classmethod
    def create(
        cls,
        tool_kind: ToolKind,
        segments: Iterable[Segment],
        stroke_color: str,
        fill_color: str,
        stroke_width: float,
        z_index: int,
    ) -> "ShapeRevision":
        """Description: Create the first revision of a new shape
        Inputs: tool_kind: ToolKind, segments: Iterable[Segment], stroke_color: str, fill_color: str, stroke_width: float, z_index: int
        """
        return cls(
            id=new_shape_id(),
            tool_kind=tool_kind,
            stroke_color=stroke_color,
            fill_color=fill_color,
            stroke_width=stroke_width,
            z_index=z_index,
            segments=tuple(segments),
        )

    def revise(self, **changes) -> "ShapeRevision":
        """Description: Next revision of the same shape with changed fields
        Inputs: changes
        """
        if "segments" in changes:
            changes["segments"] = tuple(changes["segments"])
        return replace(self, **changes)

    def translated(self, dx: float, dy: float) -> "ShapeRevision":
        """Description: Translated
        Inputs: dx: float, dy: float
        """
        return self.revise(segments=[segment.translated(dx, dy) for segment in self.segments])

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "id": self.id,
            "toolKind": self.tool_kind.value,
            "strokeColor": self.stroke_color,
            "fillColor": self.fill_color,
            "strokeWidth": self.stroke_width,
            "zIndex": self.z_index,
            "segments": [segment.to_dict() for segment in self.segments],
            "disabled": self.disabled,
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "ShapeRevision":
        """Description: From dict
        Inputs: cls, payload: Dict
        """
        return cls(
            id=payload["id"],
            tool_kind=ToolKind(payload["toolKind"]),
            stroke_color=payload["strokeColor"],
            fill_color=payload["fillColor"],
            stroke_width=payload["strokeWidth"],
            z_index=int(payload["zIndex"]),
            segments=tuple(Segment.from_dict(item) for item in payload.get("segments", [])),
            disabled=bool(payload.get("disabled", False)),
        )
