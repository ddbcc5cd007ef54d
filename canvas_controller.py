# Pointer-driven editing: turns canvas gestures and toolbar actions into log appends.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
import logging

from matplotlib import colors

import config
import renderer
import storage
from geometry import bounding_box, contains, fill_target, segment_from_drag, shape_at
from model import SYMMETRIC_KINDS, Coordinate, Segment, ShapeRevision, Tool, ToolKind, new_shape_id
from resize import RESIZE_CURSORS, Cursor, ResizeDirection, handle_at, resized
from revision_log import RevisionLog
from viewport import Viewport

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Notifier = Callable[[str, str], None]

FILL_TARGET_WARNING = "Please click on a drawn shape to apply the fill color."


class InteractionMode(str, Enum):
    IDLE = "idle"
    PANNING = "panning"
    FREEHAND_DRAWING = "freehand_drawing"
    SHAPE_DRAFTING = "shape_drafting"
    MOVING = "moving"
    RESIZING = "resizing"


class CanvasAction(str, Enum):
    NEW = "New"
    UNDO = "Undo"
    REDO = "Redo"
    SAVE = "Save"
    EXPORT = "Export"
    IMPORT = "Import"
    ZOOM_IN = "Zoom In"
    ZOOM_OUT = "Zoom Out"
    MOVE_FORWARD = "Move Forward"
    MOVE_BACKWARD = "Move Backward"
    COPY = "Copy"
    DELETE = "Delete"
    SET_STROKE_COLOR = "Set Stroke Color"
    SET_FILL_COLOR = "Set Fill Color"
    SET_STROKE_WIDTH = "Set Stroke Width"
    SET_TOOL = "Set Tool"


@dataclass
class SessionState:
    """Gesture state living between one pointer-down and its pointer-up."""

    mode: InteractionMode = InteractionMode.IDLE
    pressed: bool = False
    start_world: Optional[Coordinate] = None
    last_world: Optional[Coordinate] = None
    shape_id: Optional[str] = None
    segments: List[Segment] = field(default_factory=list)
    snapshot: Optional[ShapeRevision] = None
    direction: Optional[ResizeDirection] = None
    preview: Optional[ShapeRevision] = None


def _log_notification(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.WARNING, message)


class CanvasController:
    def __init__(
        self,
        surface: Optional[renderer.DrawingSurface] = None,
        notify: Optional[Notifier] = None,
        on_change: Optional[Callable[[], None]] = None,
        viewport: Optional[Viewport] = None,
    ) -> None:
        """Description: Init
        Inputs: surface: Optional[DrawingSurface], notify: Optional[Notifier], on_change: Optional[Callable[[], None]], viewport: Optional[Viewport]
        """
        self.log = RevisionLog()
        self.viewport = viewport or Viewport()
        self.surface = surface
        self._notify = notify or _log_notification
        self._on_change = on_change

        self.tool = Tool.SELECT
        self.stroke_color = config.DEFAULT_STROKE
        self.fill_color = config.DEFAULT_FILL
        self.stroke_width: float = config.DEFAULT_STROKE_WIDTH

        self._selected_id: Optional[str] = None
        self._session = SessionState()

        self._actions: Dict[CanvasAction, Callable[[object], Optional[str]]] = {
            CanvasAction.NEW: lambda _payload: self.new_canvas(),
            CanvasAction.UNDO: lambda _payload: self.undo(),
            CanvasAction.REDO: lambda _payload: self.redo(),
            CanvasAction.SAVE: self._save,
            CanvasAction.EXPORT: self._export,
            CanvasAction.IMPORT: self._import,
            CanvasAction.ZOOM_IN: lambda _payload: self.apply_wheel_zoom(1),
            CanvasAction.ZOOM_OUT: lambda _payload: self.apply_wheel_zoom(-1),
            CanvasAction.MOVE_FORWARD: lambda _payload: self.move_forward(),
            CanvasAction.MOVE_BACKWARD: lambda _payload: self.move_backward(),
            CanvasAction.COPY: lambda _payload: self.copy_selected(),
            CanvasAction.DELETE: lambda _payload: self.delete_selected(),
            CanvasAction.SET_STROKE_COLOR: self.set_stroke_color,
            CanvasAction.SET_FILL_COLOR: self.set_fill_color,
            CanvasAction.SET_STROKE_WIDTH: self.set_stroke_width,
            CanvasAction.SET_TOOL: self.set_tool,
        }

    @property
    def mode(self) -> InteractionMode:
        return self._session.mode

    @property
    def session(self) -> SessionState:
        return self._session

    # Scene access -----------------------------------------------------------

    def get_collapsed_scene(self) -> Tuple[ShapeRevision, ...]:
        return self.log.collapse()

    def get_selected_shape(self) -> Optional[ShapeRevision]:
        """Description: Current head of the selected shape, if still visible
        Inputs: None
        """
        if self._selected_id is None:
            return None
        head = self.log.head(self._selected_id)
        if head is None or head.disabled:
            return None
        return head

    def select(self, shape_id: Optional[str]) -> None:
        self._selected_id = shape_id
        self.redraw()

    def visible_shapes(self) -> List[ShapeRevision]:
        """Description: Collapsed scene with the in-flight gesture preview swapped in
        Inputs: None
        """
        scene = list(self.log.collapse())
        preview = self._session.preview
        if preview is None:
            return scene
        shapes = [shape for shape in scene if shape.id != preview.id]
        shapes.append(preview)
        shapes.sort(key=lambda shape: shape.z_index)
        return shapes

    def redraw(self) -> None:
        if self.surface is None:
            return
        selected = self.get_selected_shape()
        preview = self._session.preview
        if selected is not None and preview is not None and preview.id == selected.id:
            selected = preview
        renderer.render_scene(self.surface, self.viewport, self.visible_shapes(), selected)

    # Pointer input ----------------------------------------------------------

    def apply_pointer_down(self, screen: Point, tool: Union[Tool, str, None] = None) -> None:
        """Description: Start a gesture for the active tool
        Inputs: screen: Point, tool: Union[Tool, str, None]
        """
        if tool is not None and tool != self.tool:
            self.set_tool(tool)
        if self._session.pressed:
            # A second press without a release abandons the first gesture.
            self.cancel_gesture()

        world = self.viewport.to_world(screen)
        session = SessionState(pressed=True, start_world=world, last_world=world)
        self._session = session

        if self.tool == Tool.PAN:
            session.mode = InteractionMode.PANNING
            self.viewport.begin_pan(screen)
        elif self.tool.is_freehand:
            session.mode = InteractionMode.FREEHAND_DRAWING
            session.shape_id = new_shape_id()
        elif self.tool.is_shape:
            session.mode = InteractionMode.SHAPE_DRAFTING
            session.shape_id = new_shape_id()
        elif self.tool == Tool.SELECT:
            self._press_select(world)

    def _press_select(self, world: Coordinate) -> None:
        session = self._session
        selected = self.get_selected_shape()
        if selected is not None:
            direction = handle_at(selected, world, self.viewport.zoom)
            if direction is not None:
                session.mode = InteractionMode.RESIZING
                session.direction = direction
                session.snapshot = selected
                return
            if contains(selected, world):
                session.mode = InteractionMode.MOVING
                session.snapshot = selected
                return
        hit = shape_at(world, self.log.collapse())
        self.select(hit.id if hit else None)

    def apply_pointer_move(self, screen: Point) -> None:
        """Description: Advance the active gesture
        Inputs: screen: Point
        """
        session = self._session
        if not session.pressed:
            return
        world = self.viewport.to_world(screen)
        mode = session.mode

        if mode == InteractionMode.PANNING:
            self.viewport.pan_to(screen)
            self.redraw()
        elif mode == InteractionMode.FREEHAND_DRAWING:
            segment = Segment(session.last_world, world)
            session.segments.append(segment)
            session.last_world = world
            if self.surface is not None:
                color, _fill = self._freehand_colors()
                width = self.stroke_width * config.ERASER_SCALE if self.tool == Tool.ERASER else self.stroke_width
                renderer.draw_segment(self.surface, segment, color, width)
        elif mode == InteractionMode.SHAPE_DRAFTING:
            session.preview = self._draft(world)
            self.redraw()
        elif mode == InteractionMode.MOVING:
            dx, dy = self._drag_delta(world)
            session.preview = session.snapshot.translated(dx, dy)
            self.redraw()
        elif mode == InteractionMode.RESIZING:
            dx, dy = self._drag_delta(world)
            session.preview = resized(session.snapshot, session.direction, dx, dy)
            self.redraw()

    def apply_pointer_up(self, screen: Point) -> None:
        """Description: Finish the active gesture and append its revision
        Inputs: screen: Point
        """
        session = self._session
        if not session.pressed:
            return
        world = self.viewport.to_world(screen)
        mode = session.mode
        revision: Optional[ShapeRevision] = None

        if mode == InteractionMode.PANNING:
            self.viewport.end_pan()
        elif mode == InteractionMode.FREEHAND_DRAWING:
            if session.segments:
                stroke, fill = self._freehand_colors()
                revision = self._new_revision(self.tool.tool_kind, session.segments, stroke, fill)
        elif mode == InteractionMode.SHAPE_DRAFTING:
            draft = self._draft(world)
            if draft.segments[0].start != draft.segments[0].end:
                revision = draft
        elif mode == InteractionMode.MOVING:
            dx, dy = self._drag_delta(world)
            if dx or dy:
                revision = session.snapshot.translated(dx, dy)
        elif mode == InteractionMode.RESIZING:
            dx, dy = self._drag_delta(world)
            revision = resized(session.snapshot, session.direction, dx, dy)
        elif self.tool == Tool.FILL:
            revision = self._fill_at(world)

        self._session = SessionState()
        if revision is not None:
            self._commit(revision)
        else:
            self.redraw()

    def cancel_gesture(self) -> None:
        """Description: Drop the in-flight gesture without appending
        Inputs: None
        """
        if self._session.mode == InteractionMode.PANNING:
            self.viewport.cancel_pan()
        self._session = SessionState()
        self.redraw()

    def apply_wheel_zoom(self, direction: float) -> bool:
        """Description: Step zoom in (direction > 0) or out (direction < 0)
        Inputs: direction: float
        """
        if direction > 0:
            changed = self.viewport.zoom_in()
        elif direction < 0:
            changed = self.viewport.zoom_out()
        else:
            changed = False
        if changed:
            self.redraw()
        return changed

    def apply_resize(self, size: Point) -> None:
        self.viewport.resize(size[0], size[1])
        self.redraw()

    def cursor_at(self, screen: Point) -> Cursor:
        """Description: Cursor for the pointer position and active tool
        Inputs: screen: Point
        """
        if self.tool == Tool.PAN:
            return Cursor.MOVE
        if self.tool in (Tool.ERASER, Tool.FILL):
            return Cursor.NONE
        if self.tool != Tool.SELECT:
            return Cursor.CROSSHAIR
        session = self._session
        if session.mode == InteractionMode.MOVING:
            return Cursor.GRABBING
        if session.mode == InteractionMode.RESIZING:
            return RESIZE_CURSORS[session.direction]
        selected = self.get_selected_shape()
        if selected is None:
            return Cursor.DEFAULT
        world = self.viewport.to_world(screen)
        direction = handle_at(selected, world, self.viewport.zoom)
        if direction is not None:
            return RESIZE_CURSORS[direction]
        if contains(selected, world):
            return Cursor.GRAB
        return Cursor.DEFAULT

    # Commands ---------------------------------------------------------------

    def dispatch_action(self, action: Union[CanvasAction, str], payload: object = None) -> Optional[str]:
        """Description: Run a toolbar command
        Inputs: action: Union[CanvasAction, str], payload: object
        """
        action = CanvasAction(action)
        logger.debug("Action %s", action.value)
        result = self._actions[action](payload)
        return result if isinstance(result, str) else None

    def new_canvas(self) -> None:
        self.log.reset()
        self._selected_id = None
        self._session = SessionState()
        self._changed()

    def undo(self) -> bool:
        return self._step_history(self.log.undo_last)

    def redo(self) -> bool:
        return self._step_history(self.log.redo_last)

    def _step_history(self, step: Callable[[], Optional[ShapeRevision]]) -> bool:
        # The selected id may no longer name the same head afterwards.
        self._selected_id = None
        self.cancel_gesture()
        revision = step()
        if revision is None:
            return False
        self._changed()
        return True

    def move_forward(self) -> bool:
        selected = self.get_selected_shape()
        if selected is None:
            return False
        self._commit(selected.revise(z_index=self._max_z_index() + 1))
        return True

    def move_backward(self) -> bool:
        selected = self.get_selected_shape()
        if selected is None:
            return False
        self._commit(selected.revise(z_index=self._min_z_index() - 1))
        return True

    def copy_selected(self) -> Optional[ShapeRevision]:
        """Description: Duplicate the selection next to the viewport's top-left corner
        Inputs: None
        """
        selected = self.get_selected_shape()
        if selected is None:
            return None
        min_x, min_y, _max_x, _max_y = bounding_box(selected)
        target = self.viewport.to_world(config.COPY_TARGET_SCREEN)
        copy = selected.translated(target.x - min_x, target.y - min_y).revise(
            id=new_shape_id(),
            z_index=self._max_z_index() + 1,
        )
        self._selected_id = copy.id
        self._commit(copy)
        return copy

    def delete_selected(self) -> bool:
        selected = self.get_selected_shape()
        if selected is None:
            return False
        self._selected_id = None
        self._commit(selected.revise(disabled=True))
        return True

    def set_tool(self, tool: Union[Tool, str]) -> None:
        """Description: Switch tools, abandoning any in-flight drag
        Inputs: tool: Union[Tool, str]
        """
        try:
            tool = Tool(tool)
        except ValueError:
            self._notify("warning", f"Unknown tool {tool!r}.")
            return
        self.cancel_gesture()
        self.tool = tool
        logger.debug("Tool %s", tool.value)

    def set_stroke_color(self, color: object) -> bool:
        normalized = self._normalize_color(color)
        if normalized is None:
            return False
        self.stroke_color = normalized
        return True

    def set_fill_color(self, color: object) -> bool:
        normalized = self._normalize_color(color)
        if normalized is None:
            return False
        self.fill_color = normalized
        return True

    def set_stroke_width(self, width: object) -> bool:
        if isinstance(width, bool) or not isinstance(width, (int, float)) or width <= 0:
            self._notify("warning", f"Stroke width must be a positive number, got {width!r}.")
            return False
        self.stroke_width = width
        return True

    # Persistence ------------------------------------------------------------

    def export_document(self, include_log: bool = False) -> str:
        """Description: Encode the collapsed scene, or the raw log
        Inputs: include_log: bool
        """
        if include_log:
            return storage.encode_document(self.log.entries, storage.CONTENT_LOG)
        return storage.encode_document(self.log.collapse(), storage.CONTENT_SCENE)

    def import_document(self, text: str) -> bool:
        """Description: Replace the log with a validated document
        Inputs: text: str
        """
        try:
            revisions = storage.decode_document(text)
        except storage.InvalidDocumentError as exc:
            logger.warning("Import rejected: %s", exc)
            self._notify("warning", f"Import rejected: {exc}")
            return False
        self._session = SessionState()
        self._selected_id = None
        self.log.replace(revisions)
        logger.info("Imported %d revisions", len(revisions))
        self._changed()
        return True

    def _save(self, path: object) -> Optional[str]:
        return self._write(path, self.export_document(include_log=True))

    def _export(self, path: object) -> Optional[str]:
        return self._write(path, self.export_document(include_log=False))

    def _write(self, path: object, text: str) -> Optional[str]:
        if path:
            try:
                storage.save_document(str(path), text)
            except OSError as exc:
                self._notify("error", f"Could not write {path}: {exc}")
                return None
        return text

    def _import(self, path: object) -> bool:
        if not path:
            return False
        try:
            text = storage.load_document(str(path))
        except (OSError, UnicodeDecodeError) as exc:
            self._notify("error", f"Could not read {path}: {exc}")
            return False
        return self.import_document(text)

    # Helpers ----------------------------------------------------------------

    def _commit(self, revision: ShapeRevision) -> None:
        self.log.append(revision)
        self._changed()

    def _changed(self) -> None:
        self.redraw()
        if self._on_change:
            self._on_change()

    def _drag_delta(self, world: Coordinate) -> Tuple[float, float]:
        start = self._session.start_world
        return world.x - start.x, world.y - start.y

    def _draft(self, world: Coordinate) -> ShapeRevision:
        kind = self.tool.tool_kind
        segment = segment_from_drag(self._session.start_world, world, kind in SYMMETRIC_KINDS)
        return self._new_revision(kind, [segment], self.stroke_color, self.fill_color)

    def _new_revision(self, kind: ToolKind, segments: Sequence[Segment], stroke: str, fill: str) -> ShapeRevision:
        return ShapeRevision(
            id=self._session.shape_id or new_shape_id(),
            tool_kind=kind,
            stroke_color=stroke,
            fill_color=fill,
            stroke_width=self.stroke_width,
            z_index=self._max_z_index() + 1,
            segments=tuple(segments),
        )

    def _freehand_colors(self) -> Tuple[str, str]:
        if self.tool == Tool.ERASER:
            return config.BACKGROUND_COLOR, config.BACKGROUND_COLOR
        return self.stroke_color, self.fill_color

    def _fill_at(self, world: Coordinate) -> Optional[ShapeRevision]:
        target = fill_target(world, self.log.collapse())
        if target is None or target.tool_kind == ToolKind.LINE:
            self._notify("warning", FILL_TARGET_WARNING)
            return None
        if colors.same_color(target.fill_color, self.fill_color):
            return None
        return target.revise(fill_color=self.fill_color)

    def _max_z_index(self) -> int:
        scene = self.log.collapse()
        if not scene:
            return -1
        return scene[-1].z_index

    def _min_z_index(self) -> int:
        scene = self.log.collapse()
        if not scene:
            return 1
        return scene[0].z_index

    def _normalize_color(self, color: object) -> Optional[str]:
        if not isinstance(color, str) or not colors.is_color_like(color):
            self._notify("warning", f"Unrecognized color {color!r}.")
            return None
        return colors.to_hex(color)
