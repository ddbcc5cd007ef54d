from __future__ import annotations

import logging
import tkinter as tk
from tkinter import colorchooser, filedialog, messagebox

import config
from canvas_controller import CanvasAction
from canvas_view import CanvasView
from logging_config import setup_logging
from model import Tool

logger = logging.getLogger(__name__)

TOOL_SPECS = [
    ("Select", Tool.SELECT),
    ("Pan", Tool.PAN),
    ("Draw", Tool.DRAW),
    ("Eraser", Tool.ERASER),
    ("Fill", Tool.FILL),
    ("Line", Tool.LINE),
    ("Rect", Tool.RECTANGLE),
    ("Square", Tool.SQUARE),
    ("Circle", Tool.CIRCLE),
    ("Tri Up", Tool.TRIANGLE_UP),
    ("Tri Down", Tool.TRIANGLE_DOWN),
    ("Tri Left", Tool.TRIANGLE_LEFT),
    ("Tri Right", Tool.TRIANGLE_RIGHT),
]

ACTION_SPECS = [
    CanvasAction.UNDO,
    CanvasAction.REDO,
    CanvasAction.ZOOM_IN,
    CanvasAction.ZOOM_OUT,
    CanvasAction.MOVE_FORWARD,
    CanvasAction.MOVE_BACKWARD,
    CanvasAction.COPY,
    CanvasAction.DELETE,
]


class WhiteboardApp:
    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(config.WINDOW_TITLE)
        self.root.configure(bg=config.THEME["bg"])
        self.root.geometry(config.WINDOW_GEOMETRY)

        self.is_dirty = False
        self._status_var = tk.StringVar()
        self._stroke_size_var = tk.IntVar(value=config.DEFAULT_STROKE_WIDTH // 2)

        self._build_menu()
        self._build_layout()
        self._bind_shortcuts()

        self._set_tool(Tool.SELECT)
        self._update_status()

    @property
    def controller(self):
        return self.canvas_view.controller

    def run(self) -> None:
        self.root.mainloop()

    def _build_menu(self) -> None:
        menu = tk.Menu(self.root)
        self.root.config(menu=menu)

        file_menu = tk.Menu(menu, tearoff=0)
        file_menu.add_command(label="New", command=self.new_canvas)
        file_menu.add_command(label="Save...", command=self.save)
        file_menu.add_command(label="Export...", command=self.export)
        file_menu.add_command(label="Import...", command=self.import_file)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.root.quit)
        menu.add_cascade(label="File", menu=file_menu)

        edit_menu = tk.Menu(menu, tearoff=0)
        for action in ACTION_SPECS:
            edit_menu.add_command(label=action.value, command=lambda a=action: self._dispatch(a))
        menu.add_cascade(label="Edit", menu=edit_menu)

    def _build_layout(self) -> None:
        self.main_frame = tk.Frame(self.root, bg=config.THEME["bg"])
        self.main_frame.pack(fill=tk.BOTH, expand=True)
        self.main_frame.columnconfigure(1, weight=1)
        self.main_frame.rowconfigure(0, weight=1)

        self.toolbar_frame = tk.Frame(self.main_frame, bg=config.THEME["panel"], padx=10, pady=10)
        self.toolbar_frame.grid(row=0, column=0, sticky="ns")

        self.canvas_frame = tk.Frame(self.main_frame, bg=config.THEME["bg"], padx=8, pady=8)
        self.canvas_frame.grid(row=0, column=1, sticky="nsew")
        self.canvas_frame.rowconfigure(0, weight=1)
        self.canvas_frame.columnconfigure(0, weight=1)

        self.canvas_view = CanvasView(
            self.canvas_frame,
            notify=self._show_notification,
            on_change=self._mark_dirty,
            on_view_changed=self._update_status,
        )
        self.canvas_view.canvas.grid(row=0, column=0, sticky="nsew")

        self._build_toolbar()
        self._build_status_bar()

    def _button(self, parent: tk.Widget, text: str, command) -> tk.Button:
        return tk.Button(
            parent,
            text=text,
            command=command,
            bg=config.THEME["panel_alt"],
            fg=config.THEME["text"],
            activebackground=config.THEME["accent"],
            activeforeground=config.THEME["text"],
            relief=tk.FLAT,
            width=12,
            pady=3,
        )

    def _build_toolbar(self) -> None:
        header = tk.Label(self.toolbar_frame, text="Tools", bg=config.THEME["panel"], fg=config.THEME["text"], font=("Segoe UI", 12, "bold"))
        header.pack(anchor="w", pady=(0, 8))

        self.tool_buttons: dict[Tool, tk.Button] = {}
        for label, tool in TOOL_SPECS:
            button = self._button(self.toolbar_frame, label, lambda t=tool: self._set_tool(t))
            button.pack(fill=tk.X, pady=2)
            self.tool_buttons[tool] = button

        sep = tk.Frame(self.toolbar_frame, bg=config.THEME["panel_alt"], height=2)
        sep.pack(fill=tk.X, pady=8)

        self.stroke_button = self._button(self.toolbar_frame, "Stroke Color", self._choose_stroke_color)
        self.stroke_button.pack(fill=tk.X, pady=2)
        self.fill_button = self._button(self.toolbar_frame, "Fill Color", self._choose_fill_color)
        self.fill_button.pack(fill=tk.X, pady=2)

        size_menu = tk.OptionMenu(self.toolbar_frame, self._stroke_size_var, *config.STROKE_SIZES, command=self._on_stroke_size)
        size_menu.configure(bg=config.THEME["panel_alt"], fg=config.THEME["text"], relief=tk.FLAT, highlightthickness=0)
        size_menu.pack(fill=tk.X, pady=2)

    def _build_status_bar(self) -> None:
        status = tk.Label(self.root, textvariable=self._status_var, anchor="w", bg=config.THEME["panel"], fg=config.THEME["text"], padx=8)
        status.pack(fill=tk.X, side=tk.BOTTOM)

    def _bind_shortcuts(self) -> None:
        self.root.bind("<Control-z>", lambda _event: self._dispatch(CanvasAction.UNDO))
        self.root.bind("<Control-y>", lambda _event: self._dispatch(CanvasAction.REDO))
        self.root.bind("<Control-d>", lambda _event: self._dispatch(CanvasAction.COPY))
        self.root.bind("<Delete>", lambda _event: self._dispatch(CanvasAction.DELETE))
        self.root.bind("<Control-s>", lambda _event: self.save())
        self.root.bind("<Control-o>", lambda _event: self.import_file())
        self.root.bind("<Control-n>", lambda _event: self.new_canvas())

    def _dispatch(self, action: CanvasAction, payload: object = None) -> None:
        self.controller.dispatch_action(action, payload)
        self._update_status()

    def _set_tool(self, tool: Tool) -> None:
        self._dispatch(CanvasAction.SET_TOOL, tool)
        for key, button in self.tool_buttons.items():
            button.configure(bg=config.THEME["accent"] if key == tool else config.THEME["panel_alt"])

    def _choose_stroke_color(self) -> None:
        _rgb, color = colorchooser.askcolor(self.controller.stroke_color, title="Stroke Color")
        if color:
            self._dispatch(CanvasAction.SET_STROKE_COLOR, color)

    def _choose_fill_color(self) -> None:
        _rgb, color = colorchooser.askcolor(self.controller.fill_color, title="Fill Color")
        if color:
            self._dispatch(CanvasAction.SET_FILL_COLOR, color)

    def _on_stroke_size(self, size: int) -> None:
        self._dispatch(CanvasAction.SET_STROKE_WIDTH, int(size) * 2)

    def new_canvas(self) -> None:
        if not self._confirm_discard():
            return
        self._dispatch(CanvasAction.NEW)
        self.is_dirty = False
        self._update_status()

    def save(self) -> None:
        path = filedialog.asksaveasfilename(
            defaultextension=config.PROJECT_EXTENSION,
            filetypes=[("Whiteboard Project", f"*{config.PROJECT_EXTENSION}"), ("JSON", "*.json")],
        )
        if not path:
            return
        if self.controller.dispatch_action(CanvasAction.SAVE, path) is not None:
            self.is_dirty = False
            self._update_status()

    def export(self) -> None:
        path = filedialog.asksaveasfilename(
            defaultextension=config.EXPORT_EXTENSION,
            filetypes=[("Whiteboard Scene", f"*{config.EXPORT_EXTENSION}"), ("JSON", "*.json")],
        )
        if not path:
            return
        self._dispatch(CanvasAction.EXPORT, path)

    def import_file(self) -> None:
        if not self._confirm_discard():
            return
        path = filedialog.askopenfilename(
            filetypes=[("Whiteboard", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        self._dispatch(CanvasAction.IMPORT, path)

    def _show_notification(self, level: str, message: str) -> None:
        if level == "error":
            logger.error(message)
            messagebox.showerror(config.WINDOW_TITLE, message)
        else:
            logger.warning(message)
            messagebox.showwarning(config.WINDOW_TITLE, message)

    def _mark_dirty(self) -> None:
        self.is_dirty = True
        self._update_status()

    def _update_status(self) -> None:
        controller = self.controller
        dirty = " *" if self.is_dirty else ""
        self._status_var.set(
            f"Tool: {controller.tool.value}  |  Zoom: {controller.viewport.zoom:.0%}  |  "
            f"Shapes: {len(controller.get_collapsed_scene())}  |  Revisions: {len(controller.log)}{dirty}"
        )

    def _confirm_discard(self) -> bool:
        if not self.is_dirty:
            return True
        return messagebox.askyesno("Unsaved Changes", "You have unsaved changes. Continue?")


def run_app() -> None:
    setup_logging()
    app = WhiteboardApp()
    app.run()
