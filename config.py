# Configuration values for the vector whiteboard.

WINDOW_TITLE = "Vector Whiteboard"
WINDOW_GEOMETRY = "1280x800"

DOCUMENT_FORMAT = "vector-whiteboard"
DOCUMENT_VERSION = 1
PROJECT_EXTENSION = ".whiteboard.json"
EXPORT_EXTENSION = ".scene.json"

BACKGROUND_COLOR = "#ffffff"
SELECTION_COLOR = "#000000"

COLORS = [
    "#000000",
    "#ffffff",
    "#ff4d4d",
    "#ff9500",
    "#ffd60a",
    "#32d74b",
    "#0a84ff",
    "#bf5af2",
]

THEME = {
    "bg": "#1f2125",
    "panel": "#262a30",
    "panel_alt": "#2f343c",
    "text": "#e6e6e6",
    "accent": "#0a84ff",
}

DEFAULT_STROKE = "#000000"
DEFAULT_FILL = "#ffffff"
DEFAULT_STROKE_WIDTH = 2
# Toolbar sizes are doubled before being applied.
STROKE_SIZES = [1, 2, 3, 4, 5]

ERASER_SCALE = 4

ZOOM_MIN = 0.5
ZOOM_MAX = 5.0
ZOOM_STEP = 0.1
PAN_PRECISION = 3

SELECT_BORDER_WIDTH = 2
SELECT_BORDER_DASH = (10, 10)
SELECT_BOX_PADDING = 10
HANDLE_TOLERANCE = 8

# Screen point where the top-left corner of a copied shape lands.
COPY_TARGET_SCREEN = (40.0, 40.0)

CIRCLE_SEGMENTS = 64

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
