APP_NAME = "Outliners"
CONFIG_FILE_NAME = "outliners_config.json"

PANEL_MIN_WIDTH = 220.0
PANEL_MAX_WIDTH = 480.0
PANEL_HEADER_HEIGHT = 28.0
PANEL_ROW_HEIGHT = 22.0
PANEL_FOOTER_HEIGHT = 8.0
PANEL_CLOSE_BUTTON_SIZE = 16.0
PANEL_PADDING = 8.0
HANDLE_SIZE = 12.0
HANDLE_INSET = 14.0
NAME_COLUMN_SHARE = 0.45

VALUE_PANEL_OFFSET = (50.0, 0.0)
NEW_ASSOCIATION_GRAB_OFFSET = (30.0, 0.0)
DEFAULT_PANEL_POSITION = (20.0, 20.0)

ARROW_START_CONTROL_MIN = 10.0
ARROW_CONTROL_DECIMALS = 2
ARROW_HEAD_SIZE = 8.0
ARROW_START_DOT_RADIUS = 2.5
ARROW_LINE_WIDTH = 2
ARROW_END_HANDLE_SIZE = 10.0

ARROW_STYLE_NORMAL = "normal"
ARROW_STYLE_HIDDEN = "hidden"
ARROW_STYLE_FADED = "faded"

MARKER_DRAGGABLE = "draggable"
MARKER_DRAGGING = "dragging"
MARKER_MOVING = "moving"
MARKER_HOVERED = "hovered"
MARKER_SHAKING = "shaking"

MOUSE_POINTER_ID = 1

DEFAULT_ARROW_COLOR = "#3B4252"
DEFAULT_HOVER_COLOR = "#E0A526"
DEFAULT_PANEL_COLOR = "#FDFDF8"
DEFAULT_HEADER_COLOR = "#D8DEE9"
DEFAULT_FADED_OPACITY = 0.3
DEFAULT_SHAKE_DURATION_MS = 400
DEFAULT_LOG_LEVEL = "INFO"

DESCRIPTION_MAX_LENGTH = 40
UNREADABLE_PLACEHOLDER = "<unreadable>"
