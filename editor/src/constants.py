"""
Grid Map Editor - Constants

Single source of truth for editor defaults, limits and colors.
Models, services and widgets import from here instead of hardcoding values.
"""

# ======================================================================
# APPLICATION
# ======================================================================

APP_NAME = 'GridMapEditor'

# Version tag written into every saved map record
SAVE_FILE_VERSION = '1.0.0'

# Map save file format
MAP_FILE_EXTENSION = '.json'
MAP_FILE_FILTER = 'Map Files (*.json);;All Files (*)'
EXPORT_FILE_FILTER = 'PNG Image (*.png);;All Files (*)'

# ======================================================================
# GRID
# ======================================================================

# Logical cell size in world units; object sizing is relative to this
BASE_CELL_SIZE = 32

MIN_CELL_SIZE = 4
MAX_CELL_SIZE = 256

# Border strip thickness as a fraction of the cell size
BORDER_THICKNESS_RATIO = 0.25

# Grid line width in logical units (export only)
EXPORT_GRID_LINE_WIDTH = 0.02

# Padding (logical units) added around content for export
EXPORT_PADDING = 1

# Export extent when the scene has no content
EMPTY_SCENE_BOUNDS = (0, 0, 10, 10)

DEFAULT_EXPORT_PIXELS_PER_CELL = 32

# ======================================================================
# VIEW
# ======================================================================

MIN_SCALE = 0.1
MAX_SCALE = 10.0

# Wheel zoom: new_scale = scale * (1 - delta_y * ZOOM_INTENSITY)
ZOOM_INTENSITY = 0.001

# ======================================================================
# SHADOWS
# ======================================================================

DEFAULT_SHADOW_ENABLED = False
DEFAULT_SHADOW_ANGLE = 45.0
DEFAULT_SHADOW_OFFSET = 0.5
DEFAULT_SHADOW_COLOR = '#00000080'

# Alpha used when a shadow color carries no alpha byte
DEFAULT_SHADOW_ALPHA = 0x80

# Shadow fragments are skipped below this length / dot product / area
SHADOW_EPSILON = 1e-6

# ======================================================================
# COLORS
# ======================================================================

BACKGROUND_COLOR = '#ffffff'

DEFAULT_EMPTY_FILL_COLOR = '#ffffff'
DEFAULT_EMPTY_BORDER_COLOR = '#e0e0e0'

DEFAULT_DRAW_FILL_COLOR = '#000000'
DEFAULT_DRAW_BORDER_COLOR = '#aaaaaa'

DEFAULT_MARK_FILL_COLOR = '#000000'
DEFAULT_MARK_STROKE_COLOR = '#000000'

# Flat placeholder for assets that are pending or failed
ATTENTION_COLOR = '#ffcc00'
ERROR_COLOR = '#ff00ff'

SELECTION_RECT_COLOR = '#0000ff'
SELECTION_HIGHLIGHT_COLOR = '#00ffff'

# ======================================================================
# DRAWING DEFAULTS
# ======================================================================

# Free-draw mark diameter in cells
DEFAULT_MARK_SIZE = 1.0

# Minimum stroke distance between marks, in cells; 0 = every sample
DEFAULT_MARK_PERIOD = 0.0

DEFAULT_LAYER_NAME = 'Layer {}'

# ======================================================================
# HISTORY MANAGEMENT
# ======================================================================

# Maximum undo/redo history
MAX_HISTORY_ENTRIES = 50

# ======================================================================
# SELECTION ACTIONS
# ======================================================================

ROTATE_STEP_DEGREES = 90.0
SCALE_UP_FACTOR = 2.0
SCALE_DOWN_FACTOR = 0.5

# ======================================================================
# CONFIGURATION / AUTOSAVE
# ======================================================================

CONFIG_DIR_NAME = '.gridmap'
CONFIG_FILE_NAME = 'config.json'
AUTOSAVE_FILE_NAME = 'autosave.json'

MAX_RECENT_FILES = 10

# Autosave interval in milliseconds
AUTOSAVE_INTERVAL_MS = 120000
