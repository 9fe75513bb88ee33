"""
Layer Aligner - Constants and Configuration

This module contains all constant values used throughout the application:
- Layer geometry limits and placeholder geometry for freshly imported images
- History capacity
- Default reference points and guide line positions
- Interaction hit regions and snapping thresholds
- Alignment solver defaults
- Accepted image types and display presets
"""

# ======================================================================
# LAYER GEOMETRY
# ======================================================================

# Floor for width/height after any interactive resize (canvas pixels)
MIN_LAYER_SIZE = 50

# Placeholder geometry used until the image has been decoded.
# Layer i of a batch is offset by i * PLACEHOLDER_STAGGER on both axes.
PLACEHOLDER_X = 100
PLACEHOLDER_Y = 100
PLACEHOLDER_STAGGER = 40
PLACEHOLDER_WIDTH = 300
PLACEHOLDER_HEIGHT = 200
PLACEHOLDER_ASPECT_RATIO = 1.0

# Initial layout: layers fill this fraction of the canvas height, centred
LAYOUT_HEIGHT_FRACTION = 0.8
# Canvas must be at least this large (both axes) before layout runs
MIN_LAYOUT_BOUNDS = 10

# ======================================================================
# HISTORY
# ======================================================================

MAX_HISTORY_ENTRIES = 50

# ======================================================================
# REFERENCE POINTS (normalized image space, 0-1)
# ======================================================================

DEFAULT_BODY_TOP_Y = 0.2
DEFAULT_FACE_BOTTOM_Y = 0.5
DEFAULT_BODY_BOTTOM_Y = 0.8
DEFAULT_EYE_LEFT = (0.35, 0.45)
DEFAULT_EYE_RIGHT = (0.65, 0.45)

# X used when drawing/mapping the horizontal reference lines
REFERENCE_LINE_X = 0.5

# ======================================================================
# GUIDE LINES (normalized canvas space, 0-1)
# ======================================================================

DEFAULT_GUIDE_H1 = 0.33
DEFAULT_GUIDE_H2 = 0.5
DEFAULT_GUIDE_H3 = 0.67
DEFAULT_GUIDE_V1 = 0.33
DEFAULT_GUIDE_V2 = 0.67

HORIZONTAL_GUIDES = ('h1', 'h2', 'h3')
VERTICAL_GUIDES = ('v1', 'v2')

# Snap a dragged guide to a layer centre when closer than this (normalized)
GUIDE_SNAP_THRESHOLD = 0.02

# ======================================================================
# INTERACTION
# ======================================================================

RESIZE_HANDLES = ('n', 's', 'e', 'w', 'nw', 'ne', 'sw', 'se')

# Resize handles are squares of this size centred on the box edge/corner
HANDLE_SIZE = 12
# Half-height of the band around a guide line that picks it up (pixels)
GUIDE_HIT_TOLERANCE = 6

# ======================================================================
# ALIGNMENT SOLVER
# ======================================================================

# Normalized spans below this are treated as unmarked/degenerate
ALIGN_MIN_SPAN = 0.01
# Body-bottom gap tolerance = GAP_FRACTION * min(reference body span, GAP_CAP)
ALIGN_GAP_FRACTION = 0.2
ALIGN_GAP_CAP = 50
# Max allowed difference of face/body span ratios between a layer and the reference
ALIGN_RATIO_TOLERANCE = 0.15

# ======================================================================
# IMPORT
# ======================================================================

ACCEPTED_IMAGE_EXTENSIONS = ('png', 'jpeg', 'jpg', 'webp', 'gif')

# ======================================================================
# DISPLAY
# ======================================================================

PRESET_BG_COLORS = [
    '#ffffff',
    '#000000',
    '#f3f4f6',
    '#1f2937',
    '#fef3c7',
    '#dbeafe',
]
DEFAULT_BG_COLOR = '#ffffff'

# Opacity slider snap points (1/N is added for N layers)
OPACITY_BASE_SNAP_POINTS = (0.0, 0.1, 0.25, 1 / 3, 0.5, 0.75, 1.0)

# Colours used by the canvas painter
BORDER_COLOR = '#52525b'
SELECTED_BORDER_COLOR = '#f59e0b'
GUIDE_COLOR = '#06b6d4'
MARKER_COLOR = '#ef4444'

# ======================================================================
# CONFIG FILE
# ======================================================================

CONFIG_DIR_NAME = '.layer_aligner'
CONFIG_FILE_NAME = 'config.json'
