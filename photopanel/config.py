"""Panel limits, geometry constants and environment overrides."""
import os

MM_PER_INCH = 25.4

# === PANEL LIMITS (inches) ===
MIN_WIDTH = 1.0
MIN_HEIGHT, MAX_HEIGHT = 1.0, 35.0
MIN_DEPTH, MAX_DEPTH = 0.1, 1.0
DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_DEPTH = 10.0, 6.0, 0.5

# === CHAMFER ===
CHAMFER_RATIO = 0.3
MIN_CHAMFER = 0.001
CHAMFER_ANGLE_DEG = 45
MIN_PRINTABLE = 0.01
MIN_STRAIGHT_DEPTH = 0.01

# === SCREW HOLES ===
EDGE_OFFSET = 0.5
SCREW_HOLE_RADIUS = 2.0 / MM_PER_INCH  # M4 nominal
HOLE_KEEPOUT = 0.01
HOLE_SEGMENTS = 32

# === LAYOUT ===
MAX_SLOTS = 4
GRID_COLS, GRID_ROWS = 2, 2
MIN_CONTENT_PX = 1.0
MIN_CONTENT_IN = 0.01
MIN_MATCHED = 1.0
SNAP_MARGIN = 0.01

# === RASTER ===
BASE_SIZE = 1024
DEFAULT_PPI = float(os.environ.get('PHOTOPANEL_PPI', 200))
MAX_TEXTURE_SIZE = int(os.environ.get('PHOTOPANEL_MAX_TEXTURE', 4096))
MAX_COUNT_SCALE = 2.0

# === SERVICE ===
PORT = int(os.environ.get('PORT', 5000))
LOG_LEVEL = os.environ.get('PHOTOPANEL_LOG_LEVEL', 'INFO').upper()
VERSION = '1.0'
