"""
units.py — Interaction constants and scalar helpers.

This is the foundation module. ALL snapping, packing and zoom math uses these
constants as defaults. Never hardcode them anywhere else in the codebase;
runtime overrides come from canvaslayout.config.EngineSettings.

All distances are artboard-local pixels (canvas/world px, not screen px).
"""

import math

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

MM_PER_INCH = 25.4
PRINT_DPI = 300
SCREEN_DPI = 96


def mm_to_px(mm: float, dpi: int) -> int:
    """Convert millimeters to whole pixels at a given DPI."""
    return round(mm / MM_PER_INCH * dpi)


def px_to_mm(px: float, dpi: int) -> float:
    """Convert pixels back to millimeters."""
    return px / dpi * MM_PER_INCH


# =============================================================================
# SNAPPING
# =============================================================================

GRID_SIZE_PX = 8          # Grid unit for position/edge snapping
SNAP_THRESHOLD_PX = 8     # Max distance for an alignment guide to engage

# =============================================================================
# COLLISION SEARCH
# =============================================================================

COLLISION_SEARCH_RADIUS = 20   # Rings of grid units probed around a placement

# =============================================================================
# AUTO-LAYOUT GRID
# =============================================================================

LAYOUT_COLUMNS = 12
LAYOUT_ROW_HEIGHT_PX = 40
LAYOUT_GAP_PX = 8
LAYOUT_ROW_LIMIT = 100     # Safety limit before forced placement
LAYOUT_INITIAL_ROWS = 10

# =============================================================================
# VIEWPORT
# =============================================================================

MIN_SCALE = 0.1
MAX_SCALE = 5.0
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9

# =============================================================================
# ARTBOARD PLACEMENT
# =============================================================================

ARTBOARD_SPACING_PX = 100   # Gap between artboards in the horizontal flow
ARTBOARD_ORIGIN_PX = 100    # Top-left of the first artboard

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))


def is_finite(*values: float) -> bool:
    """True if every value is a finite number (no NaN/inf)."""
    return all(math.isfinite(v) for v in values)
