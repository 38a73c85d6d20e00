"""
component_sizes.py — Per-type sizing tables for components.

Two views of the same catalogue:
- Pixel sizes (default on drop, min/max for resize, optional locked ratio)
- Intrinsic grid sizes used by the auto-layout packer (cols/rows out of 12)

Unknown component types fall back to the "default" entry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..schema import Size

DEFAULT_TYPE = "default"


class SizeMode(Enum):
    """How a component wants to be sized inside the layout grid."""
    INTRINSIC = "intrinsic"       # Size based on content
    FIXED_RATIO = "fixed-ratio"   # Maintains aspect ratio (charts)
    FILL = "fill"                 # Fills available width, intrinsic height
    FULL = "full"                 # Fills entire container


@dataclass(frozen=True)
class IntrinsicSize:
    """Grid sizing rule for one component type."""
    min_cols: int
    max_cols: int
    default_cols: int
    min_rows: int
    max_rows: int
    default_rows: int
    aspect_ratio: Optional[float] = None   # width / height, None = flexible
    size_mode: SizeMode = SizeMode.INTRINSIC

    @property
    def has_fixed_ratio(self) -> bool:
        return self.aspect_ratio is not None and self.size_mode == SizeMode.FIXED_RATIO


# =============================================================================
# PIXEL SIZES
# =============================================================================

DEFAULT_SIZES: Dict[str, Size] = {
    "chart-line": Size(width=400, height=250),
    "chart-bar": Size(width=400, height=250),
    "chart-doughnut": Size(width=280, height=280),
    "chart": Size(width=400, height=250),
    "heading": Size(width=300, height=48),
    "kpi": Size(width=180, height=120),
    DEFAULT_TYPE: Size(width=280, height=200),
}

MIN_SIZES: Dict[str, Size] = {
    "chart-line": Size(width=200, height=150),
    "chart-bar": Size(width=200, height=150),
    "chart-doughnut": Size(width=150, height=150),
    "chart": Size(width=200, height=150),
    "heading": Size(width=80, height=32),
    "kpi": Size(width=100, height=80),
    DEFAULT_TYPE: Size(width=80, height=60),
}

# None = unbounded
MAX_SIZES: Dict[str, Optional[Size]] = {
    "heading": Size(width=800, height=120),
    "kpi": Size(width=400, height=300),
}

ASPECT_RATIOS: Dict[str, Optional[float]] = {
    "chart-doughnut": 1.0,
}

# =============================================================================
# INTRINSIC GRID SIZES
# =============================================================================

INTRINSIC_SIZES: Dict[str, IntrinsicSize] = {
    # Charts keep wide/square ratios for legible plots
    "chart-line": IntrinsicSize(4, 12, 6, 3, 8, 4, 16 / 9, SizeMode.FIXED_RATIO),
    "chart-bar": IntrinsicSize(4, 12, 6, 3, 8, 4, 16 / 9, SizeMode.FIXED_RATIO),
    "chart-doughnut": IntrinsicSize(3, 6, 4, 3, 6, 4, 1.0, SizeMode.FIXED_RATIO),
    "chart": IntrinsicSize(4, 12, 6, 3, 8, 4, 16 / 9, SizeMode.FIXED_RATIO),
    # Full width by default, wraps text
    "heading": IntrinsicSize(2, 12, 12, 1, 2, 1, None, SizeMode.FILL),
    "kpi": IntrinsicSize(2, 6, 3, 2, 4, 3, None, SizeMode.INTRINSIC),
    DEFAULT_TYPE: IntrinsicSize(3, 12, 6, 2, 6, 3, None, SizeMode.INTRINSIC),
}


# =============================================================================
# LOOKUPS
# =============================================================================

def get_default_size(component_type: str) -> Size:
    return DEFAULT_SIZES.get(component_type, DEFAULT_SIZES[DEFAULT_TYPE])


def get_min_size(component_type: str) -> Size:
    return MIN_SIZES.get(component_type, MIN_SIZES[DEFAULT_TYPE])


def get_max_size(component_type: str) -> Optional[Size]:
    return MAX_SIZES.get(component_type)


def get_aspect_ratio(component_type: str) -> Optional[float]:
    return ASPECT_RATIOS.get(component_type)


def get_intrinsic_size(component_type: str) -> IntrinsicSize:
    return INTRINSIC_SIZES.get(component_type, INTRINSIC_SIZES[DEFAULT_TYPE])
