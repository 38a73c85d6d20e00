"""
artboard_presets.py — Standard artboard formats.

Print formats are sized at 300 DPI from their paper size in millimeters;
screen formats are plain pixel sizes at 96 DPI.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from ..schema import Size
from .units import PRINT_DPI, SCREEN_DPI, mm_to_px


class PresetCategory(str, Enum):
    PRINT = "print"
    PRESENTATION = "presentation"
    WEB = "web"
    DISPLAY = "display"
    MOBILE = "mobile"


@dataclass(frozen=True)
class ArtboardPreset:
    """A named artboard format."""
    format: str
    category: PresetCategory
    width_px: int
    height_px: int
    dpi: int
    label: str
    width_mm: Optional[float] = None
    height_mm: Optional[float] = None

    @property
    def dimensions(self) -> Size:
        return Size(width=self.width_px, height=self.height_px)

    @property
    def aspect_ratio(self) -> float:
        return self.width_px / self.height_px


def _paper(fmt: str, width_mm: float, height_mm: float, label: str) -> ArtboardPreset:
    return ArtboardPreset(
        format=fmt,
        category=PresetCategory.PRINT,
        width_px=mm_to_px(width_mm, PRINT_DPI),
        height_px=mm_to_px(height_mm, PRINT_DPI),
        dpi=PRINT_DPI,
        label=f"{label} ({width_mm:g}×{height_mm:g}mm)",
        width_mm=width_mm,
        height_mm=height_mm,
    )


def _screen(fmt: str, category: PresetCategory, width: int, height: int, label: str) -> ArtboardPreset:
    return ArtboardPreset(
        format=fmt,
        category=category,
        width_px=width,
        height_px=height,
        dpi=SCREEN_DPI,
        label=f"{label} ({width}×{height}px)",
    )


# =============================================================================
# PRESET REGISTRY
# =============================================================================

ARTBOARD_PRESETS: Dict[str, ArtboardPreset] = {
    p.format: p
    for p in (
        # Print
        _paper("a4-portrait", 210, 297, "A4 Portrait"),
        _paper("a4-landscape", 297, 210, "A4 Landscape"),
        _paper("a3-portrait", 297, 420, "A3 Portrait"),
        _paper("a3-landscape", 420, 297, "A3 Landscape"),
        _paper("a2-portrait", 420, 594, "A2 Portrait"),
        _paper("a2-landscape", 594, 420, "A2 Landscape"),
        # Presentation
        _screen("slide-16-9", PresetCategory.PRESENTATION, 1920, 1080, "16:9 Slide"),
        _screen("slide-4-3", PresetCategory.PRESENTATION, 1024, 768, "4:3 Slide"),
        # Web
        _screen("web-1440", PresetCategory.WEB, 1440, 900, "Web 1440px"),
        _screen("web-responsive", PresetCategory.WEB, 1280, 800, "Web Responsive"),
        # Display
        _screen("display-fhd", PresetCategory.DISPLAY, 1920, 1080, "Full HD Display"),
        _screen("display-4k", PresetCategory.DISPLAY, 3840, 2160, "4K Display"),
        # Mobile
        _screen("mobile-portrait", PresetCategory.MOBILE, 375, 667, "Mobile Portrait"),
        _screen("mobile-landscape", PresetCategory.MOBILE, 667, 375, "Mobile Landscape"),
    )
}

DEFAULT_PRESET = "slide-16-9"


def get_preset(fmt: str) -> ArtboardPreset:
    """Look up a preset by format name. Raises ValueError for unknown formats."""
    try:
        return ARTBOARD_PRESETS[fmt]
    except KeyError:
        raise ValueError(
            f"Unknown artboard format '{fmt}'. Available: {', '.join(ARTBOARD_PRESETS)}"
        ) from None


def presets_by_category(category: PresetCategory) -> List[ArtboardPreset]:
    return [p for p in ARTBOARD_PRESETS.values() if p.category == category]
