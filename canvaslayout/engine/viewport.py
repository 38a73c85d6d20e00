"""
viewport.py — Pan/zoom transform between screen, canvas and artboard space.

Three coordinate spaces:
- screen:   pointer pixels relative to the canvas element
- canvas:   infinite world space; screen = canvas * scale + pan
- artboard: canvas minus the artboard's top-left position

Scale is always clamped to [min_scale, max_scale]. Zoom steps are
multiplicative and preserve the canvas point under the focus.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..schema import Artboard, Point, Size
from .units import MAX_SCALE, MIN_SCALE, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR, clamp, is_finite

if TYPE_CHECKING:
    from ..config import EngineSettings

logger = logging.getLogger(__name__)


class Viewport:
    """Canvas pan and scale."""

    def __init__(
        self,
        scale: float = 1.0,
        pan: Optional[Point] = None,
        min_scale: float = MIN_SCALE,
        max_scale: float = MAX_SCALE,
        zoom_in_factor: float = ZOOM_IN_FACTOR,
        zoom_out_factor: float = ZOOM_OUT_FACTOR,
        size: Optional[Size] = None,
    ):
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.zoom_in_factor = zoom_in_factor
        self.zoom_out_factor = zoom_out_factor
        self.size = size    # Screen size of the canvas element, for centered zoom
        self._scale = self.clamp_scale(scale)
        self._pan = pan or Point()

    @classmethod
    def from_settings(cls, settings: "EngineSettings", **kwargs) -> "Viewport":
        """Build a viewport from an EngineSettings instance."""
        cfg = settings.viewport
        return cls(
            min_scale=cfg.min_scale,
            max_scale=cfg.max_scale,
            zoom_in_factor=cfg.zoom_in_factor,
            zoom_out_factor=cfg.zoom_out_factor,
            **kwargs,
        )

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def pan(self) -> Point:
        return self._pan

    def clamp_scale(self, scale: float) -> float:
        return clamp(scale, self.min_scale, self.max_scale)

    # =========================================================================
    # COORDINATE CONVERSION
    # =========================================================================

    def screen_to_canvas(self, point: Point) -> Point:
        return Point(
            x=(point.x - self._pan.x) / self._scale,
            y=(point.y - self._pan.y) / self._scale,
        )

    def canvas_to_screen(self, point: Point) -> Point:
        return Point(
            x=point.x * self._scale + self._pan.x,
            y=point.y * self._scale + self._pan.y,
        )

    @staticmethod
    def canvas_to_artboard(point: Point, artboard: Artboard) -> Point:
        return Point(x=point.x - artboard.position.x, y=point.y - artboard.position.y)

    @staticmethod
    def artboard_to_canvas(point: Point, artboard: Artboard) -> Point:
        return Point(x=point.x + artboard.position.x, y=point.y + artboard.position.y)

    def screen_to_artboard(self, point: Point, artboard: Artboard) -> Point:
        return self.canvas_to_artboard(self.screen_to_canvas(point), artboard)

    def artboard_to_screen(self, point: Point, artboard: Artboard) -> Point:
        return self.canvas_to_screen(self.artboard_to_canvas(point, artboard))

    def screen_delta_to_canvas(self, dx: float, dy: float) -> Point:
        """Pointer movement in screen pixels → canvas units (pan does not apply)."""
        return Point(x=dx / self._scale, y=dy / self._scale)

    # =========================================================================
    # ZOOM
    # =========================================================================

    def set_scale(self, scale: float, focus: Optional[Point] = None) -> bool:
        """
        Set the scale, keeping the canvas point under `focus` fixed on screen.

        Without a focus the center of `size` is used; without a size the pan is
        left unchanged. Returns False when the clamped scale did not change.
        """
        if not is_finite(scale):
            logger.debug(f"Ignoring non-finite scale {scale}")
            return False

        next_scale = self.clamp_scale(scale)
        if next_scale == self._scale:
            return False

        if focus is None and self.size is not None:
            focus = Point(x=self.size.width / 2, y=self.size.height / 2)

        if focus is not None and is_finite(focus.x, focus.y):
            world = self.screen_to_canvas(focus)
            self._pan = Point(
                x=focus.x - world.x * next_scale,
                y=focus.y - world.y * next_scale,
            )

        logger.debug(f"Zoom {self._scale:.3f} -> {next_scale:.3f}")
        self._scale = next_scale
        return True

    def zoom_by(self, factor: float, focus: Optional[Point] = None) -> bool:
        return self.set_scale(self._scale * factor, focus)

    def zoom_in(self, focus: Optional[Point] = None) -> bool:
        return self.zoom_by(self.zoom_in_factor, focus)

    def zoom_out(self, focus: Optional[Point] = None) -> bool:
        return self.zoom_by(self.zoom_out_factor, focus)

    def reset_zoom(self, focus: Optional[Point] = None) -> bool:
        """Back to 100%."""
        return self.set_scale(1.0, focus)

    def apply_zoom_shortcut(self, key: str, command_key: bool) -> bool:
        """
        Handle Ctrl/Cmd + '=' / '+' (in), '-' (out), '0' (reset).

        Returns True if the key was a zoom shortcut, whether or not the scale
        was already at its limit.
        """
        if not command_key:
            return False
        if key in ("=", "+"):
            self.zoom_in()
        elif key == "-":
            self.zoom_out()
        elif key == "0":
            self.reset_zoom()
        else:
            return False
        return True

    # =========================================================================
    # PAN
    # =========================================================================

    def set_pan(self, x: float, y: float) -> None:
        if not is_finite(x, y):
            logger.debug(f"Ignoring non-finite pan ({x}, {y})")
            return
        self._pan = Point(x=x, y=y)

    def pan_by(self, dx: float, dy: float) -> None:
        """Move the canvas by a screen-space delta."""
        self.set_pan(self._pan.x + dx, self._pan.y + dy)

    def __repr__(self) -> str:
        return f"Viewport(scale={self._scale}, pan=({self._pan.x}, {self._pan.y}))"
