"""Size constraints (min/max, aspect ratio) applied while resizing."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from canvaslayout.engine.units import clamp, is_finite
from canvaslayout.schema import Component, Rect, ResizeHandle, Size

logger = logging.getLogger(__name__)


def effective_size_limits(
    min_size: Optional[Size],
    max_size: Optional[Size],
) -> tuple[float, float, float, float]:
    """Resolve (min_w, min_h, max_w, max_h), treating max < min as max = min."""
    min_w = min_size.width if min_size is not None else 0.0
    min_h = min_size.height if min_size is not None else 0.0
    max_w = max_size.width if max_size is not None else math.inf
    max_h = max_size.height if max_size is not None else math.inf
    return min_w, min_h, max(max_w, min_w), max(max_h, min_h)


def resize_from_delta(start_rect: Rect, handle: ResizeHandle, dx: float, dy: float) -> Rect:
    """Raw rect for a handle dragged by a cumulative delta from gesture start.

    Edges the handle does not own stay at their start position. If a moving
    edge crosses its anchor the span collapses to zero at the anchor.
    """
    left, top = start_rect.left, start_rect.top
    right, bottom = start_rect.right, start_rect.bottom

    if handle.moves_left:
        left = min(left + dx, right)
    if handle.moves_right:
        right = max(right + dx, left)
    if handle.moves_top:
        top = min(top + dy, bottom)
    if handle.moves_bottom:
        bottom = max(bottom + dy, top)

    return Rect.from_edges(left, top, right, bottom)


@dataclass
class ResizeConstraint:
    """Min/max size and optional fixed aspect ratio for one component."""

    min_size: Optional[Size] = None
    max_size: Optional[Size] = None
    aspect_ratio: Optional[float] = None  # width / height

    @classmethod
    def for_component(cls, component: Component) -> "ResizeConstraint":
        return cls(
            min_size=component.min_size,
            max_size=component.max_size,
            aspect_ratio=component.aspect_ratio,
        )

    def apply(
        self,
        raw_rect: Rect,
        start_rect: Rect,
        handle: ResizeHandle,
        aspect_lock: bool = False,
    ) -> Rect:
        """Constrain a raw resized rect.

        Args:
            raw_rect: Candidate rect after snapping.
            start_rect: Rect at gesture start; its edges opposite the handle
                are the anchors.
            handle: Active resize handle.
            aspect_lock: Keep the start rect's ratio when no fixed ratio is set.

        Returns:
            Constrained rect anchored on the edges opposite the handle.
        """
        if not is_finite(raw_rect.x, raw_rect.y, raw_rect.width, raw_rect.height):
            return start_rect

        min_w, min_h, max_w, max_h = effective_size_limits(self.min_size, self.max_size)

        width = clamp(raw_rect.width, min_w, max_w)
        height = clamp(raw_rect.height, min_h, max_h)

        ratio = self._target_ratio(start_rect, aspect_lock)
        if ratio is not None:
            width, height = self._apply_ratio(width, height, ratio, handle, min_w, min_h, max_w, max_h)

        x = start_rect.right - width if handle.moves_left else start_rect.x
        y = start_rect.bottom - height if handle.moves_top else start_rect.y
        return Rect(x=x, y=y, width=width, height=height)

    def _target_ratio(self, start_rect: Rect, aspect_lock: bool) -> Optional[float]:
        if self.aspect_ratio:
            return self.aspect_ratio
        if aspect_lock and start_rect.width > 0 and start_rect.height > 0:
            return start_rect.width / start_rect.height
        return None

    def _apply_ratio(
        self,
        width: float,
        height: float,
        ratio: float,
        handle: ResizeHandle,
        min_w: float,
        min_h: float,
        max_w: float,
        max_h: float,
    ) -> tuple[float, float]:
        # Top/bottom handles drive from height, everything else from width
        if handle.is_vertical_edge:
            width = height * ratio

        # Widths whose ratio-derived height also satisfies the height limits
        lo_w = max(min_w, min_h * ratio)
        hi_w = min(max_w, max_h * ratio)
        if lo_w > hi_w:
            logger.debug(
                f"Aspect ratio {ratio:.3f} cannot satisfy size limits; keeping limits"
            )
            return clamp(width, min_w, max_w), clamp(width / ratio, min_h, max_h)

        width = clamp(width, lo_w, hi_w)
        # Re-clamp: float error in width / ratio can land just outside the limits
        height = clamp(width / ratio, min_h, max_h)
        return width, height


def constrain_resize(
    raw_rect: Rect,
    start_rect: Rect,
    handle: ResizeHandle,
    min_size: Optional[Size] = None,
    max_size: Optional[Size] = None,
    aspect_ratio: Optional[float] = None,
    aspect_lock: bool = False,
) -> Rect:
    """Convenience function to constrain a resize without a component.

    Args:
        raw_rect: Candidate rect.
        start_rect: Rect at gesture start.
        handle: Active handle.
        min_size: Minimum size.
        max_size: Maximum size (None = unbounded).
        aspect_ratio: Fixed width/height ratio.
        aspect_lock: Modifier held to keep the start ratio.

    Returns:
        Constrained rect.
    """
    constraint = ResizeConstraint(
        min_size=min_size,
        max_size=max_size,
        aspect_ratio=aspect_ratio,
    )
    return constraint.apply(raw_rect, start_rect, handle, aspect_lock)
