"""
geometry.py — Rectangle arithmetic shared by every layout stage.

Touching edges never count as overlap, and zero-area rects never overlap
anything. Containment and clamping operate in artboard-local space.
"""

from typing import Iterable, Optional

from ..schema import Point, Rect, Size
from .units import is_finite


# =============================================================================
# OVERLAP / CONTAINMENT
# =============================================================================

def overlaps(a: Rect, b: Rect) -> bool:
    """Separating-axis overlap test with strict inequalities at edges."""
    if a.is_degenerate or b.is_degenerate:
        return False
    return not (
        a.right <= b.left
        or a.left >= b.right
        or a.bottom <= b.top
        or a.top >= b.bottom
    )


def intersection_area(a: Rect, b: Rect) -> float:
    """Area shared by two rects (0 when they do not overlap)."""
    if not overlaps(a, b):
        return 0.0
    overlap_x = min(a.right, b.right) - max(a.left, b.left)
    overlap_y = min(a.bottom, b.bottom) - max(a.top, b.top)
    return overlap_x * overlap_y


def contains_point(rect: Rect, point: Point) -> bool:
    """Half-open hit test: left/top edges inclusive, right/bottom exclusive."""
    return (
        rect.left <= point.x < rect.right
        and rect.top <= point.y < rect.bottom
    )


def contains_rect(outer: Rect, inner: Rect) -> bool:
    return (
        inner.left >= outer.left
        and inner.top >= outer.top
        and inner.right <= outer.right
        and inner.bottom <= outer.bottom
    )


def is_within_bounds(rect: Rect, bounds: Size) -> bool:
    """True if rect lies entirely inside a container anchored at (0, 0)."""
    return (
        rect.x >= 0
        and rect.y >= 0
        and rect.right <= bounds.width
        and rect.bottom <= bounds.height
    )


# =============================================================================
# CLAMPING / SANITIZING
# =============================================================================

def clamp_to_bounds(rect: Rect, bounds: Size) -> Rect:
    """
    Keep a rect's top-left within [0, bounds - size] on each axis.

    Size is preserved. A rect larger than the container is pinned to 0.
    """
    x = max(0.0, min(rect.x, bounds.width - rect.width))
    y = max(0.0, min(rect.y, bounds.height - rect.height))
    if x == rect.x and y == rect.y:
        return rect
    return rect.moved_to(x, y)


def is_finite_rect(rect: Rect) -> bool:
    return is_finite(rect.x, rect.y, rect.width, rect.height)


def sanitize_rect(candidate: Optional[Rect], fallback: Rect) -> Rect:
    """Return candidate unless it is missing or carries NaN/inf values."""
    if candidate is None or not is_finite_rect(candidate):
        return fallback
    return candidate


def union_bounds(rects: Iterable[Rect]) -> Optional[Rect]:
    """Smallest rect enclosing all rects, or None for an empty input."""
    rects = list(rects)
    if not rects:
        return None
    return Rect.from_edges(
        min(r.left for r in rects),
        min(r.top for r in rects),
        max(r.right for r in rects),
        max(r.bottom for r in rects),
    )
