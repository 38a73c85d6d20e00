"""Grid snapping and the drag/resize snap resolver."""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from canvaslayout.constraints.alignment import (
    AlignmentMatch,
    collect_snap_lines,
    find_axis_alignment,
    find_edge_alignment,
)
from canvaslayout.engine.units import GRID_SIZE_PX, SNAP_THRESHOLD_PX, is_finite
from canvaslayout.schema import (
    AlignmentGuide,
    Axis,
    Component,
    Modifiers,
    Point,
    Rect,
    ResizeHandle,
    Size,
    SnapSource,
)

logger = logging.getLogger(__name__)


@dataclass
class SnapResult:
    """Result of a drag snap resolution."""

    position: Point
    guides: list[AlignmentGuide] = field(default_factory=list)
    source: SnapSource = SnapSource.NONE


@dataclass
class ResizeSnapResult:
    """Result of a resize snap resolution."""

    rect: Rect
    guides: list[AlignmentGuide] = field(default_factory=list)
    source: SnapSource = SnapSource.NONE


def snap_to_grid(value: float, grid_size: float = GRID_SIZE_PX) -> float:
    """Round a coordinate to the nearest multiple of the grid unit.

    Args:
        value: Coordinate to snap.
        grid_size: Grid unit. Non-positive or non-finite units disable snapping.

    Returns:
        Snapped coordinate.
    """
    if not is_finite(value, grid_size) or grid_size <= 0:
        return value
    # Half-up rounding so .5 ties always move toward +inf
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_rect_to_grid(rect: Rect, grid_size: float = GRID_SIZE_PX) -> Rect:
    """Snap a rect's position to the grid, preserving its size."""
    return rect.moved_to(snap_to_grid(rect.x, grid_size), snap_to_grid(rect.y, grid_size))


def _combine_source(aligned: bool, gridded: bool) -> SnapSource:
    if aligned:
        return SnapSource.ALIGNMENT
    if gridded:
        return SnapSource.GRID
    return SnapSource.NONE


def resolve_snap(
    raw_position: Point,
    moving_size: Size,
    siblings: Sequence[Component],
    modifiers: Optional[Modifiers] = None,
    *,
    moving_id: Optional[str] = None,
    container: Optional[Size] = None,
    threshold: float = SNAP_THRESHOLD_PX,
    grid_size: float = GRID_SIZE_PX,
    fallback: Optional[Point] = None,
) -> SnapResult:
    """Resolve snapping for a move/drag frame.

    Alignment guides win per axis; an axis without an eligible guide falls
    back to grid snapping.

    Args:
        raw_position: Unsnapped top-left of the moving rect.
        moving_size: Size of the moving rect.
        siblings: Components on the same artboard (the moving one is skipped).
        modifiers: Active modifiers; bypass_snap returns the raw position.
        moving_id: Id of the moving component.
        container: Artboard size, enables container edge/center lines.
        threshold: Alignment eligibility distance.
        grid_size: Grid unit for the fallback.
        fallback: Position to return for non-finite input (default origin).

    Returns:
        SnapResult with corrected position and applied guides.
    """
    if not is_finite(raw_position.x, raw_position.y):
        logger.debug(f"Non-finite drag position for {moving_id}, using fallback")
        return SnapResult(position=fallback or Point(x=0, y=0))

    if modifiers is not None and modifiers.bypass_snap:
        return SnapResult(position=raw_position)

    moving = Rect(
        x=raw_position.x,
        y=raw_position.y,
        width=moving_size.width,
        height=moving_size.height,
    )
    lines = collect_snap_lines(siblings, container, moving_id)

    guides: list[AlignmentGuide] = []
    gridded = False
    resolved: dict[Axis, float] = {}

    for axis, raw in ((Axis.X, raw_position.x), (Axis.Y, raw_position.y)):
        match = find_axis_alignment(moving, lines, axis, threshold)
        if match is not None:
            resolved[axis] = match.snap_to
            guides.append(match.to_guide(moving_id))
            continue
        snapped = snap_to_grid(raw, grid_size)
        gridded = gridded or snapped != raw
        resolved[axis] = snapped

    if guides:
        logger.debug(
            f"Aligned {moving_id} to "
            f"{', '.join(f'{g.kind.value}@{g.position}' for g in guides)}"
        )

    return SnapResult(
        position=Point(x=resolved[Axis.X], y=resolved[Axis.Y]),
        guides=guides,
        source=_combine_source(bool(guides), gridded),
    )


def _snap_edge(
    edge: float,
    axis: Axis,
    lines,
    threshold: float,
    grid_size: float,
) -> tuple[float, Optional[AlignmentMatch]]:
    match = find_edge_alignment(edge, lines, axis, threshold)
    if match is not None:
        return match.snap_to, match
    return snap_to_grid(edge, grid_size), None


def resolve_resize_snap(
    raw_rect: Rect,
    start_rect: Rect,
    handle: ResizeHandle,
    siblings: Sequence[Component],
    modifiers: Optional[Modifiers] = None,
    *,
    moving_id: Optional[str] = None,
    container: Optional[Size] = None,
    threshold: float = SNAP_THRESHOLD_PX,
    grid_size: float = GRID_SIZE_PX,
) -> ResizeSnapResult:
    """Resolve snapping for a resize frame.

    Only the edges implied by the handle are snapped; the opposite edges stay
    at their pre-gesture location so repeated small moves cannot drift.
    Min/max size is not enforced here (see constraints.resize).

    Args:
        raw_rect: Unsnapped candidate rect.
        start_rect: Rect at gesture start, source of the anchored edges.
        handle: Active resize handle.
        siblings: Components on the same artboard.
        modifiers: Active modifiers; bypass_snap returns the raw rect.
        moving_id: Id of the resized component.
        container: Artboard size, enables container lines.
        threshold: Alignment eligibility distance.
        grid_size: Grid unit for the fallback.

    Returns:
        ResizeSnapResult with the corrected rect and applied guides.
    """
    if not all(is_finite(v) for v in (raw_rect.x, raw_rect.y, raw_rect.width, raw_rect.height)):
        logger.debug(f"Non-finite resize rect for {moving_id}, keeping start rect")
        return ResizeSnapResult(rect=start_rect)

    left, right = start_rect.left, start_rect.right
    top, bottom = start_rect.top, start_rect.bottom

    if modifiers is not None and modifiers.bypass_snap:
        if handle.moves_left:
            left = raw_rect.left
        if handle.moves_right:
            right = raw_rect.right
        if handle.moves_top:
            top = raw_rect.top
        if handle.moves_bottom:
            bottom = raw_rect.bottom
        return ResizeSnapResult(rect=_anchored_rect(handle, left, top, right, bottom))

    lines = collect_snap_lines(siblings, container, moving_id)
    matches: list[AlignmentMatch] = []
    gridded = False

    if handle.moves_left:
        left, match = _snap_edge(raw_rect.left, Axis.X, lines, threshold, grid_size)
    elif handle.moves_right:
        right, match = _snap_edge(raw_rect.right, Axis.X, lines, threshold, grid_size)
    else:
        match = None
    if match is not None:
        matches.append(match)
    elif handle.moves_left or handle.moves_right:
        gridded = True

    if handle.moves_top:
        top, match = _snap_edge(raw_rect.top, Axis.Y, lines, threshold, grid_size)
    elif handle.moves_bottom:
        bottom, match = _snap_edge(raw_rect.bottom, Axis.Y, lines, threshold, grid_size)
    else:
        match = None
    if match is not None:
        matches.append(match)
    elif handle.moves_top or handle.moves_bottom:
        gridded = True

    rect = _anchored_rect(handle, left, top, right, bottom)
    guides = [m.to_guide(moving_id) for m in matches]
    return ResizeSnapResult(
        rect=rect,
        guides=guides,
        source=_combine_source(bool(guides), gridded and rect != raw_rect),
    )


def _anchored_rect(
    handle: ResizeHandle,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> Rect:
    """Build a rect whose moving edges never cross the anchored ones."""
    if handle.moves_left:
        left = min(left, right)
    else:
        right = max(right, left)
    if handle.moves_top:
        top = min(top, bottom)
    else:
        bottom = max(bottom, top)
    return Rect.from_edges(left, top, right, bottom)
