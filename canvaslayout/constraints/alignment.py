"""Alignment guides derived from sibling and container edges."""

from dataclasses import dataclass
from typing import Optional, Sequence

from canvaslayout.engine.units import SNAP_THRESHOLD_PX
from canvaslayout.schema import (
    AlignmentGuide,
    Axis,
    Component,
    Rect,
    Size,
    SnapLine,
    SnapLineKind,
)


@dataclass
class AlignmentMatch:
    """The closest eligible snap line for one axis."""

    line: SnapLine
    snap_to: float  # Corrected leading-edge coordinate (or edge coordinate)
    distance: float

    def to_guide(self, moving_id: Optional[str] = None) -> AlignmentGuide:
        """Convert the match into a guide for overlay rendering."""
        component_ids = [cid for cid in (moving_id, self.line.source_id) if cid]
        return AlignmentGuide(
            axis=self.line.axis,
            position=self.line.position,
            kind=self.line.kind,
            source_id=self.line.source_id,
            component_ids=component_ids,
        )


def sibling_snap_lines(
    siblings: Sequence[Component],
    exclude_id: Optional[str] = None,
) -> list[SnapLine]:
    """Leading, trailing and center lines of every sibling.

    Args:
        siblings: Components on the same artboard.
        exclude_id: Id of the moving component, skipped if present.

    Returns:
        Snap lines in sibling input order.
    """
    lines: list[SnapLine] = []
    for sibling in siblings:
        if exclude_id is not None and sibling.id == exclude_id:
            continue
        rect = sibling.rect
        lines.extend([
            SnapLine(axis=Axis.X, position=rect.left, kind=SnapLineKind.LEFT, source_id=sibling.id),
            SnapLine(axis=Axis.X, position=rect.right, kind=SnapLineKind.RIGHT, source_id=sibling.id),
            SnapLine(axis=Axis.X, position=rect.center_x, kind=SnapLineKind.CENTER_X, source_id=sibling.id),
            SnapLine(axis=Axis.Y, position=rect.top, kind=SnapLineKind.TOP, source_id=sibling.id),
            SnapLine(axis=Axis.Y, position=rect.bottom, kind=SnapLineKind.BOTTOM, source_id=sibling.id),
            SnapLine(axis=Axis.Y, position=rect.center_y, kind=SnapLineKind.CENTER_Y, source_id=sibling.id),
        ])
    return lines


def container_snap_lines(container: Size) -> list[SnapLine]:
    """Edge and center lines of the artboard itself."""
    return [
        SnapLine(axis=Axis.X, position=0.0, kind=SnapLineKind.CONTAINER_LEFT),
        SnapLine(axis=Axis.X, position=container.width, kind=SnapLineKind.CONTAINER_RIGHT),
        SnapLine(axis=Axis.X, position=container.width / 2, kind=SnapLineKind.CONTAINER_CENTER_X),
        SnapLine(axis=Axis.Y, position=0.0, kind=SnapLineKind.CONTAINER_TOP),
        SnapLine(axis=Axis.Y, position=container.height, kind=SnapLineKind.CONTAINER_BOTTOM),
        SnapLine(axis=Axis.Y, position=container.height / 2, kind=SnapLineKind.CONTAINER_CENTER_Y),
    ]


def collect_snap_lines(
    siblings: Sequence[Component],
    container: Optional[Size] = None,
    exclude_id: Optional[str] = None,
) -> list[SnapLine]:
    """All candidate lines for a gesture frame, siblings before container.

    The order matters: ties between equally close lines go to the earlier one.
    """
    lines = sibling_snap_lines(siblings, exclude_id)
    if container is not None:
        lines.extend(container_snap_lines(container))
    return lines


def find_axis_alignment(
    rect: Rect,
    lines: Sequence[SnapLine],
    axis: Axis,
    threshold: float = SNAP_THRESHOLD_PX,
) -> Optional[AlignmentMatch]:
    """Closest line to any of the rect's leading, trailing or center points.

    Args:
        rect: Moving rect at its raw position.
        lines: Candidate lines (see collect_snap_lines).
        axis: Axis to resolve.
        threshold: Maximum eligible distance (inclusive).

    Returns:
        The winning match, or None if no line is within threshold.
    """
    if axis == Axis.X:
        start, extent = rect.x, rect.width
    else:
        start, extent = rect.y, rect.height
    offsets = (0.0, extent, extent / 2)

    best: Optional[AlignmentMatch] = None
    for line in lines:
        if line.axis != axis:
            continue
        for offset in offsets:
            distance = abs(start + offset - line.position)
            if distance > threshold:
                continue
            if best is None or distance < best.distance:
                best = AlignmentMatch(line=line, snap_to=line.position - offset, distance=distance)
    return best


def find_edge_alignment(
    edge: float,
    lines: Sequence[SnapLine],
    axis: Axis,
    threshold: float = SNAP_THRESHOLD_PX,
) -> Optional[AlignmentMatch]:
    """Closest line to a single moving edge (used while resizing)."""
    best: Optional[AlignmentMatch] = None
    for line in lines:
        if line.axis != axis:
            continue
        distance = abs(edge - line.position)
        if distance > threshold:
            continue
        if best is None or distance < best.distance:
            best = AlignmentMatch(line=line, snap_to=line.position, distance=distance)
    return best


def guide_extent(
    guide: AlignmentGuide,
    rects: Sequence[Component],
    moving_rect: Optional[Rect] = None,
) -> Optional[tuple[float, float]]:
    """Span to draw a guide line across everything it aligns.

    Args:
        guide: Applied guide.
        rects: Components on the artboard.
        moving_rect: Current candidate of the moving component.

    Returns:
        (start, end) along the guide's perpendicular axis, or None if
        nothing aligned is known (container guides span the container).
    """
    spans = [c.rect for c in rects if c.id in guide.component_ids]
    if moving_rect is not None:
        spans.append(moving_rect)
    if not spans:
        return None

    if guide.axis == Axis.X:
        return min(r.top for r in spans), max(r.bottom for r in spans)
    return min(r.left for r in spans), max(r.right for r in spans)
