"""Constraint module - snapping, alignment, resize limits and collision rules."""

from canvaslayout.constraints.alignment import (
    AlignmentMatch,
    collect_snap_lines,
    container_snap_lines,
    find_axis_alignment,
    find_edge_alignment,
    guide_extent,
    sibling_snap_lines,
)
from canvaslayout.constraints.collision import (
    CollisionPolicy,
    find_colliding,
    find_drop_position,
    find_nearest_free_position,
    resolve_collision,
    would_collide,
)
from canvaslayout.constraints.resize import (
    ResizeConstraint,
    constrain_resize,
    effective_size_limits,
    resize_from_delta,
)
from canvaslayout.constraints.snapping import (
    ResizeSnapResult,
    SnapResult,
    resolve_resize_snap,
    resolve_snap,
    snap_rect_to_grid,
    snap_to_grid,
)

__all__ = [
    # Alignment
    "AlignmentMatch",
    "collect_snap_lines",
    "container_snap_lines",
    "find_axis_alignment",
    "find_edge_alignment",
    "guide_extent",
    "sibling_snap_lines",
    # Collision
    "CollisionPolicy",
    "find_colliding",
    "find_drop_position",
    "find_nearest_free_position",
    "resolve_collision",
    "would_collide",
    # Resize
    "ResizeConstraint",
    "constrain_resize",
    "effective_size_limits",
    "resize_from_delta",
    # Snapping
    "ResizeSnapResult",
    "SnapResult",
    "resolve_resize_snap",
    "resolve_snap",
    "snap_rect_to_grid",
    "snap_to_grid",
]
