"""Collision detection and non-overlapping placement search."""

import logging
from enum import Enum
from typing import Iterator, Optional, Sequence

from canvaslayout.constraints.snapping import snap_rect_to_grid
from canvaslayout.engine.geometry import clamp_to_bounds, overlaps
from canvaslayout.engine.units import COLLISION_SEARCH_RADIUS, GRID_SIZE_PX
from canvaslayout.schema import Component, Rect, Size

logger = logging.getLogger(__name__)


class CollisionPolicy(str, Enum):
    """What to do when a gesture candidate overlaps a sibling."""

    ALLOW = "allow"  # Commit overlapping rects as-is
    REJECT = "reject"  # Keep the last non-colliding candidate
    NEAREST = "nearest"  # Search for the nearest free cell


def would_collide(
    candidate: Rect,
    moving_id: Optional[str],
    siblings: Sequence[Component],
) -> bool:
    """Check whether a candidate placement overlaps any other sibling.

    Args:
        candidate: Rect to test.
        moving_id: Id of the component being placed (excluded from the test).
        siblings: Components on the same artboard; may include the moving one.

    Returns:
        True if any sibling with a different id overlaps the candidate.
    """
    return any(
        sibling.id != moving_id and overlaps(candidate, sibling.rect)
        for sibling in siblings
    )


def find_colliding(
    candidate: Rect,
    moving_id: Optional[str],
    siblings: Sequence[Component],
) -> list[Component]:
    """List the siblings a candidate overlaps, in input order."""
    return [
        sibling
        for sibling in siblings
        if sibling.id != moving_id and overlaps(candidate, sibling.rect)
    ]


def _ring_offsets(radius: int) -> Iterator[tuple[int, int]]:
    """Yield grid offsets on the perimeter of the square ring at radius."""
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if abs(dx) != radius and abs(dy) != radius:
                continue
            yield dx, dy


def find_nearest_free_position(
    desired: Rect,
    moving_id: Optional[str],
    siblings: Sequence[Component],
    container: Optional[Size] = None,
    grid_size: float = GRID_SIZE_PX,
    max_radius: int = COLLISION_SEARCH_RADIUS,
) -> Optional[Rect]:
    """Find the nearest non-colliding placement around a desired rect.

    The grid-snapped desired rect is tried first; if it collides, rings of
    grid-unit offsets of increasing radius are probed around it.

    Args:
        desired: Desired placement.
        moving_id: Id of the component being placed.
        siblings: Components to avoid.
        container: Optional artboard size; probes are clamped inside it.
        grid_size: Grid unit used for snapping and ring steps.
        max_radius: Number of rings to probe.

    Returns:
        The first clear rect, or None if the search radius is exhausted.
    """
    start = snap_rect_to_grid(desired, grid_size)
    if container is not None:
        start = clamp_to_bounds(start, container)

    if not would_collide(start, moving_id, siblings):
        return start

    step = grid_size if grid_size > 0 else 1.0
    for radius in range(1, max_radius + 1):
        for dx, dy in _ring_offsets(radius):
            probe = start.translated(dx * step, dy * step)
            if container is not None:
                probe = clamp_to_bounds(probe, container)
            if not would_collide(probe, moving_id, siblings):
                return probe

    logger.warning(
        f"No free position within {max_radius} grid units of "
        f"({desired.x}, {desired.y}) for {moving_id or 'new component'}"
    )
    return None


def find_drop_position(
    desired: Rect,
    siblings: Sequence[Component],
    container: Optional[Size] = None,
    grid_size: float = GRID_SIZE_PX,
    max_radius: int = COLLISION_SEARCH_RADIUS,
) -> Rect:
    """Find a valid placement for a newly dropped component.

    Tries the drop point first, then the container's top-left corner, and
    finally returns the clamped desired rect as a last resort.

    Args:
        desired: Rect at the drop point with the component's size.
        siblings: Existing components on the artboard.
        container: Optional artboard size.
        grid_size: Grid unit.
        max_radius: Number of rings to probe per attempt.

    Returns:
        Placement rect (never None).
    """
    near_drop = find_nearest_free_position(
        desired, None, siblings, container, grid_size, max_radius
    )
    if near_drop is not None:
        return near_drop

    near_corner = find_nearest_free_position(
        desired.moved_to(0, 0), None, siblings, container, grid_size, max_radius
    )
    if near_corner is not None:
        return near_corner

    if container is not None:
        return clamp_to_bounds(desired, container)
    return desired


def resolve_collision(
    candidate: Rect,
    last_valid: Rect,
    moving_id: Optional[str],
    siblings: Sequence[Component],
    policy: CollisionPolicy = CollisionPolicy.ALLOW,
    container: Optional[Size] = None,
    grid_size: float = GRID_SIZE_PX,
    max_radius: int = COLLISION_SEARCH_RADIUS,
) -> Rect:
    """Validate a gesture candidate against siblings.

    Args:
        candidate: Snapped and constrained candidate rect.
        last_valid: Rect to fall back to (previous accepted candidate).
        moving_id: Id of the moving component.
        siblings: Components on the same artboard.
        policy: Collision policy.
        container: Optional artboard size for the nearest search.
        grid_size: Grid unit for the nearest search.
        max_radius: Ring limit for the nearest search.

    Returns:
        The rect to use for this frame.
    """
    if policy == CollisionPolicy.ALLOW:
        return candidate

    if not would_collide(candidate, moving_id, siblings):
        return candidate

    if policy == CollisionPolicy.REJECT:
        logger.debug(f"Rejected colliding candidate for {moving_id}")
        return last_valid

    nearest = find_nearest_free_position(
        candidate, moving_id, siblings, container, grid_size, max_radius
    )
    return nearest if nearest is not None else last_valid
