"""
interaction.py — Drag/resize gesture state machine.

A gesture has three phases:
- begin: capture the start rect and start pointer
- update: recompute the candidate from the START rect plus the cumulative
  pointer delta (never from the previous frame's output)
- end/cancel: commit the candidate, or drop it and keep the start rect

Gesture state is an immutable value (Idle | Dragging | Resizing |
MovingArtboard). The *_frame functions are pure: state in, (state, frame) out.
InteractionController is a thin holder the host owns for one canvas.

Per-frame pipeline for components:
    screen delta → canvas delta → snap → size constraints → artboard clamp
    → collision policy
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union

from ..config import EngineSettings, get_settings
from ..constraints.collision import CollisionPolicy, resolve_collision
from ..constraints.resize import ResizeConstraint, resize_from_delta
from ..constraints.snapping import resolve_resize_snap, resolve_snap
from ..schema import (
    AlignmentGuide,
    Artboard,
    Axis,
    Component,
    Point,
    PointerInput,
    Rect,
    ResizeHandle,
    Size,
    SnapSource,
)
from .geometry import clamp_to_bounds
from .viewport import Viewport

logger = logging.getLogger(__name__)


# =============================================================================
# GESTURE STATES
# =============================================================================

@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class Dragging:
    component_id: str
    start_rect: Rect
    start_pointer: Point          # Screen space
    candidate: Rect
    guides: Tuple[AlignmentGuide, ...] = ()


@dataclass(frozen=True)
class Resizing:
    component_id: str
    handle: ResizeHandle
    start_rect: Rect
    start_pointer: Point
    constraint: ResizeConstraint
    candidate: Rect
    guides: Tuple[AlignmentGuide, ...] = ()


@dataclass(frozen=True)
class MovingArtboard:
    artboard_id: str
    start_position: Point         # Canvas space
    start_pointer: Point
    candidate: Point


GestureState = Union[Idle, Dragging, Resizing, MovingArtboard]


@dataclass
class FrameResult:
    """What the host renders for one pointer frame."""
    rect: Rect                    # Artboard-local, or canvas space for artboard moves
    guides: List[AlignmentGuide] = field(default_factory=list)
    source: SnapSource = SnapSource.NONE


# =============================================================================
# PURE FRAME FUNCTIONS
# =============================================================================

def _canvas_delta(pointer: PointerInput, start_pointer: Point, viewport: Viewport) -> Point:
    return viewport.screen_delta_to_canvas(
        pointer.x - start_pointer.x,
        pointer.y - start_pointer.y,
    )


def _lines_container(artboard: Artboard, settings: EngineSettings) -> Optional[Size]:
    return artboard.dimensions if settings.snap.include_container_lines else None


def _guide_held(guide: AlignmentGuide, snapped: Rect, placed: Rect) -> bool:
    """True if the guide's axis was not moved after snapping."""
    if guide.axis == Axis.X:
        return placed.x == snapped.x
    return placed.y == snapped.y


def drag_frame(
    state: Dragging,
    pointer: PointerInput,
    artboard: Artboard,
    viewport: Viewport,
    settings: EngineSettings,
) -> Tuple[Dragging, FrameResult]:
    """One move frame of a component drag."""
    if not pointer.is_finite:
        logger.debug(f"Non-finite pointer during drag of {state.component_id}")
        return state, FrameResult(rect=state.candidate, guides=list(state.guides))

    delta = _canvas_delta(pointer, state.start_pointer, viewport)
    raw_position = Point(x=state.start_rect.x + delta.x, y=state.start_rect.y + delta.y)
    siblings = artboard.components

    snap = resolve_snap(
        raw_position,
        state.start_rect.size,
        siblings,
        pointer.modifiers,
        moving_id=state.component_id,
        container=_lines_container(artboard, settings),
        threshold=settings.snap.threshold,
        grid_size=settings.snap.grid_size,
        fallback=state.candidate.origin,
    )
    snapped = state.start_rect.moved_to(snap.position.x, snap.position.y)
    rect = clamp_to_bounds(snapped, artboard.dimensions) if settings.clamp_to_artboard else snapped

    resolved = resolve_collision(
        rect,
        state.candidate,
        state.component_id,
        siblings,
        policy=settings.collision.policy,
        container=artboard.dimensions if settings.clamp_to_artboard else None,
        grid_size=settings.snap.grid_size,
        max_radius=settings.collision.search_radius,
    )
    # Guides only describe the snapped rect, not a clamp or collision fallback
    guides = [g for g in snap.guides if _guide_held(g, snapped, rect)] if resolved == rect else []

    next_state = replace(state, candidate=resolved, guides=tuple(guides))
    return next_state, FrameResult(rect=resolved, guides=guides, source=snap.source)


def _resize_limits(start_rect: Rect, container: Size) -> Tuple[float, float, float, float]:
    """
    Allowed (left, top, right, bottom) edges for a resize.

    The artboard, widened on each side by however far the start rect
    already overhangs it.
    """
    return (
        min(0.0, start_rect.left),
        min(0.0, start_rect.top),
        max(container.width, start_rect.right),
        max(container.height, start_rect.bottom),
    )


def _within_limits(rect: Rect, limits: Tuple[float, float, float, float]) -> bool:
    left, top, right, bottom = limits
    return rect.left >= left and rect.top >= top and rect.right <= right and rect.bottom <= bottom


def _fit_resize_to_limits(rect: Rect, handle: ResizeHandle, limits: Tuple[float, float, float, float]) -> Rect:
    """Pull the handle's moving edges back inside the limits."""
    min_left, min_top, max_right, max_bottom = limits
    left, top, right, bottom = rect.left, rect.top, rect.right, rect.bottom
    if handle.moves_left:
        left = max(left, min_left)
    if handle.moves_right:
        right = min(right, max_right)
    if handle.moves_top:
        top = max(top, min_top)
    if handle.moves_bottom:
        bottom = min(bottom, max_bottom)
    return Rect.from_edges(left, top, right, bottom)


def resize_frame(
    state: Resizing,
    pointer: PointerInput,
    artboard: Artboard,
    viewport: Viewport,
    settings: EngineSettings,
) -> Tuple[Resizing, FrameResult]:
    """One move frame of a component resize."""
    if not pointer.is_finite:
        logger.debug(f"Non-finite pointer during resize of {state.component_id}")
        return state, FrameResult(rect=state.candidate, guides=list(state.guides))

    delta = _canvas_delta(pointer, state.start_pointer, viewport)
    raw = resize_from_delta(state.start_rect, state.handle, delta.x, delta.y)
    siblings = artboard.components
    aspect_lock = pointer.modifiers.aspect_lock

    snap = resolve_resize_snap(
        raw,
        state.start_rect,
        state.handle,
        siblings,
        pointer.modifiers,
        moving_id=state.component_id,
        container=_lines_container(artboard, settings),
        threshold=settings.snap.threshold,
        grid_size=settings.snap.grid_size,
    )
    rect = state.constraint.apply(snap.rect, state.start_rect, state.handle, aspect_lock)

    fell_back = False
    limits = _resize_limits(state.start_rect, artboard.dimensions)
    if settings.clamp_to_artboard and not _within_limits(rect, limits):
        fitted = _fit_resize_to_limits(rect, state.handle, limits)
        rect = state.constraint.apply(fitted, state.start_rect, state.handle, aspect_lock)
        if not _within_limits(rect, limits):
            rect = state.candidate
            fell_back = True

    # Resizes keep their anchor: nearest behaves as reject
    policy = settings.collision.policy
    if policy == CollisionPolicy.NEAREST:
        policy = CollisionPolicy.REJECT
    resolved = resolve_collision(rect, state.candidate, state.component_id, siblings, policy=policy)

    guides = snap.guides if resolved == rect and not fell_back else []
    next_state = replace(state, candidate=resolved, guides=tuple(guides))
    return next_state, FrameResult(rect=resolved, guides=guides, source=snap.source)


def artboard_frame(
    state: MovingArtboard,
    pointer: PointerInput,
    viewport: Viewport,
) -> MovingArtboard:
    """Artboards follow the pointer delta directly; no snapping."""
    if not pointer.is_finite:
        return state
    delta = _canvas_delta(pointer, state.start_pointer, viewport)
    return replace(
        state,
        candidate=Point(x=state.start_position.x + delta.x, y=state.start_position.y + delta.y),
    )


# =============================================================================
# CONTROLLER
# =============================================================================

class InteractionController:
    """
    Owns the gesture state for one canvas.

    Nothing is written to a Component or Artboard until end().
    """

    def __init__(self, viewport: Optional[Viewport] = None, settings: Optional[EngineSettings] = None):
        self.settings = settings or get_settings()
        self.viewport = viewport or Viewport.from_settings(self.settings)
        self._state: GestureState = Idle()

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_active(self) -> bool:
        return not isinstance(self._state, Idle)

    @property
    def guides(self) -> List[AlignmentGuide]:
        """Guides applied in the latest frame; empty outside a gesture."""
        if isinstance(self._state, (Dragging, Resizing)):
            return list(self._state.guides)
        return []

    # -------------------------------------------------------------------------
    # Begin
    # -------------------------------------------------------------------------

    def _can_begin(self, target_id: str, locked: bool) -> bool:
        if self.is_active:
            logger.debug(f"Gesture already active, ignoring begin for {target_id}")
            return False
        if locked:
            logger.debug(f"{target_id} is locked, ignoring gesture")
            return False
        return True

    def begin_drag(self, component: Component, pointer: PointerInput) -> bool:
        if not self._can_begin(component.id, component.locked) or not pointer.is_finite:
            return False
        self._state = Dragging(
            component_id=component.id,
            start_rect=component.rect,
            start_pointer=pointer.point,
            candidate=component.rect,
        )
        return True

    def begin_resize(self, component: Component, handle: ResizeHandle, pointer: PointerInput) -> bool:
        if not self._can_begin(component.id, component.locked) or not pointer.is_finite:
            return False
        self._state = Resizing(
            component_id=component.id,
            handle=handle,
            start_rect=component.rect,
            start_pointer=pointer.point,
            constraint=ResizeConstraint.for_component(component),
            candidate=component.rect,
        )
        return True

    def begin_artboard_drag(self, artboard: Artboard, pointer: PointerInput) -> bool:
        if not self._can_begin(artboard.id, artboard.locked) or not pointer.is_finite:
            return False
        self._state = MovingArtboard(
            artboard_id=artboard.id,
            start_position=artboard.position,
            start_pointer=pointer.point,
            candidate=artboard.position,
        )
        return True

    # -------------------------------------------------------------------------
    # Update / end
    # -------------------------------------------------------------------------

    def update(self, pointer: PointerInput, artboard: Artboard) -> Optional[FrameResult]:
        """
        Advance the active gesture by one pointer frame.

        Args:
            pointer: Pointer sample in screen space
            artboard: The artboard owning the component, or the artboard being moved

        Returns:
            FrameResult for rendering, or None when idle
        """
        state = self._state
        if isinstance(state, Dragging):
            self._state, frame = drag_frame(state, pointer, artboard, self.viewport, self.settings)
            return frame
        if isinstance(state, Resizing):
            self._state, frame = resize_frame(state, pointer, artboard, self.viewport, self.settings)
            return frame
        if isinstance(state, MovingArtboard):
            self._state = artboard_frame(state, pointer, self.viewport)
            return FrameResult(
                rect=Rect(
                    x=self._state.candidate.x,
                    y=self._state.candidate.y,
                    width=artboard.dimensions.width,
                    height=artboard.dimensions.height,
                )
            )
        return None

    def end(self, artboard: Artboard) -> Optional[Rect]:
        """
        Commit the candidate and return to Idle.

        Returns the committed rect (canvas bounds for artboard moves), or None
        when idle or when the target no longer exists.
        """
        state = self._state
        self._state = Idle()

        if isinstance(state, MovingArtboard):
            if artboard.id != state.artboard_id:
                logger.warning(f"Artboard gesture for {state.artboard_id} ended on {artboard.id}")
                return None
            artboard.position = state.candidate
            logger.debug(f"Moved artboard {artboard.id} to ({state.candidate.x}, {state.candidate.y})")
            return artboard.bounds

        if isinstance(state, (Dragging, Resizing)):
            component = artboard.get_component(state.component_id)
            if component is None:
                logger.warning(f"Component {state.component_id} vanished during gesture")
                return None
            component.rect = state.candidate
            logger.debug(f"Committed {state.component_id} at {state.candidate}")
            return state.candidate

        return None

    def cancel(self) -> GestureState:
        """
        Abort the gesture and return the dropped state.

        Nothing was written during the gesture, so the target keeps its
        start rect (start_position for artboards).
        """
        state = self._state
        self._state = Idle()
        if not isinstance(state, Idle):
            logger.debug(f"Cancelled {type(state).__name__} gesture")
        return state
