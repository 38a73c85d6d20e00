"""Pydantic v2 models for the artboard layout engine.

This module defines the data structures shared by every part of the engine:
rectangles, sizes and points in artboard-local units, resize handles, snap
lines, grid positions, components and artboards. All measurements are floats
in artboard-local pixels unless otherwise specified.
"""

import logging
import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class Axis(str, Enum):
    """Coordinate axis a snap line constrains."""

    X = "x"
    Y = "y"


class SnapLineKind(str, Enum):
    """Which edge or center produced a snap line."""

    LEFT = "left"
    RIGHT = "right"
    CENTER_X = "centerX"
    TOP = "top"
    BOTTOM = "bottom"
    CENTER_Y = "centerY"
    CONTAINER_LEFT = "containerLeft"
    CONTAINER_RIGHT = "containerRight"
    CONTAINER_CENTER_X = "containerCenterX"
    CONTAINER_TOP = "containerTop"
    CONTAINER_BOTTOM = "containerBottom"
    CONTAINER_CENTER_Y = "containerCenterY"


class SnapSource(str, Enum):
    """What corrected the moving rect in a snap resolution."""

    NONE = "none"
    ALIGNMENT = "alignment"
    GRID = "grid"


class ResizeHandle(str, Enum):
    """The 8 resize grips of a component."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def moves_left(self) -> bool:
        """Handle drags the left edge (origin x moves)."""
        return "w" in self.value

    @property
    def moves_right(self) -> bool:
        """Handle drags the right edge."""
        return "e" in self.value

    @property
    def moves_top(self) -> bool:
        """Handle drags the top edge (origin y moves)."""
        return "n" in self.value

    @property
    def moves_bottom(self) -> bool:
        """Handle drags the bottom edge."""
        return "s" in self.value

    @property
    def is_corner(self) -> bool:
        return len(self.value) == 2

    @property
    def is_vertical_edge(self) -> bool:
        """Top or bottom edge handle."""
        return self in (ResizeHandle.N, ResizeHandle.S)


# ============================================================================
# Geometry Models
# ============================================================================


class Point(BaseModel):
    """A point (or delta) in some coordinate space."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class Size(BaseModel):
    """Width/height pair."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(ge=0, description="Width in pixels")
    height: float = Field(ge=0, description="Height in pixels")


class Rect(BaseModel):
    """Axis-aligned rectangle in artboard-local pixels."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Left position")
    y: float = Field(description="Top position")
    width: float = Field(ge=0, description="Width")
    height: float = Field(ge=0, description="Height")

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        """Right edge position."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge position."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """Horizontal center."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Vertical center."""
        return self.y + self.height / 2

    @property
    def origin(self) -> Point:
        return Point(x=self.x, y=self.y)

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @property
    def is_degenerate(self) -> bool:
        """Zero-area rects never collide with anything."""
        return self.width <= 0 or self.height <= 0

    def moved_to(self, x: float, y: float) -> "Rect":
        """Same size, new top-left."""
        return Rect(x=x, y=y, width=self.width, height=self.height)

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)

    @classmethod
    def from_edges(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        """Build a rect from its edges, collapsing inverted spans to zero."""
        return cls(
            x=left,
            y=top,
            width=max(0.0, right - left),
            height=max(0.0, bottom - top),
        )


# ============================================================================
# Interaction Models
# ============================================================================


class Modifiers(BaseModel):
    """Host-independent modifier flags for a pointer event."""

    model_config = ConfigDict(frozen=True)

    bypass_snap: bool = Field(default=False, description="Skip grid and alignment snapping")
    aspect_lock: bool = Field(default=False, description="Keep the pre-gesture aspect ratio")


class PointerInput(BaseModel):
    """A pointer sample in screen space, adapted from the host's native event."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    modifiers: Modifiers = Field(default_factory=Modifiers)

    @property
    def point(self) -> Point:
        return Point(x=self.x, y=self.y)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


class SnapLine(BaseModel):
    """A candidate snap coordinate derived from a sibling or the container."""

    model_config = ConfigDict(frozen=True)

    axis: Axis
    position: float
    kind: SnapLineKind
    source_id: Optional[str] = Field(
        default=None, description="Sibling component id, None for container lines"
    )

    @property
    def from_container(self) -> bool:
        return self.source_id is None


class AlignmentGuide(SnapLine):
    """A snap line that actually corrected the moving rect this frame."""

    component_ids: list[str] = Field(
        default_factory=list, description="Moving component plus aligned sibling"
    )


# ============================================================================
# Grid Models
# ============================================================================


class GridPosition(BaseModel):
    """Coarse placement used by the auto-layout packer."""

    model_config = ConfigDict(frozen=True)

    col: int = Field(ge=0)
    row: int = Field(ge=0)
    col_span: int = Field(ge=1)
    row_span: int = Field(ge=1)

    @property
    def end_col(self) -> int:
        """Exclusive column end."""
        return self.col + self.col_span

    @property
    def end_row(self) -> int:
        """Exclusive row end."""
        return self.row + self.row_span

    def intersects(self, other: "GridPosition") -> bool:
        return not (
            self.end_col <= other.col
            or self.col >= other.end_col
            or self.end_row <= other.row
            or self.row >= other.end_row
        )


class Placement(BaseModel):
    """Auto-layout output for one component."""

    model_config = ConfigDict(frozen=True)

    id: str
    grid_position: GridPosition
    rect: Rect


# ============================================================================
# Document Models
# ============================================================================


class Component(BaseModel):
    """A widget placed on an artboard."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    component_type: str = Field(default="default", description="Key into the size tables")
    rect: Rect
    z_index: int = 0
    locked: bool = False
    min_size: Size = Field(default_factory=lambda: Size(width=0, height=0))
    max_size: Optional[Size] = None
    aspect_ratio: Optional[float] = Field(default=None, gt=0, description="width / height")
    grid_position: Optional[GridPosition] = None

    @model_validator(mode="after")
    def _normalize_size_limits(self) -> "Component":
        max_size = self.max_size
        if max_size is None:
            return self
        if max_size.width >= self.min_size.width and max_size.height >= self.min_size.height:
            return self

        logger.warning(
            f"Component {self.id} has min_size larger than max_size; "
            f"using min_size as the upper bound"
        )
        # object.__setattr__ avoids re-entering validate_assignment
        object.__setattr__(
            self,
            "max_size",
            Size(
                width=max(max_size.width, self.min_size.width),
                height=max(max_size.height, self.min_size.height),
            ),
        )
        return self


class Artboard(BaseModel):
    """A fixed-size canvas region that owns an ordered set of components."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str = "Artboard"
    format: str = "custom"
    position: Point = Field(default_factory=Point, description="Top-left on the canvas")
    dimensions: Size
    zoom_default: float = Field(default=1.0, gt=0)
    components: list[Component] = Field(default_factory=list)
    stack_index: int = 0
    locked: bool = False
    visible: bool = True

    @property
    def bounds(self) -> Rect:
        """Artboard rect in canvas space."""
        return Rect(
            x=self.position.x,
            y=self.position.y,
            width=self.dimensions.width,
            height=self.dimensions.height,
        )

    def get_component(self, component_id: str) -> Optional[Component]:
        for component in self.components:
            if component.id == component_id:
                return component
        return None
