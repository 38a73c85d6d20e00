"""Canvas layout engine for artboard-based dashboard editors."""

from canvaslayout.config import EngineSettings, get_settings
from canvaslayout.engine.interaction import (
    Dragging,
    FrameResult,
    Idle,
    InteractionController,
    MovingArtboard,
    Resizing,
)
from canvaslayout.engine.viewport import Viewport
from canvaslayout.engine.workspace import Workspace
from canvaslayout.engine.z_order import StackOrder, ZOrderCommand
from canvaslayout.schema import (
    AlignmentGuide,
    Artboard,
    Component,
    GridPosition,
    Modifiers,
    Placement,
    Point,
    PointerInput,
    Rect,
    ResizeHandle,
    Size,
)

__version__ = "0.1.0"

__all__ = [
    "AlignmentGuide",
    "Artboard",
    "Component",
    "Dragging",
    "EngineSettings",
    "FrameResult",
    "GridPosition",
    "Idle",
    "InteractionController",
    "Modifiers",
    "MovingArtboard",
    "Placement",
    "Point",
    "PointerInput",
    "Rect",
    "ResizeHandle",
    "Resizing",
    "Size",
    "StackOrder",
    "Viewport",
    "Workspace",
    "ZOrderCommand",
    "get_settings",
]
