"""
workspace.py — The document-level owner of artboards and components.

A Workspace holds every artboard on the infinite canvas, one StackOrder for
the artboards and one per artboard for its components. It is the commit point
for structural edits (add/remove/duplicate/reorder/auto-layout); per-frame
gesture work lives in interaction.py and never touches the Workspace until
the gesture ends.

New items get the next index above the current top. Removals leave the
remaining indices alone; only reorders renumber them from the StackOrder.

Lookups of unknown artboard or component ids raise KeyError.
"""

import logging
import uuid
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import EngineSettings, get_settings
from ..constraints.collision import find_drop_position
from ..schema import Artboard, Component, Placement, Point, Rect, Size
from .artboard_presets import DEFAULT_PRESET, get_preset
from .component_sizes import get_aspect_ratio, get_default_size, get_max_size, get_min_size
from .grid_layout import GridConfig, pack_components
from .z_order import StackOrder, ZOrderCommand

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class Workspace:
    """Artboards, their components and both stacking orders."""

    def __init__(self, artboards: Iterable[Artboard] = (), settings: Optional[EngineSettings] = None):
        self.settings = settings or get_settings()
        self._artboards: Dict[str, Artboard] = {}
        self.artboard_order = StackOrder()
        self._component_orders: Dict[str, StackOrder] = {}

        for artboard in sorted(artboards, key=lambda a: a.stack_index):
            self._register(artboard)
        self._sync_artboard_indices()

    def _register(self, artboard: Artboard) -> None:
        if artboard.id in self._artboards:
            raise ValueError(f"Duplicate artboard id '{artboard.id}'")
        self._artboards[artboard.id] = artboard
        self.artboard_order.add(artboard.id)
        order = StackOrder(c.id for c in sorted(artboard.components, key=lambda c: c.z_index))
        self._component_orders[artboard.id] = order
        self._sync_component_indices(artboard)

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    @property
    def artboards(self) -> List[Artboard]:
        """Artboards in creation order."""
        return list(self._artboards.values())

    def get_artboard(self, artboard_id: str) -> Artboard:
        try:
            return self._artboards[artboard_id]
        except KeyError:
            raise KeyError(f"Unknown artboard '{artboard_id}'") from None

    def get_component(self, artboard_id: str, component_id: str) -> Component:
        component = self.get_artboard(artboard_id).get_component(component_id)
        if component is None:
            raise KeyError(f"Unknown component '{component_id}' on artboard '{artboard_id}'")
        return component

    def component_order(self, artboard_id: str) -> StackOrder:
        self.get_artboard(artboard_id)
        return self._component_orders[artboard_id]

    def __len__(self) -> int:
        return len(self._artboards)

    def __contains__(self, artboard_id: object) -> bool:
        return artboard_id in self._artboards

    # =========================================================================
    # ARTBOARDS
    # =========================================================================

    def default_position(self) -> Point:
        """Horizontal flow: first at the origin, then right of the last artboard."""
        cfg = self.settings.artboards
        if not self._artboards:
            return Point(x=cfg.origin_x, y=cfg.origin_y)
        last = self.artboards[-1]
        return Point(x=last.bounds.right + cfg.spacing, y=last.position.y)

    def add_artboard(
        self,
        fmt: str = DEFAULT_PRESET,
        *,
        dimensions: Optional[Size] = None,
        name: Optional[str] = None,
        position: Optional[Point] = None,
        artboard_id: Optional[str] = None,
    ) -> Artboard:
        """
        Create an artboard from a preset (or explicit dimensions) on top of the stack.

        Raises:
            ValueError: unknown preset name
        """
        if dimensions is None:
            preset = get_preset(fmt)
            dimensions = preset.dimensions
            default_name = preset.category.value.capitalize()
        else:
            fmt = "custom"
            default_name = "Artboard"

        artboard = Artboard(
            id=artboard_id or _new_id("artboard"),
            name=name or default_name,
            format=fmt,
            position=position or self.default_position(),
            dimensions=dimensions,
            stack_index=self._next_stack_index(),
        )
        self._register(artboard)
        logger.info(
            f"Added artboard {artboard.id} ({fmt}, "
            f"{dimensions.width:g}x{dimensions.height:g}) at "
            f"({artboard.position.x:g}, {artboard.position.y:g})"
        )
        return artboard

    def remove_artboard(self, artboard_id: str) -> Artboard:
        """Remove an artboard together with all its components. Others keep their stack_index."""
        artboard = self.get_artboard(artboard_id)
        del self._artboards[artboard_id]
        del self._component_orders[artboard_id]
        self.artboard_order.remove(artboard_id)
        logger.info(f"Removed artboard {artboard_id} with {len(artboard.components)} components")
        return artboard

    def duplicate_artboard(self, artboard_id: str, count: int = 1) -> List[Artboard]:
        """
        Deep-copy an artboard `count` times with fresh ids.

        Copies are laid out left to right after the rightmost artboard, each
        separated by the configured spacing. Copies are never locked.
        """
        source = self.get_artboard(artboard_id)
        spacing = self.settings.artboards.spacing
        next_x = max(a.bounds.right for a in self._artboards.values()) + spacing

        copies: List[Artboard] = []
        for i in range(count):
            components = [
                c.model_copy(update={"id": _new_id("component")}, deep=True)
                for c in source.components
            ]
            suffix = f" {i + 1}" if count > 1 else ""
            copy = source.model_copy(
                update={
                    "id": _new_id("artboard"),
                    "name": f"{source.name} Copy{suffix}",
                    "position": Point(x=next_x, y=source.position.y),
                    "components": components,
                    "locked": False,
                    "stack_index": self._next_stack_index(),
                },
                deep=True,
            )
            self._register(copy)
            copies.append(copy)
            next_x += copy.dimensions.width + spacing

        logger.info(f"Duplicated artboard {artboard_id} {count} time(s)")
        return copies

    def artboard_at(self, point: Point) -> Optional[Artboard]:
        """Topmost visible artboard containing a canvas point."""
        rects = {a.id: a.bounds for a in self._artboards.values() if a.visible}
        hit = self.artboard_order.hit_test(point, rects)
        return self._artboards[hit] if hit is not None else None

    def reorder_artboard(self, command: ZOrderCommand, artboard_id: str) -> bool:
        changed = self.artboard_order.apply(command, artboard_id)
        if changed:
            self._sync_artboard_indices()
        return changed

    def _sync_artboard_indices(self) -> None:
        for index, item_id in enumerate(self.artboard_order):
            self._artboards[item_id].stack_index = index

    def _next_stack_index(self) -> int:
        return max((a.stack_index for a in self._artboards.values()), default=-1) + 1

    # =========================================================================
    # COMPONENTS
    # =========================================================================

    def add_component(
        self,
        artboard_id: str,
        component_type: str = "default",
        *,
        position: Optional[Point] = None,
        rect: Optional[Rect] = None,
        component_id: Optional[str] = None,
        locked: bool = False,
    ) -> Component:
        """
        Drop a new component on an artboard, on top of its stack.

        With an explicit rect the component is placed exactly there. Otherwise
        the type's default size is dropped at `position` (artboard-local,
        default top-left) and moved to the nearest free spot.
        """
        artboard = self.get_artboard(artboard_id)
        if rect is None:
            size = get_default_size(component_type)
            origin = position or Point()
            desired = Rect(x=origin.x, y=origin.y, width=size.width, height=size.height)
            rect = find_drop_position(
                desired,
                artboard.components,
                container=artboard.dimensions,
                grid_size=self.settings.snap.grid_size,
                max_radius=self.settings.collision.search_radius,
            )

        component = Component(
            id=component_id or _new_id("component"),
            component_type=component_type,
            rect=rect,
            locked=locked,
            min_size=get_min_size(component_type),
            max_size=get_max_size(component_type),
            aspect_ratio=get_aspect_ratio(component_type),
            z_index=max((c.z_index for c in artboard.components), default=-1) + 1,
        )
        if artboard.get_component(component.id) is not None:
            raise ValueError(f"Duplicate component id '{component.id}' on artboard '{artboard_id}'")

        artboard.components.append(component)
        self._component_orders[artboard_id].add(component.id)
        logger.info(f"Added {component_type} {component.id} to {artboard_id} at ({rect.x:g}, {rect.y:g})")
        return component

    def remove_component(self, artboard_id: str, component_id: str) -> Component:
        """Drop a component from its artboard. Others keep their z_index."""
        artboard = self.get_artboard(artboard_id)
        component = self.get_component(artboard_id, component_id)
        artboard.components = [c for c in artboard.components if c.id != component_id]
        self._component_orders[artboard_id].remove(component_id)
        logger.info(f"Removed component {component_id} from {artboard_id}")
        return component

    def reorder_component(self, artboard_id: str, command: ZOrderCommand, component_id: str) -> bool:
        artboard = self.get_artboard(artboard_id)
        changed = self._component_orders[artboard_id].apply(command, component_id)
        if changed:
            self._sync_component_indices(artboard)
        return changed

    def component_at(self, artboard_id: str, point: Point) -> Optional[Component]:
        """Topmost component containing an artboard-local point."""
        artboard = self.get_artboard(artboard_id)
        rects = {c.id: c.rect for c in artboard.components}
        hit = self._component_orders[artboard_id].hit_test(point, rects)
        return artboard.get_component(hit) if hit is not None else None

    def hit_test(self, point: Point) -> Tuple[Optional[Artboard], Optional[Component]]:
        """Resolve a canvas point to (artboard, component) top-down."""
        artboard = self.artboard_at(point)
        if artboard is None:
            return None, None
        local = Point(x=point.x - artboard.position.x, y=point.y - artboard.position.y)
        return artboard, self.component_at(artboard.id, local)

    def _sync_component_indices(self, artboard: Artboard) -> None:
        order = self._component_orders[artboard.id]
        for component in artboard.components:
            index = order.index_of(component.id)
            if index is not None and component.z_index != index:
                component.z_index = index

    # =========================================================================
    # AUTO-LAYOUT
    # =========================================================================

    def grid_config(self) -> GridConfig:
        cfg = self.settings.layout
        return GridConfig(
            columns=cfg.columns,
            row_height=cfg.row_height,
            gap=cfg.gap,
            row_limit=cfg.row_limit,
        )

    def auto_layout(self, artboard_id: str) -> List[Placement]:
        """
        Pack an artboard's components and commit the result.

        Locked components are left untouched; every other component gets
        the placement's rect and grid position.
        """
        artboard = self.get_artboard(artboard_id)
        placements = pack_components(artboard.components, artboard.dimensions.width, self.grid_config())

        by_id = {c.id: c for c in artboard.components}
        for placement in placements:
            component = by_id[placement.id]
            if component.locked:
                continue
            component.rect = placement.rect
            component.grid_position = placement.grid_position

        logger.info(f"Auto-layout of {artboard_id} placed {len(placements)} components")
        return placements
