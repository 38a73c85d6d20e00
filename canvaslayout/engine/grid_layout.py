"""
grid_layout.py — Auto-layout packing of components into a column grid.

This module places components that have no explicit position into the first
free cell of a virtual grid, scanning rows top-down and columns left-to-right
(top-left packing). Grid positions convert to artboard-local pixel rects via
a fixed column width and row height.

Packing order:
- Locked components pre-occupy their cells and are never moved
- Unlocked components with an explicit grid position keep it when it is free
- Everything else is auto-placed in insertion order
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..schema import Component, GridPosition, Placement, Rect
from .component_sizes import get_intrinsic_size
from .units import (
    LAYOUT_COLUMNS,
    LAYOUT_GAP_PX,
    LAYOUT_INITIAL_ROWS,
    LAYOUT_ROW_HEIGHT_PX,
    LAYOUT_ROW_LIMIT,
    clamp,
)

logger = logging.getLogger(__name__)


# =============================================================================
# GRID CONFIGURATION
# =============================================================================

@dataclass
class GridConfig:
    """Column grid used by the packer."""
    columns: int = LAYOUT_COLUMNS
    row_height: float = LAYOUT_ROW_HEIGHT_PX
    gap: float = LAYOUT_GAP_PX
    row_limit: int = LAYOUT_ROW_LIMIT    # Forced placement beyond this row


# =============================================================================
# OCCUPANCY MAP
# =============================================================================

class OccupancyMap:
    """
    Transient columns × rows boolean grid built per packing pass.

    Rows are added on demand; columns are fixed.
    """

    def __init__(self, columns: int, rows: int = LAYOUT_INITIAL_ROWS):
        self.columns = columns
        self._cells: List[List[bool]] = [[False] * columns for _ in range(rows)]

    @property
    def rows(self) -> int:
        return len(self._cells)

    def ensure_rows(self, count: int) -> None:
        while len(self._cells) < count:
            self._cells.append([False] * self.columns)

    def is_free(self, col: int, row: int, col_span: int, row_span: int) -> bool:
        """True if the footprint is inside the columns and fully unoccupied."""
        if col < 0 or row < 0 or col + col_span > self.columns:
            return False
        self.ensure_rows(row + row_span)
        for r in range(row, row + row_span):
            for c in range(col, col + col_span):
                if self._cells[r][c]:
                    return False
        return True

    def mark(self, position: GridPosition) -> None:
        """Mark a footprint occupied; columns past the right edge are ignored."""
        self.ensure_rows(position.end_row)
        for r in range(position.row, position.end_row):
            for c in range(position.col, min(position.end_col, self.columns)):
                self._cells[r][c] = True

    def is_occupied(self, col: int, row: int) -> bool:
        if row >= len(self._cells) or not 0 <= col < self.columns:
            return False
        return self._cells[row][col]


# =============================================================================
# GRID ↔ PIXEL CONVERSION
# =============================================================================

def column_width(container_width: float, config: GridConfig) -> float:
    """Width of one column once gaps are taken out."""
    total_gap = config.gap * (config.columns - 1)
    return max(0.0, (container_width - total_gap) / config.columns)


def grid_position_to_rect(position: GridPosition, col_width: float, config: GridConfig) -> Rect:
    return Rect(
        x=position.col * (col_width + config.gap),
        y=position.row * (config.row_height + config.gap),
        width=position.col_span * col_width + (position.col_span - 1) * config.gap,
        height=position.row_span * config.row_height + (position.row_span - 1) * config.gap,
    )


def rect_to_grid_position(rect: Rect, col_width: float, config: GridConfig) -> GridPosition:
    """Nearest grid footprint for a pixel rect (inverse of grid_position_to_rect)."""
    col_pitch = col_width + config.gap
    row_pitch = config.row_height + config.gap

    col = int(clamp(round(rect.x / col_pitch), 0, config.columns - 1)) if col_pitch > 0 else 0
    row = max(0, round(rect.y / row_pitch)) if row_pitch > 0 else 0
    col_span = max(1, round((rect.width + config.gap) / col_pitch)) if col_pitch > 0 else 1
    row_span = max(1, round((rect.height + config.gap) / row_pitch)) if row_pitch > 0 else 1

    return GridPosition(
        col=col,
        row=row,
        col_span=min(col_span, config.columns - col),
        row_span=row_span,
    )


def total_layout_height(placements: Sequence[Placement], config: GridConfig) -> float:
    """Pixel height needed to show every placement."""
    if not placements:
        return 0.0
    max_row = max(p.grid_position.end_row for p in placements)
    return max_row * (config.row_height + config.gap) - config.gap


# =============================================================================
# SPAN COMPUTATION
# =============================================================================

def compute_spans(component_type: str, col_width: float, config: GridConfig) -> Tuple[int, int]:
    """
    Column/row span for a component type.

    Fixed-ratio types recompute their row span from the pixel width of their
    default column span, clamped to the type's row limits.
    """
    intrinsic = get_intrinsic_size(component_type)
    col_span = min(intrinsic.default_cols, config.columns)
    row_span = intrinsic.default_rows

    if intrinsic.has_fixed_ratio and config.row_height > 0:
        width = col_span * col_width + (col_span - 1) * config.gap
        target_height = width / intrinsic.aspect_ratio
        row_span = int(clamp(
            round(target_height / config.row_height),
            intrinsic.min_rows,
            intrinsic.max_rows,
        ))

    return col_span, max(1, row_span)


# =============================================================================
# PACKING
# =============================================================================

def find_next_available(
    occupancy: OccupancyMap,
    col_span: int,
    row_span: int,
    config: GridConfig,
) -> GridPosition:
    """
    First free top-left position for a footprint.

    Rows are scanned from 0 upward, columns left-to-right. If nothing fits
    within the row limit, the footprint is forced to (0, row_limit).
    """
    col_span = min(col_span, occupancy.columns)
    for row in range(config.row_limit):
        for col in range(occupancy.columns - col_span + 1):
            if occupancy.is_free(col, row, col_span, row_span):
                return GridPosition(col=col, row=row, col_span=col_span, row_span=row_span)

    logger.warning(
        f"No free {col_span}x{row_span} cell within {config.row_limit} rows; "
        f"forcing placement at row {config.row_limit}"
    )
    return GridPosition(col=0, row=config.row_limit, col_span=col_span, row_span=row_span)


def pack_components(
    components: Sequence[Component],
    container_width: float,
    config: Optional[GridConfig] = None,
) -> List[Placement]:
    """
    Compute placements for every component on an artboard.

    Args:
        components: Components in insertion order
        container_width: Artboard width in pixels
        config: Grid configuration (defaults from units.py)

    Returns:
        One Placement per component, locked first, then in packing order
    """
    config = config or GridConfig()
    if not components:
        return []

    col_width = column_width(container_width, config)
    occupancy = OccupancyMap(config.columns)
    placements: List[Placement] = []

    # Pass 1: locked components keep their cells and their rect
    for component in components:
        if not component.locked:
            continue
        if component.grid_position is not None:
            position = component.grid_position
            rect = grid_position_to_rect(position, col_width, config)
        else:
            position = rect_to_grid_position(component.rect, col_width, config)
            rect = component.rect
        occupancy.mark(position)
        placements.append(Placement(id=component.id, grid_position=position, rect=rect))

    # Pass 2: unlocked components with a free explicit position stay put
    pending: List[Tuple[Component, int, int]] = []
    for component in components:
        if component.locked:
            continue
        position = component.grid_position
        if position is not None and occupancy.is_free(
            position.col, position.row, position.col_span, position.row_span
        ):
            occupancy.mark(position)
            placements.append(Placement(
                id=component.id,
                grid_position=position,
                rect=grid_position_to_rect(position, col_width, config),
            ))
            continue

        if position is not None:
            col_span, row_span = position.col_span, position.row_span
        else:
            col_span, row_span = compute_spans(component.component_type, col_width, config)
        pending.append((component, col_span, row_span))

    # Pass 3: top-left packing for the rest
    for component, col_span, row_span in pending:
        position = find_next_available(occupancy, col_span, row_span, config)
        occupancy.mark(position)
        placements.append(Placement(
            id=component.id,
            grid_position=position,
            rect=grid_position_to_rect(position, col_width, config),
        ))

    logger.info(
        f"Packed {len(pending)} of {len(components)} components "
        f"into {config.columns} columns"
    )
    return placements
