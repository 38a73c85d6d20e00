"""Tests for auto-layout packing."""

import itertools
import logging

import pytest

from canvaslayout.engine.grid_layout import (
    GridConfig,
    OccupancyMap,
    column_width,
    compute_spans,
    find_next_available,
    grid_position_to_rect,
    pack_components,
    rect_to_grid_position,
    total_layout_height,
)
from canvaslayout.schema import Component, GridPosition, Rect

# 12 columns of 100px with 8px gaps
CONTAINER_WIDTH = 12 * 100 + 11 * 8


def _component(component_id: str, component_type: str = "default", **kwargs) -> Component:
    return Component(
        id=component_id,
        component_type=component_type,
        rect=Rect(x=0, y=0, width=10, height=10),
        **kwargs,
    )


class TestConversions:
    """Tests for grid ↔ pixel conversion."""

    def test_column_width(self) -> None:
        assert column_width(CONTAINER_WIDTH, GridConfig()) == 100

    def test_grid_position_to_rect(self) -> None:
        rect = grid_position_to_rect(GridPosition(col=6, row=2, col_span=3, row_span=2), 100, GridConfig())
        assert rect == Rect(x=648, y=96, width=316, height=88)

    def test_rect_to_grid_position_inverts(self) -> None:
        config = GridConfig()
        position = GridPosition(col=6, row=2, col_span=3, row_span=2)
        rect = grid_position_to_rect(position, 100, config)
        assert rect_to_grid_position(rect, 100, config) == position

    def test_rect_to_grid_position_clamps_to_columns(self) -> None:
        position = rect_to_grid_position(Rect(x=1000, y=0, width=900, height=40), 100, GridConfig())
        assert position.end_col <= 12

    def test_total_layout_height(self) -> None:
        placements = pack_components([_component("a"), _component("b")], CONTAINER_WIDTH)
        assert total_layout_height(placements, GridConfig()) == 3 * 48 - 8
        assert total_layout_height([], GridConfig()) == 0


class TestSpans:
    """Tests for span computation from the size tables."""

    def test_default_type(self) -> None:
        assert compute_spans("default", 100, GridConfig()) == (6, 3)

    def test_unknown_type_falls_back_to_default(self) -> None:
        assert compute_spans("sparkline", 100, GridConfig()) == (6, 3)

    def test_fixed_ratio_chart(self) -> None:
        """Test a 16:9 chart's rows follow its pixel width."""
        # 6 cols = 640px wide → 360px tall → 9 rows, clamped to max 8
        assert compute_spans("chart-line", 100, GridConfig()) == (6, 8)

    def test_fixed_ratio_square(self) -> None:
        # 4 cols = 424px → 424px tall → 11 rows, clamped to max 6
        assert compute_spans("chart-doughnut", 100, GridConfig()) == (4, 6)

    def test_fixed_ratio_small_columns(self) -> None:
        # 6 cols of 20px = 160px → 90px tall → 2 rows, clamped to min 3
        assert compute_spans("chart-bar", 20, GridConfig()) == (6, 3)

    def test_col_span_capped_to_columns(self) -> None:
        assert compute_spans("heading", 100, GridConfig(columns=4))[0] == 4


class TestOccupancyMap:
    """Tests for the occupancy grid."""

    def test_grows_rows_on_demand(self) -> None:
        occupancy = OccupancyMap(12, rows=2)
        occupancy.mark(GridPosition(col=0, row=5, col_span=2, row_span=2))
        assert occupancy.rows == 7
        assert occupancy.is_occupied(1, 6)
        assert not occupancy.is_free(0, 5, 1, 1)

    def test_right_edge_is_not_free(self) -> None:
        occupancy = OccupancyMap(12)
        assert not occupancy.is_free(8, 0, 6, 1)
        assert occupancy.is_free(6, 0, 6, 1)


class TestPackComponents:
    """Tests for pack_components."""

    def test_three_half_width_components(self) -> None:
        """Test two 6-col components share a row and the third wraps."""
        placements = pack_components(
            [_component("a"), _component("b"), _component("c")], CONTAINER_WIDTH
        )
        positions = {p.id: (p.grid_position.col, p.grid_position.row) for p in placements}
        assert positions == {"a": (0, 0), "b": (6, 0), "c": (0, 3)}

    def test_empty(self) -> None:
        assert pack_components([], CONTAINER_WIDTH) == []

    def test_locked_component_preoccupies(self) -> None:
        locked = _component(
            "locked", locked=True,
            grid_position=GridPosition(col=0, row=0, col_span=6, row_span=3),
        )
        placements = pack_components([_component("a"), locked, _component("b")], CONTAINER_WIDTH)
        by_id = {p.id: p.grid_position for p in placements}
        assert (by_id["locked"].col, by_id["locked"].row) == (0, 0)
        assert (by_id["a"].col, by_id["a"].row) == (6, 0)
        assert (by_id["b"].col, by_id["b"].row) == (0, 3)

    def test_locked_without_grid_position_keeps_rect(self) -> None:
        locked = Component(
            id="pinned", rect=Rect(x=5, y=7, width=200, height=80), locked=True,
        )
        placements = pack_components([locked], CONTAINER_WIDTH)
        assert placements[0].rect == locked.rect

    def test_explicit_position_is_kept_when_free(self) -> None:
        explicit = _component("x", grid_position=GridPosition(col=3, row=4, col_span=2, row_span=2))
        placements = pack_components([explicit], CONTAINER_WIDTH)
        assert placements[0].grid_position == explicit.grid_position

    def test_blocked_explicit_position_is_repacked(self) -> None:
        locked = _component(
            "locked", locked=True,
            grid_position=GridPosition(col=0, row=0, col_span=12, row_span=2),
        )
        blocked = _component("x", grid_position=GridPosition(col=0, row=1, col_span=4, row_span=2))
        placements = pack_components([locked, blocked], CONTAINER_WIDTH)
        moved = next(p for p in placements if p.id == "x")
        assert (moved.grid_position.col, moved.grid_position.row) == (0, 2)
        assert moved.grid_position.col_span == 4

    def test_full_width_heading(self) -> None:
        placements = pack_components([_component("h", "heading"), _component("a")], CONTAINER_WIDTH)
        by_id = {p.id: p.grid_position for p in placements}
        assert by_id["h"].col_span == 12
        assert by_id["a"].row == 1

    def test_footprints_never_intersect(self) -> None:
        types = ["chart-line", "kpi", "heading", "chart-doughnut", "default", "kpi", "chart-bar"]
        components = [_component(f"c{i}", t) for i, t in enumerate(types * 3)]
        placements = pack_components(components, CONTAINER_WIDTH)
        assert len(placements) == len(components)
        for a, b in itertools.combinations(placements, 2):
            assert not a.grid_position.intersects(b.grid_position)
        assert all(p.grid_position.end_col <= 12 for p in placements)

    def test_row_limit_forces_placement(self, caplog) -> None:
        config = GridConfig(row_limit=2)
        with caplog.at_level(logging.WARNING):
            placements = pack_components(
                [_component("a"), _component("b"), _component("c")], CONTAINER_WIDTH, config
            )
        forced = next(p for p in placements if p.id == "c")
        assert (forced.grid_position.col, forced.grid_position.row) == (0, 2)
        assert "forcing placement" in caplog.text

    def test_find_next_available_scans_rows_first(self) -> None:
        occupancy = OccupancyMap(12)
        occupancy.mark(GridPosition(col=0, row=0, col_span=4, row_span=1))
        position = find_next_available(occupancy, 4, 1, GridConfig())
        assert (position.col, position.row) == (4, 0)

    @pytest.mark.parametrize("container_width", [320, CONTAINER_WIDTH, 1920])
    def test_rects_match_grid_positions(self, container_width: float) -> None:
        config = GridConfig()
        placements = pack_components([_component("a"), _component("b", "kpi")], container_width, config)
        col_width = column_width(container_width, config)
        for placement in placements:
            assert placement.rect == grid_position_to_rect(placement.grid_position, col_width, config)
