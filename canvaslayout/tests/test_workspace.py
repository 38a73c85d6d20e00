"""Tests for the Workspace document model."""

import pytest

from canvaslayout.constraints.collision import would_collide
from canvaslayout.engine.workspace import Workspace
from canvaslayout.engine.z_order import ZOrderCommand
from canvaslayout.schema import Artboard, GridPosition, Point, Rect, Size


@pytest.fixture
def workspace(settings) -> Workspace:
    return Workspace(settings=settings)


class TestArtboards:
    """Tests for artboard management."""

    def test_horizontal_flow_placement(self, workspace) -> None:
        first = workspace.add_artboard("slide-16-9")
        second = workspace.add_artboard("slide-16-9")
        assert first.position == Point(x=100, y=100)
        assert second.position == Point(x=100 + 1920 + 100, y=100)
        assert first.dimensions == Size(width=1920, height=1080)

    def test_explicit_dimensions(self, workspace) -> None:
        artboard = workspace.add_artboard(dimensions=Size(width=500, height=400), name="Custom")
        assert artboard.format == "custom"
        assert artboard.name == "Custom"

    def test_unknown_preset(self, workspace) -> None:
        with pytest.raises(ValueError):
            workspace.add_artboard("napkin")

    def test_unknown_artboard_id(self, workspace) -> None:
        with pytest.raises(KeyError):
            workspace.get_artboard("nope")
        with pytest.raises(KeyError):
            workspace.remove_artboard("nope")

    def test_new_artboards_stack_on_top(self, workspace) -> None:
        a = workspace.add_artboard(artboard_id="a")
        b = workspace.add_artboard(artboard_id="b")
        assert workspace.artboard_order.ids() == ["a", "b"]
        assert (a.stack_index, b.stack_index) == (0, 1)

    def test_reorder_updates_stack_index(self, workspace) -> None:
        a = workspace.add_artboard(artboard_id="a")
        b = workspace.add_artboard(artboard_id="b")
        assert workspace.reorder_artboard(ZOrderCommand.BRING_TO_FRONT, "a")
        assert (a.stack_index, b.stack_index) == (1, 0)

    def test_remove_keeps_other_stack_indices(self, workspace) -> None:
        workspace.add_artboard(artboard_id="a")
        b = workspace.add_artboard(artboard_id="b")
        c = workspace.add_artboard(artboard_id="c")

        workspace.remove_artboard("a")

        assert (b.stack_index, c.stack_index) == (1, 2)
        assert workspace.artboard_order.ids() == ["b", "c"]
        assert workspace.add_artboard(artboard_id="d").stack_index == 3

    def test_remove_destroys_components(self, workspace) -> None:
        artboard = workspace.add_artboard(artboard_id="a")
        workspace.add_component("a")
        removed = workspace.remove_artboard("a")
        assert removed is artboard
        assert "a" not in workspace
        with pytest.raises(KeyError):
            workspace.component_order("a")

    def test_duplicate_lays_out_to_the_right(self, workspace) -> None:
        source = workspace.add_artboard("slide-16-9", artboard_id="src")
        workspace.add_component("src", component_id="c1")
        copies = workspace.duplicate_artboard("src", count=2)

        assert [c.position.x for c in copies] == [2120, 2120 + 1920 + 100]
        assert [c.name for c in copies] == ["Presentation Copy 1", "Presentation Copy 2"]
        assert all(c.id != source.id for c in copies)
        assert copies[0].components[0].id != "c1"
        assert copies[0].components[0].rect == source.components[0].rect
        assert workspace.artboard_order.ids()[-2:] == [c.id for c in copies]

    def test_duplicate_is_independent(self, workspace) -> None:
        workspace.add_artboard(artboard_id="src")
        workspace.add_component("src", component_id="c1")
        copy = workspace.duplicate_artboard("src")[0]
        copy.components[0].rect = Rect(x=300, y=300, width=10, height=10)
        assert workspace.get_component("src", "c1").rect != copy.components[0].rect

    def test_artboard_hit_test_top_down(self, workspace) -> None:
        workspace.add_artboard(dimensions=Size(width=500, height=500), position=Point(x=0, y=0), artboard_id="under")
        workspace.add_artboard(dimensions=Size(width=500, height=500), position=Point(x=200, y=200), artboard_id="over")
        assert workspace.artboard_at(Point(x=300, y=300)).id == "over"
        assert workspace.artboard_at(Point(x=50, y=50)).id == "under"
        assert workspace.artboard_at(Point(x=-5, y=0)) is None

    def test_invisible_artboards_are_skipped(self, workspace) -> None:
        workspace.add_artboard(dimensions=Size(width=500, height=500), position=Point(x=0, y=0), artboard_id="under")
        over = workspace.add_artboard(dimensions=Size(width=500, height=500), position=Point(x=0, y=0), artboard_id="over")
        over.visible = False
        assert workspace.artboard_at(Point(x=10, y=10)).id == "under"

    def test_load_existing_artboards_by_stack_index(self, settings) -> None:
        boards = [
            Artboard(id="top", dimensions=Size(width=10, height=10), stack_index=5),
            Artboard(id="bottom", dimensions=Size(width=10, height=10), stack_index=1),
        ]
        workspace = Workspace(boards, settings=settings)
        assert workspace.artboard_order.ids() == ["bottom", "top"]
        assert workspace.get_artboard("top").stack_index == 1


class TestComponents:
    """Tests for component management."""

    @pytest.fixture
    def board_id(self, workspace) -> str:
        return workspace.add_artboard(dimensions=Size(width=800, height=600), artboard_id="ab").id

    def test_drop_uses_type_defaults(self, workspace, board_id) -> None:
        component = workspace.add_component(board_id, "kpi")
        assert component.rect == Rect(x=0, y=0, width=180, height=120)
        assert component.min_size == Size(width=100, height=80)
        assert component.max_size == Size(width=400, height=300)

    def test_second_drop_avoids_first(self, workspace, board_id) -> None:
        first = workspace.add_component(board_id)
        second = workspace.add_component(board_id)
        assert not would_collide(second.rect, second.id, [first])

    def test_explicit_rect(self, workspace, board_id) -> None:
        rect = Rect(x=13, y=17, width=50, height=50)
        assert workspace.add_component(board_id, rect=rect).rect == rect

    def test_fixed_ratio_type(self, workspace, board_id) -> None:
        assert workspace.add_component(board_id, "chart-doughnut").aspect_ratio == 1.0

    def test_duplicate_component_id(self, workspace, board_id) -> None:
        workspace.add_component(board_id, component_id="c")
        with pytest.raises(ValueError):
            workspace.add_component(board_id, component_id="c")

    def test_unknown_component(self, workspace, board_id) -> None:
        with pytest.raises(KeyError):
            workspace.get_component(board_id, "ghost")
        with pytest.raises(KeyError):
            workspace.remove_component(board_id, "ghost")

    def test_z_index_follows_stack(self, workspace, board_id) -> None:
        a = workspace.add_component(board_id, component_id="a")
        b = workspace.add_component(board_id, component_id="b")
        c = workspace.add_component(board_id, component_id="c")
        assert [a.z_index, b.z_index, c.z_index] == [0, 1, 2]

        workspace.reorder_component(board_id, ZOrderCommand.BRING_TO_FRONT, "a")
        assert [a.z_index, b.z_index, c.z_index] == [2, 0, 1]

        workspace.remove_component(board_id, "b")
        assert [a.z_index, c.z_index] == [2, 1]

    def test_remove_keeps_other_z_indices(self, workspace, board_id) -> None:
        workspace.add_component(board_id, component_id="a")
        b = workspace.add_component(board_id, component_id="b")
        c = workspace.add_component(board_id, component_id="c")

        workspace.remove_component(board_id, "a")

        assert (b.z_index, c.z_index) == (1, 2)
        assert workspace.component_order(board_id).ids() == ["b", "c"]
        assert workspace.add_component(board_id, component_id="d").z_index == 3

    def test_component_hit_test(self, workspace, board_id) -> None:
        workspace.add_component(board_id, rect=Rect(x=0, y=0, width=100, height=100), component_id="under")
        workspace.add_component(board_id, rect=Rect(x=50, y=50, width=100, height=100), component_id="over")
        assert workspace.component_at(board_id, Point(x=60, y=60)).id == "over"
        workspace.reorder_component(board_id, ZOrderCommand.SEND_TO_BACK, "over")
        assert workspace.component_at(board_id, Point(x=60, y=60)).id == "under"

    def test_canvas_hit_test(self, workspace) -> None:
        workspace.add_artboard(dimensions=Size(width=400, height=400), position=Point(x=1000, y=0), artboard_id="far")
        workspace.add_component("far", rect=Rect(x=10, y=10, width=50, height=50), component_id="w")
        artboard, component = workspace.hit_test(Point(x=1020, y=20))
        assert artboard.id == "far"
        assert component.id == "w"
        artboard, component = workspace.hit_test(Point(x=1300, y=300))
        assert artboard.id == "far"
        assert component is None
        assert workspace.hit_test(Point(x=-1, y=-1)) == (None, None)


class TestAutoLayout:
    """Tests for committing auto-layout passes."""

    def test_auto_layout_commits_unlocked(self, workspace) -> None:
        board = workspace.add_artboard(dimensions=Size(width=1288, height=800), artboard_id="ab")
        pinned_rect = Rect(x=900, y=700, width=50, height=50)
        pinned = workspace.add_component("ab", rect=pinned_rect, component_id="pinned", locked=True)
        a = workspace.add_component("ab", component_id="a")
        b = workspace.add_component("ab", component_id="b")

        placements = workspace.auto_layout(board.id)

        assert len(placements) == 3
        assert pinned.rect == pinned_rect
        assert pinned.grid_position is None
        assert a.grid_position == GridPosition(col=0, row=0, col_span=6, row_span=3)
        assert b.grid_position == GridPosition(col=6, row=0, col_span=6, row_span=3)
        assert a.rect == Rect(x=0, y=0, width=632, height=136)
