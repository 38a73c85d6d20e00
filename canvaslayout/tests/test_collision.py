"""Tests for collision detection and free-position search."""

import logging

import pytest

from canvaslayout.constraints.collision import (
    CollisionPolicy,
    find_colliding,
    find_drop_position,
    find_nearest_free_position,
    resolve_collision,
    would_collide,
)
from canvaslayout.constraints.snapping import snap_rect_to_grid
from canvaslayout.engine.geometry import clamp_to_bounds
from canvaslayout.schema import Rect, Size


def _rect(x, y, w, h) -> Rect:
    return Rect(x=x, y=y, width=w, height=h)


class TestWouldCollide:
    """Tests for would_collide."""

    def test_overlap_detected(self, two_siblings) -> None:
        assert would_collide(_rect(90, 10, 20, 20), "m", two_siblings)

    def test_touching_is_not_colliding(self, two_siblings) -> None:
        """Test a candidate filling the gap exactly does not collide."""
        assert not would_collide(_rect(100, 0, 50, 50), "m", two_siblings)

    def test_moving_component_is_excluded(self, two_siblings) -> None:
        """Test a component never collides with itself."""
        assert not would_collide(_rect(10, 10, 20, 20), "a", two_siblings)

    def test_empty_siblings(self) -> None:
        assert not would_collide(_rect(0, 0, 10, 10), None, [])

    def test_find_colliding_in_input_order(self, two_siblings) -> None:
        hits = find_colliding(_rect(50, 0, 150, 10), None, two_siblings)
        assert [c.id for c in hits] == ["a", "b"]

    def test_non_collision_is_stable(self, two_siblings) -> None:
        """Test a clear candidate is unchanged by snapping and clamping again."""
        container = Size(width=800, height=600)
        candidate = clamp_to_bounds(snap_rect_to_grid(_rect(300, 96, 40, 40), 8), container)
        assert not would_collide(candidate, "m", two_siblings)
        again = clamp_to_bounds(snap_rect_to_grid(candidate, 8), container)
        assert again == candidate


class TestNearestFreePosition:
    """Tests for the ring search."""

    def test_clear_start_returned_directly(self, two_siblings) -> None:
        found = find_nearest_free_position(_rect(300, 100, 50, 50), None, two_siblings, grid_size=10)
        assert found == _rect(300, 100, 50, 50)

    def test_start_is_grid_snapped(self) -> None:
        found = find_nearest_free_position(_rect(303, 97, 50, 50), None, [], grid_size=10)
        assert found == _rect(300, 100, 50, 50)

    def test_finds_nearest_ring(self, make_component) -> None:
        """Test the first clear probe below a blocking sibling is found."""
        siblings = [make_component("block", 0, 0, 100, 100)]
        container = Size(width=500, height=500)
        found = find_nearest_free_position(
            _rect(10, 10, 50, 50), None, siblings, container=container, grid_size=10
        )
        assert found == _rect(0, 100, 50, 50)
        assert not would_collide(found, None, siblings)

    def test_exhausted_radius_returns_none(self, make_component, caplog) -> None:
        siblings = [make_component("block", 0, 0, 100, 100)]
        with caplog.at_level(logging.WARNING):
            found = find_nearest_free_position(
                _rect(10, 10, 50, 50), None, siblings, grid_size=10, max_radius=2
            )
        assert found is None
        assert "No free position" in caplog.text

    def test_probes_stay_inside_container(self, make_component) -> None:
        siblings = [make_component("block", 0, 0, 100, 100)]
        container = Size(width=200, height=200)
        found = find_nearest_free_position(
            _rect(50, 50, 60, 60), None, siblings, container=container, grid_size=10
        )
        assert found is not None
        assert 0 <= found.x <= 140
        assert 0 <= found.y <= 140


class TestDropPosition:
    """Tests for find_drop_position."""

    def test_drop_on_empty_artboard(self) -> None:
        dropped = find_drop_position(_rect(16, 24, 80, 60), [], Size(width=800, height=600))
        assert dropped == _rect(16, 24, 80, 60)

    def test_full_container_falls_back_to_clamped_rect(self, make_component) -> None:
        """Test the last resort when no free cell exists anywhere."""
        siblings = [make_component("full", 0, 0, 100, 100)]
        dropped = find_drop_position(
            _rect(80, 20, 50, 50), siblings, Size(width=100, height=100), grid_size=10, max_radius=3
        )
        assert dropped == _rect(50, 20, 50, 50)


class TestResolveCollision:
    """Tests for collision policies."""

    @pytest.fixture
    def overlapping(self) -> Rect:
        return _rect(90, 0, 40, 40)

    def test_allow_keeps_candidate(self, two_siblings, overlapping) -> None:
        last = _rect(300, 0, 40, 40)
        assert resolve_collision(overlapping, last, "m", two_siblings) == overlapping

    def test_reject_keeps_last_valid(self, two_siblings, overlapping) -> None:
        last = _rect(300, 0, 40, 40)
        resolved = resolve_collision(overlapping, last, "m", two_siblings, policy=CollisionPolicy.REJECT)
        assert resolved == last

    def test_nearest_finds_free_spot(self, two_siblings, overlapping) -> None:
        last = _rect(300, 0, 40, 40)
        resolved = resolve_collision(
            overlapping, last, "m", two_siblings,
            policy=CollisionPolicy.NEAREST, grid_size=10,
        )
        assert not would_collide(resolved, "m", two_siblings)

    def test_clear_candidate_passes_every_policy(self, two_siblings) -> None:
        candidate = _rect(300, 0, 40, 40)
        for policy in CollisionPolicy:
            assert resolve_collision(candidate, candidate, "m", two_siblings, policy=policy) == candidate
