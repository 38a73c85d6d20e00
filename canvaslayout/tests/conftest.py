"""Pytest configuration and fixtures."""

from typing import Callable

import pytest

from canvaslayout.config import EngineSettings, get_settings
from canvaslayout.schema import Artboard, Component, Rect, Size


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test see a fresh get_settings() result."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> EngineSettings:
    """Default settings, ignoring any local .env file."""
    return EngineSettings(_env_file=None)


@pytest.fixture
def make_component() -> Callable[..., Component]:
    """Factory for components from a compact (x, y, width, height) tuple."""

    def _make(component_id: str, x: float, y: float, width: float, height: float, **kwargs) -> Component:
        return Component(
            id=component_id,
            rect=Rect(x=x, y=y, width=width, height=height),
            **kwargs,
        )

    return _make


@pytest.fixture
def two_siblings(make_component) -> list[Component]:
    """Two 100×50 siblings on the same row with a 50px gap."""
    return [
        make_component("a", 0, 0, 100, 50),
        make_component("b", 150, 0, 100, 50),
    ]


@pytest.fixture
def artboard() -> Artboard:
    """An empty 800×600 artboard at the canvas origin."""
    return Artboard(id="board", dimensions=Size(width=800, height=600))
