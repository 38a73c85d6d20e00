"""Engine configuration loaded from the environment."""

from functools import lru_cache

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from canvaslayout.constraints.collision import CollisionPolicy
from canvaslayout.engine import units


class SnapConfig(BaseModel):
    """Grid and alignment snapping."""

    grid_size: float = Field(default=units.GRID_SIZE_PX, ge=0)  # 0 disables grid snap
    threshold: float = Field(default=units.SNAP_THRESHOLD_PX, ge=0)
    include_container_lines: bool = True


class CollisionConfig(BaseModel):
    """Overlap handling for drag/resize candidates."""

    policy: CollisionPolicy = CollisionPolicy.ALLOW
    search_radius: int = Field(default=units.COLLISION_SEARCH_RADIUS, ge=0)  # grid units


class LayoutConfig(BaseModel):
    """Auto-layout packing grid."""

    columns: int = Field(default=units.LAYOUT_COLUMNS, ge=1)
    row_height: float = Field(default=units.LAYOUT_ROW_HEIGHT_PX, gt=0)
    gap: float = Field(default=units.LAYOUT_GAP_PX, ge=0)
    row_limit: int = Field(default=units.LAYOUT_ROW_LIMIT, ge=1)


class ViewportConfig(BaseModel):
    """Canvas zoom limits and step factors."""

    min_scale: float = Field(default=units.MIN_SCALE, gt=0)
    max_scale: float = Field(default=units.MAX_SCALE, gt=0)
    zoom_in_factor: float = Field(default=units.ZOOM_IN_FACTOR, gt=1)
    zoom_out_factor: float = Field(default=units.ZOOM_OUT_FACTOR, gt=0, lt=1)

    @model_validator(mode="after")
    def _check_scale_range(self) -> "ViewportConfig":
        if self.min_scale > self.max_scale:
            raise ValueError(
                f"min_scale ({self.min_scale}) must not exceed max_scale ({self.max_scale})"
            )
        return self


class ArtboardPlacementConfig(BaseModel):
    """Default placement of new artboards on the canvas."""

    spacing: float = Field(default=units.ARTBOARD_SPACING_PX, ge=0)
    origin_x: float = units.ARTBOARD_ORIGIN_PX
    origin_y: float = units.ARTBOARD_ORIGIN_PX


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment.

    Nested sections are set with a double underscore, e.g.
    ``CANVAS_SNAP__GRID_SIZE=10`` or ``CANVAS_COLLISION__POLICY=reject``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CANVAS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    clamp_to_artboard: bool = True  # Keep drag/resize candidates inside the artboard

    snap: SnapConfig = Field(default_factory=SnapConfig)
    collision: CollisionConfig = Field(default_factory=CollisionConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    artboards: ArtboardPlacementConfig = Field(default_factory=ArtboardPlacementConfig)


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
