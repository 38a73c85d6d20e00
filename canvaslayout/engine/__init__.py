# Canvas layout engine: geometry, stacking, packing and viewport math.
# Gesture handling (interaction.py) and the document model (workspace.py)
# depend on canvaslayout.config and are imported from the package root.

from .units import (
    GRID_SIZE_PX,
    SNAP_THRESHOLD_PX,
    MIN_SCALE,
    MAX_SCALE,
    clamp,
    is_finite,
    mm_to_px,
)

from .geometry import (
    overlaps,
    intersection_area,
    contains_point,
    contains_rect,
    is_within_bounds,
    clamp_to_bounds,
    sanitize_rect,
    union_bounds,
)

from .z_order import (
    StackOrder,
    ZOrderCommand,
    command_for_shortcut,
)

from .component_sizes import (
    IntrinsicSize,
    SizeMode,
    get_default_size,
    get_intrinsic_size,
)

from .grid_layout import (
    GridConfig,
    OccupancyMap,
    pack_components,
    column_width,
    grid_position_to_rect,
    rect_to_grid_position,
    total_layout_height,
)

from .viewport import Viewport

from .artboard_presets import (
    ARTBOARD_PRESETS,
    ArtboardPreset,
    PresetCategory,
    get_preset,
)
