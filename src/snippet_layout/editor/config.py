"""
Module: editor.config

Purpose:
    View-level editor settings passed explicitly to the interaction
    controller: grid snapping, drop debounce window and handle size.
    Not persisted per entity.

Key Classes:
    - EditorConfig: Immutable editor configuration

Dependencies:
    - dataclasses (std)
    - core.units: Grid size conversion

Used By:
    - editor.interaction: InteractionController
"""

from __future__ import annotations

from dataclasses import dataclass

from snippet_layout.core import units

DEFAULT_GRID_SIZE_MM = 10.0

# Some platforms fire a synthetic pointer-down right after a drop.
DEFAULT_DROP_DEBOUNCE_S = 0.150

# Half-width of a resize handle hit box, in view pixels.
DEFAULT_HANDLE_RADIUS_PX = 8.0


@dataclass(frozen=True)
class EditorConfig:
    """
    Configuration for interactive editing (immutable).

    Attributes:
        grid_size_mm: Grid spacing in millimeters
        snap_to_grid: Round positions and sizes to the grid while dragging
        drop_debounce_s: Window after an external drop during which a
            pointer-down does not start an internal drag
        handle_radius_px: Hit radius of resize handles in view pixels
        zoom: View multiplier applied to screen units on display

    Example:
        >>> config = EditorConfig(snap_to_grid=True)
        >>> config.grid_size_units
        38
    """

    grid_size_mm: float = DEFAULT_GRID_SIZE_MM
    snap_to_grid: bool = False
    drop_debounce_s: float = DEFAULT_DROP_DEBOUNCE_S
    handle_radius_px: float = DEFAULT_HANDLE_RADIUS_PX
    zoom: float = 1.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.grid_size_mm <= 0:
            raise ValueError(f"grid_size_mm must be positive: {self.grid_size_mm}")
        if self.drop_debounce_s < 0:
            raise ValueError(f"drop_debounce_s must be >= 0: {self.drop_debounce_s}")
        if self.handle_radius_px <= 0:
            raise ValueError(f"handle_radius_px must be positive: {self.handle_radius_px}")
        if self.zoom <= 0:
            raise ValueError(f"zoom must be positive: {self.zoom}")

    @property
    def grid_size_units(self) -> int:
        """Grid spacing in screen reference units."""
        return units.mm_to_units(self.grid_size_mm, units.SCREEN_DPI)
