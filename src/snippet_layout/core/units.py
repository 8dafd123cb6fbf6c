"""
Module: core.units

Purpose:
    Unit conversion between millimeters, the fixed screen reference
    resolution used by the editor, and the output resolution used by
    the compositor. Stateless.

Key Functions:
    - mm_to_units(): Millimeters to device units at a given DPI
    - units_to_mm(): Device units to millimeters
    - output_ratio(): Scale factor from screen units to output units
    - paper_size_units(): Page dimensions in device units
    - snap(): Round a value to the nearest grid multiple

Dependencies:
    - core.models.page: PaperSize, Orientation

Used By:
    - editor.interaction: Grid snap, drop positioning
    - arrange: Printable area computation
    - output.transform: Editor → artifact geometry
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from snippet_layout.core.models.page import Orientation, PaperSize

MM_PER_INCH = 25.4

# Editor reference resolution. Every persisted position/size is in these units.
SCREEN_DPI = 96

# PDF user space is 1/72 inch.
PDF_DPI = 72


def mm_to_units(mm: float, dpi: float = SCREEN_DPI) -> int:
    """
    Convert millimeters to device units, rounded to the nearest unit.

    Args:
        mm: Length in millimeters
        dpi: Target resolution

    Returns:
        Whole number of units

    Example:
        >>> mm_to_units(15, 96)
        57
    """
    return round(mm / MM_PER_INCH * dpi)


def units_to_mm(units: float, dpi: float = SCREEN_DPI) -> float:
    """
    Convert device units to millimeters.

    Example:
        >>> round(units_to_mm(96, 96), 1)
        25.4
    """
    return units / dpi * MM_PER_INCH


def output_ratio(output_dpi: float, screen_dpi: float = SCREEN_DPI) -> float:
    """
    Scale factor applied to every editor coordinate by the compositor.

    Example:
        >>> output_ratio(72)
        0.75
    """
    if output_dpi <= 0 or screen_dpi <= 0:
        raise ValueError(f"dpi must be positive: {output_dpi}, {screen_dpi}")
    return output_dpi / screen_dpi


def paper_size_mm(paper: "PaperSize", orientation: "Orientation") -> Tuple[float, float]:
    """Return (width, height) in mm, swapped for landscape."""
    from snippet_layout.core.models.page import Orientation

    width, height = paper.dimensions_mm
    if orientation is Orientation.LANDSCAPE:
        return height, width
    return width, height


def paper_size_units(
    paper: "PaperSize",
    orientation: "Orientation",
    dpi: float = SCREEN_DPI,
) -> Tuple[int, int]:
    """
    Page dimensions in device units.

    Example:
        >>> paper_size_units(PaperSize.A4, Orientation.PORTRAIT, 96)
        (794, 1123)
    """
    width_mm, height_mm = paper_size_mm(paper, orientation)
    return mm_to_units(width_mm, dpi), mm_to_units(height_mm, dpi)


def snap(value: float, grid: float) -> float:
    """Round value to the nearest multiple of grid (no-op for grid <= 0)."""
    if grid <= 0:
        return value
    return round(value / grid) * grid
