"""
Module: output.transform

Purpose:
    Per-page geometry mapping from screen reference units (relative to
    the margin origin) to output coordinates. PDF output uses a
    bottom-left origin, so y is flipped; the print surface keeps a
    top-left origin.

Key Classes:
    - PageTransform: ratio, margins and page size in output units

Dependencies:
    - core.units: mm → unit conversion

Used By:
    - output.renderer: PDF placement
    - output.print_surface: Print page placement
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from snippet_layout.core import units
from snippet_layout.core.models import Margin, Page, Rect


@dataclass(frozen=True)
class PageTransform:
    """
    Geometry of one output page.

    Attributes:
        page_width: Page width in output units
        page_height: Page height in output units
        margin_x: Left margin in output units
        margin_y: Top margin in output units
        ratio: output_dpi / SCREEN_DPI
        flip_y: Bottom-left origin (PDF) instead of top-left

    Example:
        >>> t = PageTransform.for_page(page, output_dpi=72)
        >>> t.to_output(Rect(Position(10, 10), Size(40, 40)))
        (50.5, 761.5, 30.0, 30.0)  # A4, 15 mm margins
    """

    page_width: float
    page_height: float
    margin_x: float
    margin_y: float
    ratio: float
    flip_y: bool = True

    @classmethod
    def for_page(
        cls,
        page: Page,
        default_margin: Optional[Margin] = None,
        *,
        output_dpi: float = units.PDF_DPI,
        flip_y: bool = True,
    ) -> "PageTransform":
        """Build the transform for page at output_dpi."""
        width, height = page.page_size_units(output_dpi)
        margin_x, margin_y = page.margin_units(output_dpi, default_margin)
        return cls(
            page_width=width,
            page_height=height,
            margin_x=margin_x,
            margin_y=margin_y,
            ratio=units.output_ratio(output_dpi),
            flip_y=flip_y,
        )

    @property
    def page_size(self) -> Tuple[float, float]:
        return self.page_width, self.page_height

    def scale(self, value: float) -> float:
        return value * self.ratio

    def to_output(self, rect: Rect) -> Tuple[float, float, float, float]:
        """
        Map an element box to output coordinates.

        Returns:
            (x, y, width, height); y is the bottom edge when flip_y,
            else the top edge
        """
        width = rect.size.width * self.ratio
        height = rect.size.height * self.ratio
        x = self.margin_x + rect.position.x * self.ratio
        if self.flip_y:
            y = self.page_height - self.margin_y - rect.position.y * self.ratio - height
        else:
            y = self.margin_y + rect.position.y * self.ratio
        return x, y, width, height
