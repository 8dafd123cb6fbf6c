"""
Module: page

Purpose:
    Page model: one sheet of the output document with paper size,
    orientation, margins and its three ordered element collections
    (snippets, text, shapes). Draw order equals collection order,
    snippets first, then text, then shapes.

Key Classes:
    - PaperSize: A4 / B4 / A3
    - Orientation: portrait / landscape
    - Margin: Per-axis margin in millimeters
    - Page: Immutable page with element collections

Dependencies:
    - core.models.elements: Element types
    - core.units: mm → unit conversion

Used By:
    - core.models.document: Document pages
    - editor.state: Page mutations
    - output.transform: Page geometry
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator, Optional, Tuple

from snippet_layout.core import units

from .elements import Element, ElementKind, PlacedSnippet, ShapeElement, TextElement
from .geometry import Size

DEFAULT_MARGIN_MM = 15.0


class PaperSize(str, Enum):
    """Supported paper sizes (portrait dimensions in mm)."""

    A4 = "A4"
    B4 = "B4"
    A3 = "A3"

    @property
    def dimensions_mm(self) -> Tuple[float, float]:
        return _PAPER_DIMENSIONS_MM[self]


_PAPER_DIMENSIONS_MM = {
    PaperSize.A4: (210.0, 297.0),
    PaperSize.B4: (257.0, 364.0),
    PaperSize.A3: (297.0, 420.0),
}


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass(frozen=True, slots=True)
class Margin:
    """
    Page margin in millimeters, per axis.

    x applies to left and right, y to top and bottom.
    """

    x_mm: float = DEFAULT_MARGIN_MM
    y_mm: float = DEFAULT_MARGIN_MM

    def __post_init__(self) -> None:
        if self.x_mm < 0 or self.y_mm < 0:
            raise ValueError(f"margin must be >= 0: ({self.x_mm}, {self.y_mm})")

    @classmethod
    def uniform(cls, mm: float) -> "Margin":
        return cls(mm, mm)

    def to_dict(self) -> dict[str, Any]:
        return {"x_mm": self.x_mm, "y_mm": self.y_mm}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Margin":
        return cls(x_mm=float(data["x_mm"]), y_mm=float(data["y_mm"]))


@dataclass(frozen=True)
class Page:
    """
    One sheet of the output document (immutable).

    Element ids are unique within a page. Snippet placements are keyed
    by their asset id.

    Attributes:
        id: Page identifier
        paper_size: Paper size
        orientation: Portrait or landscape
        margin: Per-axis margin; None means "use the document default"
        snippets: Placed snippets in draw order
        texts: Text elements in draw order
        shapes: Shape elements in draw order

    Example:
        >>> page = Page(id="p1", paper_size=PaperSize.A4, orientation=Orientation.PORTRAIT)
        >>> page.page_size_units()
        (794, 1123)
    """

    id: str
    paper_size: PaperSize
    orientation: Orientation
    margin: Optional[Margin] = None
    snippets: Tuple[PlacedSnippet, ...] = field(default_factory=tuple)
    texts: Tuple[TextElement, ...] = field(default_factory=tuple)
    shapes: Tuple[ShapeElement, ...] = field(default_factory=tuple)

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    def effective_margin(self, default: Optional[Margin] = None) -> Margin:
        if self.margin is not None:
            return self.margin
        return default if default is not None else Margin()

    def page_size_mm(self) -> Tuple[float, float]:
        return units.paper_size_mm(self.paper_size, self.orientation)

    def page_size_units(self, dpi: float = units.SCREEN_DPI) -> Tuple[int, int]:
        return units.paper_size_units(self.paper_size, self.orientation, dpi)

    def margin_units(
        self, dpi: float = units.SCREEN_DPI, default: Optional[Margin] = None
    ) -> Tuple[int, int]:
        margin = self.effective_margin(default)
        return units.mm_to_units(margin.x_mm, dpi), units.mm_to_units(margin.y_mm, dpi)

    def printable_size(self, default: Optional[Margin] = None) -> Size:
        """Printable area (page minus margins on both sides) in screen units."""
        width, height = self.page_size_units()
        margin_x, margin_y = self.margin_units(default=default)
        return Size(width - 2 * margin_x, height - 2 * margin_y)

    # ─────────────────────────────────────────────────────────────────────────
    # Element access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_empty(self) -> bool:
        return not (self.snippets or self.texts or self.shapes)

    @property
    def element_count(self) -> int:
        return len(self.snippets) + len(self.texts) + len(self.shapes)

    def elements(self) -> Iterator[Element]:
        """All elements in draw order: snippets, text, shapes."""
        yield from self.snippets
        yield from self.texts
        yield from self.shapes

    def find(self, element_id: str) -> Optional[Element]:
        for element in self.elements():
            if element.element_id == element_id:
                return element
        return None

    def collection(self, kind: ElementKind) -> tuple:
        if kind is ElementKind.SNIPPET:
            return self.snippets
        if kind is ElementKind.TEXT:
            return self.texts
        return self.shapes

    def with_collection(self, kind: ElementKind, items: tuple) -> "Page":
        if kind is ElementKind.SNIPPET:
            return replace(self, snippets=tuple(items))
        if kind is ElementKind.TEXT:
            return replace(self, texts=tuple(items))
        return replace(self, shapes=tuple(items))

    def has_id(self, element_id: str) -> bool:
        return self.find(element_id) is not None

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "paper_size": self.paper_size.value,
            "orientation": self.orientation.value,
            "margin": self.margin.to_dict() if self.margin is not None else None,
            "snippets": [s.to_dict() for s in self.snippets],
            "texts": [t.to_dict() for t in self.texts],
            "shapes": [s.to_dict() for s in self.shapes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Page":
        margin = data.get("margin")
        return cls(
            id=data["id"],
            paper_size=PaperSize(data["paper_size"]),
            orientation=Orientation(data["orientation"]),
            margin=Margin.from_dict(margin) if margin else None,
            snippets=tuple(PlacedSnippet.from_dict(s) for s in data.get("snippets", [])),
            texts=tuple(TextElement.from_dict(t) for t in data.get("texts", [])),
            shapes=tuple(ShapeElement.from_dict(s) for s in data.get("shapes", [])),
        )
