"""
Core Models Package

Immutable data models that are the single source of truth for the
editor and the compositor.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. Mutations always produce new values, so an undo snapshot is just a reference
2. The interaction layer can never half-update a page
3. Pages can be compared with == for history and tests
"""

from .geometry import Position, Size, Rect
from .elements import (
    Element,
    ElementKind,
    PlacedSnippet,
    TextElement,
    ShapeElement,
    ShapeKind,
    TextAlign,
    WritingMode,
    MIN_SNIPPET_SIZE,
    MIN_TEXT_SIZE,
    MIN_SHAPE_SIZE,
)
from .page import Page, PaperSize, Orientation, Margin, DEFAULT_MARGIN_MM
from .document import Document

__all__ = [
    "Position",
    "Size",
    "Rect",
    "Element",
    "ElementKind",
    "PlacedSnippet",
    "TextElement",
    "ShapeElement",
    "ShapeKind",
    "TextAlign",
    "WritingMode",
    "MIN_SNIPPET_SIZE",
    "MIN_TEXT_SIZE",
    "MIN_SHAPE_SIZE",
    "Page",
    "PaperSize",
    "Orientation",
    "Margin",
    "DEFAULT_MARGIN_MM",
    "Document",
]
