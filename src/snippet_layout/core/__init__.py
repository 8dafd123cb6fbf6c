"""
Snippet Layout Core Package

Shared units and data models used by the editor, the arrangement
engine and the compositor.

1. **Single coordinate space**
   - Positions and sizes are stored in 96 DPI screen reference units,
     relative to the printable-area origin.
   - Zoom is a view multiplier and never reaches stored values.

2. **Immutable Data Models**
   - Frozen dataclasses; every mutation creates new instances.
"""

from .errors import LayoutError
from .models import Document, Page, PlacedSnippet, TextElement, ShapeElement, Position, Size

__all__ = [
    "LayoutError",
    "Document",
    "Page",
    "PlacedSnippet",
    "TextElement",
    "ShapeElement",
    "Position",
    "Size",
]
