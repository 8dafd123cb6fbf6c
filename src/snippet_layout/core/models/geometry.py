"""
Module: geometry

Purpose:
    Value types for editor geometry. All coordinates are in screen
    reference units (96 DPI) relative to the printable-area origin,
    i.e. the page's top-left corner offset by its margins.

Key Classes:
    - Position: Top-left corner (x, y)
    - Size: Width and height
    - Rect: Position + Size with edge accessors

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.elements: Element placement
    - editor.resize: Handle math
    - arrange: Alignment and distribution
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Position:
    """Top-left corner of an element."""

    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Position":
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Size:
    """Width and height of an element."""

    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        """width / height (1.0 for a degenerate height)."""
        if self.height == 0:
            return 1.0
        return self.width / self.height

    def clamped(self, minimum: float) -> "Size":
        """Return a copy with both dimensions raised to at least minimum."""
        return Size(max(minimum, self.width), max(minimum, self.height))

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Size":
        return cls(width=float(data["width"]), height=float(data["height"]))


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Axis-aligned box built from a Position and a Size.

    Example:
        >>> r = Rect(Position(10, 20), Size(100, 50))
        >>> (r.right, r.bottom)
        (110, 70)
    """

    position: Position
    size: Size

    @property
    def left(self) -> float:
        return self.position.x

    @property
    def top(self) -> float:
        return self.position.y

    @property
    def right(self) -> float:
        return self.position.x + self.size.width

    @property
    def bottom(self) -> float:
        return self.position.y + self.size.height

    def contains(self, point: Position) -> bool:
        """True if point lies inside the box (edges inclusive)."""
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom
