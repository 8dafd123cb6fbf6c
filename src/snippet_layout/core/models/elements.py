"""
Module: elements

Purpose:
    Immutable element models placed on a page: snippet placements,
    text blocks and vector shapes. Each element exposes the same
    geometry surface (element_id, rect, min_size, with_geometry,
    with_position) so
    the editor and arrangement code can treat them uniformly.

Key Classes:
    - PlacedSnippet: Weak reference to an external snippet asset
    - TextElement: Editable text block
    - ShapeElement: Rectangle, circle or line
    - WritingMode, TextAlign, ShapeKind: Element enums

Dependencies:
    - core.models.geometry: Position, Size, Rect

Used By:
    - core.models.page: Page collections
    - editor.state: Mutations
    - output: Rendering
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union

from .geometry import Position, Rect, Size

# Minimum edge length (screen units) enforced after every mutation.
MIN_SNIPPET_SIZE = 20.0
MIN_TEXT_SIZE = 30.0
MIN_SHAPE_SIZE = 10.0

NO_FILL = "none"


class WritingMode(str, Enum):
    """Text flow direction."""

    HORIZONTAL = "horizontal"  # left-to-right lines, top to bottom
    VERTICAL = "vertical"  # top-to-bottom columns, right to left


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ShapeKind(str, Enum):
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    LINE = "line"


class ElementKind(str, Enum):
    """Which collection of a page an element lives in."""

    SNIPPET = "snippet"
    TEXT = "text"
    SHAPE = "shape"


@dataclass(frozen=True, slots=True)
class PlacedSnippet:
    """
    A positioned, sized reference to an externally owned snippet asset.

    The placement is keyed by asset_id: a given asset appears at most
    once per page.

    Attributes:
        asset_id: Id of the asset in the external library (weak reference)
        position: Top-left in screen units
        size: Displayed size in screen units
        rotation: Reserved, always 0
    """

    asset_id: str
    position: Position
    size: Size
    rotation: float = 0.0

    kind = ElementKind.SNIPPET
    min_size = MIN_SNIPPET_SIZE

    @property
    def element_id(self) -> str:
        return self.asset_id

    @property
    def rect(self) -> Rect:
        return Rect(self.position, self.size)

    def with_geometry(self, position: Position, size: Size) -> "PlacedSnippet":
        return replace(self, position=position, size=size.clamped(self.min_size))

    def with_position(self, position: Position) -> "PlacedSnippet":
        return replace(self, position=position)

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset_id": self.asset_id,
            "position": self.position.to_dict(),
            "size": self.size.to_dict(),
            "rotation": self.rotation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlacedSnippet":
        return cls(
            asset_id=data["asset_id"],
            position=Position.from_dict(data["position"]),
            size=Size.from_dict(data["size"]).clamped(MIN_SNIPPET_SIZE),
            rotation=float(data.get("rotation", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class TextElement:
    """
    Editable text block.

    Text has no native vector form in the output; the compositor
    rasterizes it using the writing mode and alignment.
    """

    id: str
    content: str
    position: Position
    size: Size = Size(100, 200)
    font_size: float = 16
    font_family: str = "serif"
    color: str = "#000000"
    writing_mode: WritingMode = WritingMode.VERTICAL
    text_align: TextAlign = TextAlign.LEFT

    kind = ElementKind.TEXT
    min_size = MIN_TEXT_SIZE

    @property
    def element_id(self) -> str:
        return self.id

    @property
    def rect(self) -> Rect:
        return Rect(self.position, self.size)

    def with_geometry(self, position: Position, size: Size) -> "TextElement":
        return replace(self, position=position, size=size.clamped(self.min_size))

    def with_position(self, position: Position) -> "TextElement":
        return replace(self, position=position)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "position": self.position.to_dict(),
            "size": self.size.to_dict(),
            "font_size": self.font_size,
            "font_family": self.font_family,
            "color": self.color,
            "writing_mode": self.writing_mode.value,
            "text_align": self.text_align.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextElement":
        return cls(
            id=data["id"],
            content=data.get("content", ""),
            position=Position.from_dict(data["position"]),
            size=Size.from_dict(data["size"]).clamped(MIN_TEXT_SIZE),
            font_size=float(data.get("font_size", 16)),
            font_family=data.get("font_family", "serif"),
            color=data.get("color", "#000000"),
            writing_mode=WritingMode(data.get("writing_mode", "vertical")),
            text_align=TextAlign(data.get("text_align", "left")),
        )


@dataclass(frozen=True, slots=True)
class ShapeElement:
    """
    Vector shape.

    A LINE is drawn horizontally through the vertical center of its box.
    fill_color of "none" means unfilled.
    """

    id: str
    shape_kind: ShapeKind
    position: Position
    size: Size
    stroke_color: str = "#000000"
    stroke_width: float = 2
    fill_color: str = NO_FILL

    kind = ElementKind.SHAPE
    min_size = MIN_SHAPE_SIZE

    @property
    def element_id(self) -> str:
        return self.id

    @property
    def rect(self) -> Rect:
        return Rect(self.position, self.size)

    @property
    def is_filled(self) -> bool:
        return self.fill_color not in (NO_FILL, "transparent", "")

    def with_geometry(self, position: Position, size: Size) -> "ShapeElement":
        if self.shape_kind is ShapeKind.LINE:
            # Line height is only the hit box around the stroke.
            size = Size(max(self.min_size, size.width), size.height)
        else:
            size = size.clamped(self.min_size)
        return replace(self, position=position, size=size)

    def with_position(self, position: Position) -> "ShapeElement":
        return replace(self, position=position)

    @classmethod
    def default_size(cls, shape_kind: ShapeKind) -> Size:
        if shape_kind is ShapeKind.LINE:
            return Size(100, 2)
        return Size(80, 80)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "shape_kind": self.shape_kind.value,
            "position": self.position.to_dict(),
            "size": self.size.to_dict(),
            "stroke_color": self.stroke_color,
            "stroke_width": self.stroke_width,
            "fill_color": self.fill_color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShapeElement":
        return cls(
            id=data["id"],
            shape_kind=ShapeKind(data["shape_kind"]),
            position=Position.from_dict(data["position"]),
            size=Size.from_dict(data["size"]),
            stroke_color=data.get("stroke_color", "#000000"),
            stroke_width=float(data.get("stroke_width", 2)),
            fill_color=data.get("fill_color", NO_FILL),
        )


Element = Union[PlacedSnippet, TextElement, ShapeElement]
