"""
Module: editor.resize

Purpose:
    One parametrized resize formula for all eight handles. Each handle
    maps to a (dx_sign, dy_sign) pair; the edges opposite the dragged
    handle stay anchored.

Key Classes:
    - Handle: N, S, E, W, NE, NW, SE, SW

Key Functions:
    - resize_rect(): New geometry for a handle drag

Dependencies:
    - core.models.geometry: Position, Size, Rect
    - core.units: snap

Used By:
    - editor.state: resize()
    - editor.interaction: Resizing gesture
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from snippet_layout.core import units
from snippet_layout.core.models import Position, Rect, Size


class Handle(str, Enum):
    """Resize handle at a corner or edge midpoint of the selection box."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def signs(self) -> Tuple[int, int]:
        """
        (dx_sign, dy_sign): +1 grows with pointer motion along the axis,
        -1 grows against it, 0 leaves the axis untouched.
        """
        return _HANDLE_SIGNS[self]

    @property
    def is_corner(self) -> bool:
        dx_sign, dy_sign = self.signs
        return dx_sign != 0 and dy_sign != 0

    def anchor_point(self, rect: Rect) -> Position:
        """Location of this handle on rect (used for hit testing)."""
        dx_sign, dy_sign = self.signs
        x = {-1: rect.left, 0: (rect.left + rect.right) / 2, 1: rect.right}[dx_sign]
        y = {-1: rect.top, 0: (rect.top + rect.bottom) / 2, 1: rect.bottom}[dy_sign]
        return Position(x, y)


_HANDLE_SIGNS = {
    Handle.N: (0, -1),
    Handle.S: (0, 1),
    Handle.E: (1, 0),
    Handle.W: (-1, 0),
    Handle.NE: (1, -1),
    Handle.NW: (-1, -1),
    Handle.SE: (1, 1),
    Handle.SW: (-1, 1),
}


def resize_rect(
    start: Rect,
    handle: Handle,
    dx: float,
    dy: float,
    *,
    min_size: float,
    keep_aspect: bool = False,
    grid: float = 0.0,
) -> Rect:
    """
    Compute the geometry after dragging a handle by (dx, dy).

    The edge(s) opposite the handle are anchored. Each dimension the
    handle moves is clamped to min_size and the position re-derived from
    the anchored edges, so the anchor holds even when clamping kicks in.

    Args:
        start: Geometry at gesture start
        handle: Dragged handle
        dx: Pointer delta along x since gesture start (screen units)
        dy: Pointer delta along y since gesture start
        min_size: Minimum width/height
        keep_aspect: Preserve the start aspect ratio on corner handles
        grid: Grid spacing for snapping the new size (0 disables)

    Returns:
        New Rect

    Example:
        >>> start = Rect(Position(10, 10), Size(100, 100))
        >>> resize_rect(start, Handle.W, 30, 0, min_size=20)
        Rect(position=Position(x=40, y=10), size=Size(width=70, height=100))
    """
    dx_sign, dy_sign = handle.signs
    width = start.size.width + dx_sign * dx
    height = start.size.height + dy_sign * dy

    if grid > 0:
        if dx_sign:
            width = units.snap(width, grid)
        if dy_sign:
            height = units.snap(height, grid)

    if keep_aspect and handle.is_corner:
        ratio = start.size.aspect_ratio
        # Dominant pointer axis drives the other dimension.
        if abs(dx) > abs(dy):
            height = width / ratio
        else:
            width = height * ratio
        if width < min_size:
            width = min_size
            height = width / ratio
        if height < min_size:
            height = min_size
            width = height * ratio
    else:
        # Only the axes the handle moves are clamped.
        if dx_sign:
            width = max(min_size, width)
        if dy_sign:
            height = max(min_size, height)

    x = start.right - width if dx_sign < 0 else start.left
    y = start.bottom - height if dy_sign < 0 else start.top
    return Rect(Position(x, y), Size(width, height))
