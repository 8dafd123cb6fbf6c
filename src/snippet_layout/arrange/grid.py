"""
Module: arrange.grid

Purpose:
    Grid auto-arrange. Divides a page's printable area into a cols x rows
    grid and drops one snippet per cell, centered and scaled down (never
    up) to fit the cell minus the gap.

Key Classes:
    - GridOrder: Horizontal-first or vertical-first cell order
    - GridSpec: Immutable grid configuration

Key Functions:
    - grid_arrange(): Arrange snippets on one page
    - grid_cells(): Cell index (col, row) for each item

Algorithm:
    1. rows_eff = max(rows, ceil(n / cols)); extra rows are added when
       there are more items than cells
    2. cell = printable_size / (cols, rows_eff)
    3. Item i goes to cell grid_cells()[i]
    4. scale = min(1, (cell_w - gap_x) / w, (cell_h - gap_y) / h) on the
       item's native size, then centered in the cell

Dependencies:
    - core.models: Document, Page, PlacedSnippet
    - assets: Native sizes

Used By:
    - arrange.engine: ArrangementEngine.grid_arrange
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from snippet_layout.assets import AssetLibrary, MissingAssetError
from snippet_layout.core.errors import RenderAssetError
from snippet_layout.core.models import Document, PlacedSnippet, Position, Size

logger = logging.getLogger(__name__)


class GridOrder(str, Enum):
    """Order in which items fill the grid cells."""

    HORIZONTAL_FIRST = "horizontal_first"  # row-major, left to right
    VERTICAL_FIRST = "vertical_first"  # column-major, columns left to right


@dataclass(frozen=True)
class GridSpec:
    """
    Grid configuration (immutable).

    Attributes:
        cols: Number of columns
        rows: Minimum number of rows (extended when items overflow)
        gap_x: Horizontal space kept free inside each cell (screen units)
        gap_y: Vertical space kept free inside each cell
        order: Cell fill order

    Example:
        >>> GridSpec(cols=2, rows=3, order=GridOrder.VERTICAL_FIRST)
    """

    cols: int = 2
    rows: int = 3
    gap_x: float = 0.0
    gap_y: float = 0.0
    order: GridOrder = GridOrder.HORIZONTAL_FIRST

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.cols < 1:
            raise ValueError(f"cols must be >= 1: {self.cols}")
        if self.rows < 1:
            raise ValueError(f"rows must be >= 1: {self.rows}")
        if self.gap_x < 0 or self.gap_y < 0:
            raise ValueError(f"gaps must be >= 0: ({self.gap_x}, {self.gap_y})")

    def effective_rows(self, count: int) -> int:
        return max(self.rows, math.ceil(count / self.cols))


def grid_cells(count: int, spec: GridSpec) -> List[Tuple[int, int]]:
    """
    Compute the (col, row) cell of each of count items.

    Every item gets a distinct cell.

    Example:
        >>> grid_cells(4, GridSpec(cols=2, rows=2, order=GridOrder.VERTICAL_FIRST))
        [(0, 0), (0, 1), (1, 0), (1, 1)]
    """
    rows = spec.effective_rows(count)
    cells = []
    for index in range(count):
        if spec.order is GridOrder.HORIZONTAL_FIRST:
            col, row = index % spec.cols, index // spec.cols
        else:
            col, row = index // rows, index % rows
        cells.append((col, row))
    return cells


def fit_in_cell(native: Size, cell: Size, gap_x: float, gap_y: float) -> Size:
    """Scale native down (never up) to fit cell minus gaps, keeping aspect ratio."""
    avail_w = max(cell.width - gap_x, 0.0)
    avail_h = max(cell.height - gap_y, 0.0)
    scale = 1.0
    if native.width > 0:
        scale = min(scale, avail_w / native.width)
    if native.height > 0:
        scale = min(scale, avail_h / native.height)
    return Size(native.width * scale, native.height * scale)


def grid_arrange(
    document: Document,
    page_id: str,
    items: Sequence[str],
    spec: GridSpec,
    assets: Optional[AssetLibrary] = None,
) -> Document:
    """
    Arrange snippets in a grid on one page.

    items are asset ids in input order. Items already placed on the page
    are repositioned; others are added. Sizes start from the asset's
    native size when the library knows it, else from the placed size.
    Assets the library no longer has and that are not on the page are
    skipped.

    Args:
        document: Current document
        page_id: Target page
        items: Asset ids in fill order
        spec: Grid configuration
        assets: Library for native sizes (optional)

    Returns:
        New document (unchanged if the page is unknown or items is empty)
    """
    page = document.get_page(page_id)
    if page is None or not items:
        return document

    placed: Dict[str, PlacedSnippet] = {s.asset_id: s for s in page.snippets}
    resolved: List[Tuple[str, Size]] = []
    for asset_id in dict.fromkeys(items):
        if asset_id not in placed and page.has_id(asset_id):
            logger.warning(f"Grid arrange: id {asset_id} already used by another element")
            continue
        native = _native_size(asset_id, placed.get(asset_id), assets)
        if native is None:
            logger.warning(f"Grid arrange: skipping unknown asset {asset_id}")
            continue
        resolved.append((asset_id, native))

    if not resolved:
        return document

    printable = page.printable_size(document.default_margin)
    rows = spec.effective_rows(len(resolved))
    cell = Size(printable.width / spec.cols, printable.height / rows)

    arranged: Dict[str, PlacedSnippet] = {}
    for (asset_id, native), (col, row) in zip(resolved, grid_cells(len(resolved), spec)):
        size = fit_in_cell(native, cell, spec.gap_x, spec.gap_y)
        position = Position(
            col * cell.width + (cell.width - size.width) / 2,
            row * cell.height + (cell.height - size.height) / 2,
        )
        existing = placed.get(asset_id)
        if existing is None:
            existing = PlacedSnippet(asset_id=asset_id, position=position, size=size)
        # Minimum size still applies to very small cells.
        arranged[asset_id] = existing.with_geometry(position, size)

    snippets = [arranged.pop(s.asset_id, s) for s in page.snippets]
    snippets.extend(arranged.values())
    logger.debug(f"Grid arranged {len(resolved)} snippet(s) on page {page_id} ({spec.cols}x{rows})")
    return document.with_page(replace(page, snippets=tuple(snippets)))


def _native_size(
    asset_id: str,
    placement: Optional[PlacedSnippet],
    assets: Optional[AssetLibrary],
) -> Optional[Size]:
    if assets is not None:
        try:
            return assets.native_size(asset_id)
        except (MissingAssetError, RenderAssetError) as e:
            logger.debug(f"No native size for {asset_id} ({e}), using placed size")
    if placement is not None:
        return placement.size
    return None
