"""
Module: arrange.pack

Purpose:
    Gap-free packing. pack() abuts a selection along one axis;
    repack_page() and repack_across_pages() re-flow snippets into
    shelves (rows) inside the printable area, anchored at the top-left
    for horizontal writing or the top-right for vertical writing.

Key Functions:
    - pack(): Abut selected members in sorted order
    - repack_page(): Shelf packing on one page
    - repack_across_pages(): Shelf packing over the whole document

Algorithm (shelf packing):
    1. Walk snippets in creation order
    2. Start a new shelf when the next snippet does not fit the row width
    3. Start a new page (or, on a single page, leave the snippet where
       it is) when the shelf would cross the bottom margin

Dependencies:
    - core.models: Document, Page, PlacedSnippet
    - arrange.align: Selection helpers

Used By:
    - arrange.engine: ArrangementEngine
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from snippet_layout.assets import AssetLibrary
from snippet_layout.core.models import Document, Page, PlacedSnippet, Position, Size
from snippet_layout.editor import state

from .align import MIN_ALIGN_MEMBERS, Direction, selected_elements

logger = logging.getLogger(__name__)


class RepackAnchor(str, Enum):
    LEFT_TOP = "left-top"  # horizontal writing
    RIGHT_TOP = "right-top"  # vertical writing


def pack(
    document: Document,
    page_id: str,
    selection: Sequence[str],
    direction: Direction,
) -> Document:
    """
    Abut two or more members with no gap, starting at the first one.

    Members are sorted by leading coordinate; the cross-axis coordinate
    is left unchanged.
    """
    page = document.get_page(page_id)
    if page is None:
        return document
    members = selected_elements(page, selection)
    if len(members) < MIN_ALIGN_MEMBERS:
        return document

    horizontal = direction is Direction.HORIZONTAL
    members.sort(key=lambda e: e.position.x if horizontal else e.position.y)
    cursor = members[0].position.x if horizontal else members[0].position.y
    for member in members:
        if horizontal:
            position = Position(cursor, member.position.y)
            cursor += member.size.width
        else:
            position = Position(member.position.x, cursor)
            cursor += member.size.height
        document = state.move(document, page_id, member.element_id, position)
    return document


# ─────────────────────────────────────────────────────────────────────────────
# Shelf packing
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class _Shelf:
    """Running cursor of the shelf being filled."""

    area: Size
    anchor: RepackAnchor
    y: float = 0.0
    row_height: float = 0.0
    row_used: float = 0.0

    def reset(self) -> None:
        self.y = 0.0
        self.row_height = 0.0
        self.row_used = 0.0

    def next_row_if_full(self, size: Size) -> None:
        if self.row_used > 0 and self.row_used + size.width > self.area.width:
            self.y += self.row_height
            self.row_height = 0.0
            self.row_used = 0.0

    def fits_vertically(self, size: Size) -> bool:
        return self.y + size.height <= self.area.height

    def place(self, size: Size) -> Position:
        if self.anchor is RepackAnchor.RIGHT_TOP:
            x = self.area.width - self.row_used - size.width
        else:
            x = self.row_used
        position = Position(x, self.y)
        self.row_used += size.width
        self.row_height = max(self.row_height, size.height)
        return position


def creation_order(
    snippets: Sequence[PlacedSnippet],
    assets: Optional[AssetLibrary] = None,
) -> List[PlacedSnippet]:
    """
    Sort placements by the asset library's creation order.

    Ids the library does not list sort first, keeping their relative
    order (stable sort).
    """
    if assets is None:
        return list(snippets)
    order: Dict[str, int] = {asset_id: i for i, asset_id in enumerate(assets.asset_ids)}
    return sorted(snippets, key=lambda s: order.get(s.asset_id, -1))


def repack_page(
    document: Document,
    page_id: str,
    anchor: RepackAnchor,
    assets: Optional[AssetLibrary] = None,
) -> Document:
    """
    Re-flow a page's snippets into shelves inside its printable area.

    Sizes are kept. A snippet that would cross the bottom margin keeps
    its current position.
    """
    page = document.get_page(page_id)
    if page is None or not page.snippets:
        return document

    shelf = _Shelf(area=page.printable_size(document.default_margin), anchor=anchor)
    positions: Dict[str, Position] = {}
    overflow = 0
    for snippet in creation_order(page.snippets, assets):
        shelf.next_row_if_full(snippet.size)
        if not shelf.fits_vertically(snippet.size):
            overflow += 1
            continue
        positions[snippet.asset_id] = shelf.place(snippet.size)

    if overflow:
        logger.warning(f"Repack: {overflow} snippet(s) did not fit on page {page_id}")

    snippets = tuple(
        replace(s, position=positions[s.asset_id]) if s.asset_id in positions else s
        for s in page.snippets
    )
    return document.with_page(replace(page, snippets=snippets))


def repack_across_pages(
    document: Document,
    anchor: RepackAnchor,
    assets: Optional[AssetLibrary] = None,
    id_factory: state.IdFactory = state.new_id,
) -> Document:
    """
    Re-flow every snippet of the document into shelves across pages.

    All pages take the first page's paper size, orientation and margin.
    Existing pages are reused in order (keeping their text and shapes);
    new pages are appended when needed, and pages left with no elements
    at all are removed. A placement whose asset id is taken by text or a
    shape on a reused page moves on to the next page. The first page
    becomes active.
    """
    if not document.pages:
        return document
    all_snippets = [s for page in document.pages for s in page.snippets]
    if not all_snippets:
        return document

    first = document.pages[0]
    margin = document.margin_for(first)
    template = replace(first, margin=margin, snippets=(), texts=(), shapes=())
    shelf = _Shelf(area=template.printable_size(), anchor=anchor)

    existing = list(document.pages)
    reserved = [{t.id for t in p.texts} | {s.id for s in p.shapes} for p in existing]

    groups: List[List[PlacedSnippet]] = [[]]
    for snippet in creation_order(all_snippets, assets):
        shelf.next_row_if_full(snippet.size)
        while _needs_next_page(groups, reserved, snippet, shelf):
            groups.append([])
            shelf.reset()
        groups[-1].append(replace(snippet, position=shelf.place(snippet.size)))

    pages: List[Page] = []
    for index in range(max(len(groups), len(existing))):
        snippets: Tuple[PlacedSnippet, ...] = tuple(groups[index]) if index < len(groups) else ()
        if index < len(existing):
            page = replace(
                existing[index],
                paper_size=template.paper_size,
                orientation=template.orientation,
                margin=margin,
                snippets=snippets,
            )
        else:
            page = replace(template, id=id_factory(), snippets=snippets)
        if not page.is_empty:
            pages.append(page)

    logger.info(f"Repacked {len(all_snippets)} snippet(s) onto {len(pages)} page(s)")
    result = document.with_pages(tuple(pages))
    return replace(result, active_page_id=pages[0].id if pages else None)


def _needs_next_page(
    groups: List[List[PlacedSnippet]],
    reserved: List[Set[str]],
    snippet: PlacedSnippet,
    shelf: _Shelf,
) -> bool:
    """
    True if snippet cannot go on the page being filled.

    An asset appears at most once per page and never on a reused page
    whose text or shapes already use its id. New pages reserve nothing,
    so the search always ends.
    """
    index = len(groups) - 1
    if index < len(reserved) and snippet.asset_id in reserved[index]:
        return True
    current = groups[-1]
    if not current:
        return False
    duplicate = any(s.asset_id == snippet.asset_id for s in current)
    return duplicate or not shelf.fits_vertically(snippet.size)
