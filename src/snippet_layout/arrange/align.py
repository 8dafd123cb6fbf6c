"""
Module: arrange.align

Purpose:
    Alignment, distribution and size unification of a selection on one
    page. Selections may mix snippets, text and shapes; ids that are not
    on the page are ignored.

Key Functions:
    - align(): Line up leading or trailing edges
    - distribute(): Uniform gaps between three or more members
    - unify_size(): Copy the first member's width/height onto the rest
    - unify_all_pages_width(): Document-wide snippet width unification

Dependencies:
    - core.models: Document, Page
    - editor.state: set_geometry

Used By:
    - arrange.engine: ArrangementEngine
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import List, Sequence

from snippet_layout.core.models import Document, Element, Page, Position, Size
from snippet_layout.editor import state

logger = logging.getLogger(__name__)

MIN_ALIGN_MEMBERS = 2
MIN_DISTRIBUTE_MEMBERS = 3


class Edge(str, Enum):
    TOP = "top"
    LEFT = "left"
    BOTTOM = "bottom"
    RIGHT = "right"


class Direction(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Dimension(str, Enum):
    WIDTH = "width"
    HEIGHT = "height"
    BOTH = "both"


def selected_elements(page: Page, selection: Sequence[str]) -> List[Element]:
    """Members of selection present on page, in selection order."""
    members = []
    for element_id in dict.fromkeys(selection):
        element = page.find(element_id)
        if element is not None:
            members.append(element)
    return members


def align(document: Document, page_id: str, selection: Sequence[str], edge: Edge) -> Document:
    """
    Align the selection to a common edge.

    top/left use the minimum leading coordinate; bottom/right use the
    maximum trailing edge and set position = target - size. Fewer than
    two members is a no-op.
    """
    page = document.get_page(page_id)
    if page is None:
        return document
    members = selected_elements(page, selection)
    if len(members) < MIN_ALIGN_MEMBERS:
        return document

    if edge is Edge.TOP:
        target = min(m.position.y for m in members)
    elif edge is Edge.LEFT:
        target = min(m.position.x for m in members)
    elif edge is Edge.BOTTOM:
        target = max(m.rect.bottom for m in members)
    else:
        target = max(m.rect.right for m in members)

    for member in members:
        x, y = member.position.x, member.position.y
        if edge is Edge.TOP:
            y = target
        elif edge is Edge.LEFT:
            x = target
        elif edge is Edge.BOTTOM:
            y = target - member.size.height
        else:
            x = target - member.size.width
        document = state.move(document, page_id, member.element_id, Position(x, y))
    return document


def distribute(
    document: Document,
    page_id: str,
    selection: Sequence[str],
    direction: Direction,
) -> Document:
    """
    Space three or more members with a uniform gap along one axis.

    Members are sorted by leading coordinate. The first member stays put
    and the span from its leading edge to the last member's trailing
    edge is preserved. Overlapping members produce a negative gap, which
    is applied as-is.
    """
    page = document.get_page(page_id)
    if page is None:
        return document
    members = selected_elements(page, selection)
    if len(members) < MIN_DISTRIBUTE_MEMBERS:
        return document

    horizontal = direction is Direction.HORIZONTAL

    def leading(e: Element) -> float:
        return e.position.x if horizontal else e.position.y

    def extent(e: Element) -> float:
        return e.size.width if horizontal else e.size.height

    members.sort(key=leading)
    first, last = members[0], members[-1]
    span = leading(last) + extent(last) - leading(first)
    gap = (span - sum(extent(m) for m in members)) / (len(members) - 1)

    cursor = leading(first)
    for member in members:
        if horizontal:
            position = Position(cursor, member.position.y)
        else:
            position = Position(member.position.x, cursor)
        document = state.move(document, page_id, member.element_id, position)
        cursor += extent(member) + gap
    return document


def unify_size(
    document: Document,
    page_id: str,
    selection: Sequence[str],
    dimension: Dimension,
) -> Document:
    """
    Copy the first-selected member's width, height or both onto the others.

    Each member keeps its top-left corner. Sizes are clamped to each
    member's own minimum.
    """
    page = document.get_page(page_id)
    if page is None:
        return document
    members = selected_elements(page, selection)
    if len(members) < MIN_ALIGN_MEMBERS:
        return document

    reference = members[0].size
    for member in members[1:]:
        width, height = member.size.width, member.size.height
        if dimension in (Dimension.WIDTH, Dimension.BOTH):
            width = reference.width
        if dimension in (Dimension.HEIGHT, Dimension.BOTH):
            height = reference.height
        document = state.set_geometry(
            document, page_id, member.element_id, member.position, Size(width, height)
        )
    return document


def unify_all_pages_width(document: Document) -> Document:
    """
    Give every snippet in the document the width of the first snippet on
    the first page, keeping each snippet's aspect ratio.
    """
    if not document.pages or not document.pages[0].snippets:
        return document
    base_width = document.pages[0].snippets[0].size.width

    pages = []
    for page in document.pages:
        snippets = tuple(
            s.with_geometry(s.position, Size(base_width, base_width / s.size.aspect_ratio))
            for s in page.snippets
        )
        pages.append(replace(page, snippets=snippets))
    logger.debug(f"Unified snippet width to {base_width} across {len(pages)} page(s)")
    return replace(document, pages=tuple(pages))
