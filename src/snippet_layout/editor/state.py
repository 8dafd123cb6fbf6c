"""
Module: editor.state

Purpose:
    PlacementState operations. Pure functions over an immutable
    Document: every operation returns a new Document and never raises
    for out-of-range geometry (values are clamped, unknown ids are
    no-ops).

Key Functions:
    - add_page() / remove_page() / set_page_margin()
    - add_snippet_placement(): Place an asset at its native size
    - move() / resize() / set_geometry() / remove()
    - add_text() / update_text() / remove_text()
    - add_shape() / update_shape() / remove_shape()
    - replace_all(): Bulk write of a page's snippet placements
    - remove_asset_references(): Drop placements of a deleted asset

Dependencies:
    - core.models: Document, Page, element types
    - editor.resize: Handle formula

Used By:
    - editor.session: Atomic, history-recorded application
    - editor.interaction: Gesture updates
    - arrange: Bulk geometry writes
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any, Callable, Iterable, Optional, Tuple

from snippet_layout.core.models import (
    Document,
    Element,
    Margin,
    Orientation,
    Page,
    PaperSize,
    PlacedSnippet,
    Position,
    Rect,
    ShapeElement,
    ShapeKind,
    Size,
    TextElement,
)

from .resize import Handle, resize_rect

logger = logging.getLogger(__name__)

DEFAULT_TEXT_CONTENT = "テキスト"

IdFactory = Callable[[], str]


def new_id() -> str:
    """Generate a short unique element/page id."""
    return uuid.uuid4().hex[:12]


# ─────────────────────────────────────────────────────────────────────────────
# Pages
# ─────────────────────────────────────────────────────────────────────────────

def add_page(
    document: Document,
    paper_size: PaperSize = PaperSize.A4,
    orientation: Orientation = Orientation.PORTRAIT,
    *,
    margin: Optional[Margin] = None,
    page_id: Optional[str] = None,
    after: Optional[str] = None,
) -> Tuple[Document, str]:
    """
    Append a new empty page and make it active.

    Args:
        document: Current document
        paper_size: Paper size
        orientation: Portrait or landscape
        margin: Per-axis margin override (None = document default)
        page_id: Explicit id (generated if omitted)
        after: Insert after this page id instead of appending

    Returns:
        (new document, page id)
    """
    page = Page(
        id=page_id or new_id(),
        paper_size=paper_size,
        orientation=orientation,
        margin=margin,
    )
    pages = list(document.pages)
    index = document.page_index(after) if after is not None else -1
    if index >= 0:
        pages.insert(index + 1, page)
    else:
        pages.append(page)
    return replace(document, pages=tuple(pages), active_page_id=page.id), page.id


def remove_page(document: Document, page_id: str) -> Document:
    """Delete a page and everything on it; clears the active id if it pointed there."""
    if document.get_page(page_id) is None:
        return document
    return document.with_pages(tuple(p for p in document.pages if p.id != page_id))


def set_active_page(document: Document, page_id: Optional[str]) -> Document:
    if page_id is not None and document.get_page(page_id) is None:
        return document
    return replace(document, active_page_id=page_id)


def set_page_margin(document: Document, page_id: str, margin: Optional[Margin]) -> Document:
    page = document.get_page(page_id)
    if page is None:
        return document
    return document.with_page(replace(page, margin=margin))


# ─────────────────────────────────────────────────────────────────────────────
# Generic element geometry
# ─────────────────────────────────────────────────────────────────────────────

def _update_element(
    document: Document,
    page_id: str,
    element_id: str,
    update: Callable[[Element], Optional[Element]],
) -> Document:
    """Apply update to one element; returning None from update removes it."""
    page = document.get_page(page_id)
    if page is None:
        return document
    element = page.find(element_id)
    if element is None:
        return document

    items = []
    for item in page.collection(element.kind):
        if item.element_id != element_id:
            items.append(item)
            continue
        updated = update(item)
        if updated is not None:
            items.append(updated)
    return document.with_page(page.with_collection(element.kind, tuple(items)))


def move(document: Document, page_id: str, element_id: str, position: Position) -> Document:
    """Move any element's top-left corner to position; the size is untouched."""
    return _update_element(
        document, page_id, element_id,
        lambda e: e.with_position(position),
    )


def set_geometry(
    document: Document,
    page_id: str,
    element_id: str,
    position: Position,
    size: Size,
) -> Document:
    """Write position and size at once; size is clamped to the element minimum."""
    return _update_element(
        document, page_id, element_id,
        lambda e: e.with_geometry(position, size),
    )


def resize(
    document: Document,
    page_id: str,
    element_id: str,
    handle: Handle,
    delta: Tuple[float, float],
    *,
    start: Optional[Tuple[Position, Size]] = None,
    grid: float = 0.0,
) -> Document:
    """
    Resize an element by dragging one of its eight handles.

    Geometry is computed from start (the geometry at gesture start) when
    given, else from the element's current geometry. The edge(s) opposite
    the handle stay fixed; the size is clamped to the element's minimum.
    Snippet corners keep their aspect ratio.

    Args:
        document: Current document
        page_id: Page containing the element
        element_id: Element to resize
        handle: Dragged handle
        delta: (dx, dy) pointer motion since gesture start
        start: Optional (position, size) at gesture start
        grid: Snap spacing for the new size (0 disables)
    """
    dx, dy = delta

    def _apply(element: Element) -> Element:
        position, size = start if start is not None else (element.position, element.size)

        rect = resize_rect(
            Rect(position, size),
            handle,
            dx,
            dy,
            min_size=element.min_size,
            keep_aspect=isinstance(element, PlacedSnippet),
            grid=grid,
        )
        return element.with_geometry(rect.position, rect.size)

    return _update_element(document, page_id, element_id, _apply)


def remove(document: Document, page_id: str, element_id: str) -> Document:
    """Remove any element (snippet, text or shape) by id."""
    return _update_element(document, page_id, element_id, lambda e: None)


def remove_many(document: Document, page_id: str, element_ids: Iterable[str]) -> Document:
    for element_id in element_ids:
        document = remove(document, page_id, element_id)
    return document


# ─────────────────────────────────────────────────────────────────────────────
# Snippets
# ─────────────────────────────────────────────────────────────────────────────

def add_snippet_placement(
    document: Document,
    page_id: str,
    asset_id: str,
    position: Position,
    native_size: Size,
) -> Tuple[Document, Optional[str]]:
    """
    Place an asset on a page at its native crop size.

    An asset already on the page is moved instead of duplicated, keeping
    ids unique within the page.

    Returns:
        (new document, placement id); placement id is None if the page
        does not exist
    """
    page = document.get_page(page_id)
    if page is None:
        logger.debug(f"add_snippet_placement: unknown page {page_id}")
        return document, None

    if page.has_id(asset_id):
        logger.debug(f"Asset {asset_id} already on page {page_id}, moving it")
        return move(document, page_id, asset_id, position), asset_id

    placement = PlacedSnippet(asset_id=asset_id, position=position, size=native_size)
    placement = placement.with_geometry(position, native_size)
    page = replace(page, snippets=page.snippets + (placement,))
    return document.with_page(page), asset_id


def replace_all(
    document: Document,
    page_id: str,
    placements: Iterable[PlacedSnippet],
) -> Document:
    """Replace the page's snippet placements in one write (sizes clamped)."""
    page = document.get_page(page_id)
    if page is None:
        return document
    clamped = tuple(p.with_geometry(p.position, p.size) for p in placements)
    return document.with_page(replace(page, snippets=clamped))


def remove_asset_references(document: Document, asset_id: str) -> Document:
    """Drop every placement of an asset removed from the external library."""
    pages = []
    for page in document.pages:
        snippets = tuple(s for s in page.snippets if s.asset_id != asset_id)
        pages.append(page if len(snippets) == len(page.snippets) else replace(page, snippets=snippets))
    return replace(document, pages=tuple(pages))


# ─────────────────────────────────────────────────────────────────────────────
# Text
# ─────────────────────────────────────────────────────────────────────────────

def add_text(
    document: Document,
    page_id: str,
    position: Position,
    *,
    content: str = DEFAULT_TEXT_CONTENT,
    id_factory: IdFactory = new_id,
    **attributes: Any,
) -> Tuple[Document, Optional[str]]:
    """
    Add a text element with the default style.

    Extra keyword attributes (font_size, writing_mode, ...) override the
    defaults.

    Returns:
        (new document, text id); None if the page does not exist
    """
    page = document.get_page(page_id)
    if page is None:
        return document, None
    element = TextElement(id=id_factory(), content=content, position=position, **attributes)
    element = element.with_geometry(element.position, element.size)
    return document.with_page(replace(page, texts=page.texts + (element,))), element.id


def update_text(document: Document, page_id: str, text_id: str, **changes: Any) -> Document:
    """
    Update attributes of a text element.

    Unknown ids and non-text ids are no-ops.
    """
    def _apply(element: Element) -> Element:
        if not isinstance(element, TextElement):
            return element
        updated = replace(element, **changes)
        return updated.with_geometry(updated.position, updated.size)

    return _update_element(document, page_id, text_id, _apply)


def remove_text(document: Document, page_id: str, text_id: str) -> Document:
    page = document.get_page(page_id)
    if page is None or not any(t.id == text_id for t in page.texts):
        return document
    return remove(document, page_id, text_id)


# ─────────────────────────────────────────────────────────────────────────────
# Shapes
# ─────────────────────────────────────────────────────────────────────────────

def add_shape(
    document: Document,
    page_id: str,
    shape_kind: ShapeKind,
    position: Position,
    *,
    id_factory: IdFactory = new_id,
    **attributes: Any,
) -> Tuple[Document, Optional[str]]:
    """
    Add a shape with its kind's default size and stroke.

    Returns:
        (new document, shape id); None if the page does not exist
    """
    page = document.get_page(page_id)
    if page is None:
        return document, None
    attributes.setdefault("size", ShapeElement.default_size(shape_kind))
    element = ShapeElement(id=id_factory(), shape_kind=shape_kind, position=position, **attributes)
    return document.with_page(replace(page, shapes=page.shapes + (element,))), element.id


def update_shape(document: Document, page_id: str, shape_id: str, **changes: Any) -> Document:
    def _apply(element: Element) -> Element:
        if not isinstance(element, ShapeElement):
            return element
        updated = replace(element, **changes)
        if "size" in changes:
            updated = updated.with_geometry(updated.position, updated.size)
        return updated

    return _update_element(document, page_id, shape_id, _apply)


def remove_shape(document: Document, page_id: str, shape_id: str) -> Document:
    page = document.get_page(page_id)
    if page is None or not any(s.id == shape_id for s in page.shapes):
        return document
    return remove(document, page_id, shape_id)
