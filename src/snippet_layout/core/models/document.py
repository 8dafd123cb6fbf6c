"""
Module: document

Purpose:
    The Document groups the ordered pages being edited together with
    the active page and the default margin applied to pages without
    an explicit override.

Key Classes:
    - Document: Immutable ordered page collection

Dependencies:
    - core.models.page: Page, Margin

Used By:
    - editor.state: Every mutation returns a new Document
    - editor.history: Snapshots hold Document.pages
    - output: Compositor input
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

from .page import Margin, Page


@dataclass(frozen=True)
class Document:
    """
    Ordered pages plus view-independent document settings (immutable).

    Attributes:
        pages: Pages in output order
        active_page_id: Page currently shown in the editor, if any
        default_margin: Margin applied to pages with no override
    """

    pages: Tuple[Page, ...] = field(default_factory=tuple)
    active_page_id: Optional[str] = None
    default_margin: Margin = field(default_factory=Margin)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def active_page(self) -> Optional[Page]:
        if self.active_page_id is None:
            return None
        return self.get_page(self.active_page_id)

    def get_page(self, page_id: str) -> Optional[Page]:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def page_index(self, page_id: str) -> int:
        """Index of page_id, or -1 if absent."""
        for index, page in enumerate(self.pages):
            if page.id == page_id:
                return index
        return -1

    def with_page(self, page: Page) -> "Document":
        """Replace the page with the same id (no-op if absent)."""
        pages = tuple(page if p.id == page.id else p for p in self.pages)
        return replace(self, pages=pages)

    def with_pages(self, pages: Tuple[Page, ...]) -> "Document":
        active = self.active_page_id
        if active is not None and all(p.id != active for p in pages):
            active = None
        return replace(self, pages=tuple(pages), active_page_id=active)

    def margin_for(self, page: Page) -> Margin:
        return page.effective_margin(self.default_margin)

    def to_dict(self) -> dict[str, Any]:
        return {
            "active_page_id": self.active_page_id,
            "default_margin": self.default_margin.to_dict(),
            "pages": [p.to_dict() for p in self.pages],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        margin = data.get("default_margin")
        return cls(
            pages=tuple(Page.from_dict(p) for p in data.get("pages", [])),
            active_page_id=data.get("active_page_id"),
            default_margin=Margin.from_dict(margin) if margin else Margin(),
        )
