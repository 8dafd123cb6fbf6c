"""
Module: arrange.engine

Purpose:
    Command facade binding the arrangement algorithms to a LayoutSession.
    Each call is one atomic operation and at most one undo snapshot,
    however many elements it touches. Calls that change nothing (too
    few members, unknown page) record nothing.

Key Classes:
    - ArrangementEngine: Discrete arrangement commands

Dependencies:
    - editor.session: LayoutSession
    - arrange.grid, arrange.align, arrange.pack

Used By:
    - Host toolbars and menus
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from snippet_layout.assets import AssetLibrary
from snippet_layout.editor.session import LayoutSession

from . import align as _align
from . import grid as _grid
from . import pack as _pack
from .align import Dimension, Direction, Edge
from .grid import GridSpec
from .pack import RepackAnchor

logger = logging.getLogger(__name__)


class ArrangementEngine:
    """
    Arrangement commands against a session's current document.

    Example:
        >>> engine = ArrangementEngine(session, assets)
        >>> engine.align(page_id, controller.selection, Edge.TOP)
        >>> engine.grid_arrange(page_id, ["s1", "s2"], GridSpec(cols=2, rows=1))
    """

    def __init__(self, session: LayoutSession, assets: Optional[AssetLibrary] = None) -> None:
        self.session = session
        self.assets = assets

    def _run(self, name: str, operation, *args) -> bool:
        before = self.session.document
        self.session.apply(operation, *args)
        changed = self.session.document is not before
        logger.debug(f"{name}: {'applied' if changed else 'no change'}")
        return changed

    def grid_arrange(self, page_id: str, items: Sequence[str], spec: GridSpec) -> bool:
        return self._run("grid_arrange", _grid.grid_arrange, page_id, list(items), spec, self.assets)

    def align(self, page_id: str, selection: Sequence[str], edge: Edge) -> bool:
        return self._run("align", _align.align, page_id, list(selection), edge)

    def distribute(self, page_id: str, selection: Sequence[str], direction: Direction) -> bool:
        return self._run("distribute", _align.distribute, page_id, list(selection), direction)

    def unify_size(self, page_id: str, selection: Sequence[str], dimension: Dimension) -> bool:
        return self._run("unify_size", _align.unify_size, page_id, list(selection), dimension)

    def unify_all_pages_width(self) -> bool:
        return self._run("unify_all_pages_width", _align.unify_all_pages_width)

    def pack(self, page_id: str, selection: Sequence[str], direction: Direction) -> bool:
        return self._run("pack", _pack.pack, page_id, list(selection), direction)

    def repack_page(self, page_id: str, anchor: RepackAnchor) -> bool:
        return self._run("repack_page", _pack.repack_page, page_id, anchor, self.assets)

    def repack_across_pages(self, anchor: RepackAnchor) -> bool:
        return self._run("repack_across_pages", _pack.repack_across_pages, anchor, self.assets)
