"""
Module: editor.history

Purpose:
    Bounded undo stack of whole-document page snapshots. Because the
    models are immutable, a snapshot is just the tuple of pages; no
    copying is needed and later edits can never alter it.

Key Classes:
    - HistoryManager: push / undo / can_undo / clear

Used By:
    - editor.session: Snapshot before each committed mutation
    - arrange.engine: One snapshot per arrangement call
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Tuple

from snippet_layout.core.models import Document, Page

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


class HistoryManager:
    """
    Undo-only history with a fixed capacity.

    When the stack is full, pushing drops the oldest snapshot. There is
    no redo.

    Example:
        >>> history = HistoryManager()
        >>> history.push(doc)
        >>> doc = history.undo(edited_doc)
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"history limit must be >= 1: {limit}")
        self._limit = limit
        self._stack: Deque[Tuple[Page, ...]] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._stack)

    def push(self, document: Document) -> None:
        """Snapshot the document's pages before a mutation."""
        self._stack.append(document.pages)
        logger.debug(f"History push ({len(self._stack)}/{self._limit})")

    def can_undo(self) -> bool:
        return bool(self._stack)

    def undo(self, document: Document) -> Document:
        """
        Restore the most recent snapshot.

        Args:
            document: Current document (its non-page settings are kept)

        Returns:
            Restored document, or document unchanged if the history is empty
        """
        if not self._stack:
            logger.debug("Undo requested with empty history")
            return document
        pages = self._stack.pop()
        return document.with_pages(pages)

    def clear(self) -> None:
        self._stack.clear()
