"""
Module: editor.session

Purpose:
    Holder of the current Document and its HistoryManager. Every
    mutation goes through the session, which serializes writers with a
    re-entrant lock and records exactly one undo snapshot per committed
    operation or gesture.

Key Classes:
    - LayoutSession: Single-writer document holder

Dependencies:
    - threading (std): RLock
    - editor.history: HistoryManager

Used By:
    - editor.interaction: Gestures and keyboard commands
    - arrange.engine: Atomic arrangement calls
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Optional

from snippet_layout.core.models import Document

from .history import HistoryManager

logger = logging.getLogger(__name__)


class LayoutSession:
    """
    Current document plus undo history.

    Operations are plain functions `fn(document, *args) -> Document` or
    `fn(document, *args) -> (Document, extra)` from editor.state or
    arrange. A snapshot is pushed only if the operation changed the
    document.

    A gesture (drag, resize, text edit) holds the lock from
    begin_gesture() until end_gesture(); intermediate updates are not
    recorded, and the document as it was at gesture start becomes the
    single undo step.

    Example:
        >>> session = LayoutSession()
        >>> page_id = session.apply(state.add_page)
        >>> session.undo()
        True
    """

    def __init__(
        self,
        document: Optional[Document] = None,
        history: Optional[HistoryManager] = None,
    ) -> None:
        self._document = document if document is not None else Document()
        self.history = history if history is not None else HistoryManager()
        self._lock = RLock()
        self._gesture_start: Optional[Document] = None

    @property
    def document(self) -> Document:
        return self._document

    @property
    def in_gesture(self) -> bool:
        return self._gesture_start is not None

    def load(self, document: Document) -> None:
        """Replace the document wholesale and forget the history."""
        with self._lock:
            self._document = document
            self._gesture_start = None
            self.history.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Atomic operations
    # ─────────────────────────────────────────────────────────────────────────

    def apply(self, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Run one operation as a single undoable step.

        If a gesture is open, the gesture's changes so far are committed
        as their own step first and the gesture continues from the
        operation's result, so the two never share an undo step.

        Args:
            operation: Function taking the current Document first
            *args, **kwargs: Forwarded to operation

        Returns:
            The operation's extra return value if it returned a tuple
            (e.g. a new element id), else None
        """
        with self._lock:
            before = self._document
            result = operation(before, *args, **kwargs)
            extra = None
            if isinstance(result, tuple):
                result, extra = result
            if result != before:
                if self._gesture_start is not None:
                    if self._gesture_start != before:
                        self.history.push(self._gesture_start)
                    self._gesture_start = result
                    logger.debug(f"{getattr(operation, '__name__', 'operation')} split the open gesture")
                self.history.push(before)
                self._document = result
            return extra

    def undo(self) -> bool:
        """
        Restore the previous snapshot.

        Returns:
            True if a snapshot was restored
        """
        with self._lock:
            if not self.history.can_undo():
                return False
            self._document = self.history.undo(self._document)
            logger.debug(f"Undo, {len(self.history)} step(s) left")
            return True

    # ─────────────────────────────────────────────────────────────────────────
    # Gestures
    # ─────────────────────────────────────────────────────────────────────────

    def begin_gesture(self) -> None:
        self._lock.acquire()
        if self._gesture_start is not None:
            # Nested begin: keep the outer start, balance the lock.
            self._lock.release()
            return
        self._gesture_start = self._document

    def update(self, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Apply an intermediate gesture step without recording history."""
        with self._lock:
            result = operation(self._document, *args, **kwargs)
            extra = None
            if isinstance(result, tuple):
                result, extra = result
            self._document = result
            return extra

    def end_gesture(self) -> bool:
        """
        Finish the current gesture.

        Returns:
            True if the gesture changed the document (one snapshot pushed)
        """
        if self._gesture_start is None:
            return False
        start = self._gesture_start
        self._gesture_start = None
        try:
            changed = start != self._document
            if changed:
                self.history.push(start)
            return changed
        finally:
            self._lock.release()

    def cancel_gesture(self) -> None:
        """Abort the gesture and restore the document it started from."""
        if self._gesture_start is None:
            return
        self._document = self._gesture_start
        self._gesture_start = None
        self._lock.release()
