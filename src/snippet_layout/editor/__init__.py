"""
Module: editor

Purpose:
    Interactive editing of a Document: pure placement operations, the
    eight-handle resize formula, bounded undo history, the single-writer
    session and the pointer/keyboard state machine.

Key Classes:
    - LayoutSession: Document holder with history
    - HistoryManager: Bounded undo stack
    - InteractionController: Input state machine
    - EditorConfig: Grid, debounce and handle settings
    - Handle: Resize handles
"""

from . import state
from .config import EditorConfig
from .history import HistoryManager, DEFAULT_HISTORY_LIMIT
from .resize import Handle, resize_rect
from .session import LayoutSession
from .interaction import (
    InteractionController,
    Idle,
    Dragging,
    Resizing,
    MultiSelecting,
    EditingText,
    PointerButton,
    Modifier,
)

__all__ = [
    "state",
    "EditorConfig",
    "HistoryManager",
    "DEFAULT_HISTORY_LIMIT",
    "Handle",
    "resize_rect",
    "LayoutSession",
    "InteractionController",
    "Idle",
    "Dragging",
    "Resizing",
    "MultiSelecting",
    "EditingText",
    "PointerButton",
    "Modifier",
]
