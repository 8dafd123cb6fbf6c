"""
Module: editor.interaction

Purpose:
    Pointer/keyboard state machine. Translates raw view events into
    PlacementState operations applied through a LayoutSession, with one
    undo snapshot per completed gesture. The controller only holds
    transient gesture state and the selection; the session's Document
    stays the source of truth.

Key Classes:
    - InteractionController: Event entry points
    - Idle, Dragging, Resizing, MultiSelecting, EditingText: States
    - PointerButton, Modifier: Event qualifiers

Dependencies:
    - editor.session: LayoutSession
    - editor.state: Mutations
    - editor.resize: Handle
    - assets: Native sizes for external drops

Used By:
    - Host views (Qt canvas, tests)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Callable, Optional, Tuple, Union

from snippet_layout.assets import AssetLibrary, MissingAssetError
from snippet_layout.core import units
from snippet_layout.core.errors import RenderAssetError
from snippet_layout.core.models import Page, Position, Rect, Size, TextElement

from . import state
from .config import EditorConfig
from .resize import Handle
from .session import LayoutSession

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

KEY_ESCAPE = "Escape"
KEY_DELETE = "Delete"
KEY_BACKSPACE = "Backspace"


class PointerButton(Enum):
    PRIMARY = auto()
    MIDDLE = auto()
    SECONDARY = auto()


class Modifier(Flag):
    NONE = 0
    SHIFT = auto()
    CTRL = auto()
    META = auto()
    ALT = auto()


# Modifiers that toggle selection membership on click.
TOGGLE_MODIFIERS = Modifier.SHIFT | Modifier.CTRL | Modifier.META
# Modifiers that turn "z" into undo.
COMMAND_MODIFIERS = Modifier.CTRL | Modifier.META


# ─────────────────────────────────────────────────────────────────────────────
# States
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    """
    Moving the selection.

    Attributes:
        target: Element under the pointer at gesture start
        offset: Pointer minus the target's top-left, in page units
        starts: (element id, top-left at gesture start) for every moved element
    """

    target: str
    offset: Position
    starts: Tuple[Tuple[str, Position], ...]


@dataclass(frozen=True)
class Resizing:
    target: str
    handle: Handle
    start_geometry: Rect
    start_pointer: Position


@dataclass(frozen=True)
class MultiSelecting:
    """Rubber-band selection from origin to current (page units)."""

    origin: Position
    current: Position

    @property
    def rect(self) -> Rect:
        left = min(self.origin.x, self.current.x)
        top = min(self.origin.y, self.current.y)
        return Rect(
            Position(left, top),
            Size(abs(self.current.x - self.origin.x), abs(self.current.y - self.origin.y)),
        )


@dataclass(frozen=True)
class EditingText:
    target: str


InteractionState = Union[Idle, Dragging, Resizing, MultiSelecting, EditingText]


def _intersects(a: Rect, b: Rect) -> bool:
    return a.left <= b.right and b.left <= a.right and a.top <= b.bottom and b.top <= a.bottom


class InteractionController:
    """
    Editor input state machine for the active page.

    Pointer coordinates are in view pixels relative to the page's
    top-left corner; they are divided by the zoom and shifted by the
    margin before reaching the model, so zoom never leaks into stored
    geometry.

    Args:
        session: Document holder receiving all mutations
        assets: Library used to look up native sizes on external drop
        config: Editor settings (grid, debounce, handle radius, zoom)
        clock: Monotonic time source in seconds (injectable for tests)

    Example:
        >>> controller = InteractionController(session, assets)
        >>> controller.external_drop("s1", (200, 150))
        >>> controller.pointer_down((210, 160))
        >>> controller.pointer_move((260, 200))
        >>> controller.pointer_up()
    """

    def __init__(
        self,
        session: LayoutSession,
        assets: Optional[AssetLibrary] = None,
        config: Optional[EditorConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session = session
        self.assets = assets
        self.config = config or EditorConfig()
        self._clock = clock
        self._state: InteractionState = Idle()
        self._selection: Tuple[str, ...] = ()
        self._last_drop_at: Optional[float] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def selection(self) -> Tuple[str, ...]:
        """Selected element ids, in the order they were selected."""
        return self._selection

    @property
    def page(self) -> Optional[Page]:
        return self.session.document.active_page

    def select(self, element_ids: Tuple[str, ...]) -> None:
        page = self.page
        if page is None:
            self._selection = ()
            return
        self._selection = tuple(i for i in dict.fromkeys(element_ids) if page.has_id(i))

    def clear_selection(self) -> None:
        self._selection = ()

    # ─────────────────────────────────────────────────────────────────────────
    # Coordinates and hit testing
    # ─────────────────────────────────────────────────────────────────────────

    def to_page(self, point: Point) -> Position:
        """Convert a view point to page units relative to the margin origin."""
        page = self.page
        margin_x, margin_y = (0, 0)
        if page is not None:
            margin = self.session.document.margin_for(page)
            margin_x = units.mm_to_units(margin.x_mm, units.SCREEN_DPI)
            margin_y = units.mm_to_units(margin.y_mm, units.SCREEN_DPI)
        zoom = self.config.zoom
        return Position(point[0] / zoom - margin_x, point[1] / zoom - margin_y)

    def hit_test(self, position: Position) -> Optional[str]:
        """Topmost element containing position (last drawn wins)."""
        page = self.page
        if page is None:
            return None
        for element in reversed(list(page.elements())):
            if element.rect.contains(position):
                return element.element_id
        return None

    def handle_at(self, position: Position) -> Optional[Handle]:
        """Resize handle of the single selected element under position."""
        page = self.page
        if page is None or len(self._selection) != 1:
            return None
        element = page.find(self._selection[0])
        if element is None:
            return None
        radius = self.config.handle_radius_px / self.config.zoom
        for handle in Handle:
            anchor = handle.anchor_point(element.rect)
            if abs(anchor.x - position.x) <= radius and abs(anchor.y - position.y) <= radius:
                return handle
        return None

    def _snap(self, value: float) -> float:
        if not self.config.snap_to_grid:
            return value
        return units.snap(value, self.config.grid_size_units)

    # ─────────────────────────────────────────────────────────────────────────
    # Pointer events
    # ─────────────────────────────────────────────────────────────────────────

    def pointer_down(
        self,
        point: Point,
        button: PointerButton = PointerButton.PRIMARY,
        modifier: Modifier = Modifier.NONE,
        target: Optional[str] = None,
        handle: Optional[Handle] = None,
    ) -> None:
        """
        Start a gesture.

        target and handle may be supplied by the host view; when omitted
        they are hit-tested against the active page.
        """
        if self._within_drop_debounce():
            logger.debug("Ignoring pointer-down fired right after a drop")
            return
        if button is not PointerButton.PRIMARY:
            return

        page = self.page
        if page is None:
            return

        position = self.to_page(point)
        if handle is None:
            handle = self.handle_at(position)
        if target is None and handle is None:
            target = self.hit_test(position)

        if isinstance(self._state, EditingText):
            if target == self._state.target and handle is None:
                return
            self._commit_text()

        if not isinstance(self._state, Idle):
            # A stale gesture (missed pointer-up) is committed first.
            self._finish_gesture()

        if handle is not None:
            self._start_resize(page, handle, position)
            return

        if target is None:
            if modifier & TOGGLE_MODIFIERS:
                self._state = MultiSelecting(position, position)
            else:
                self.clear_selection()
                self._state = Idle()
            return

        if modifier & TOGGLE_MODIFIERS:
            if target in self._selection:
                self._selection = tuple(i for i in self._selection if i != target)
            else:
                self._selection = self._selection + (target,)
            return

        if target not in self._selection:
            self._selection = (target,)
        self._start_drag(page, target, position)

    def pointer_move(self, point: Point) -> None:
        position = self.to_page(point)
        current = self._state
        if isinstance(current, Dragging):
            self._drag_to(current, position)
        elif isinstance(current, Resizing):
            self._resize_to(current, position)
        elif isinstance(current, MultiSelecting):
            self._state = MultiSelecting(current.origin, position)

    def pointer_up(self) -> None:
        self._finish_gesture()

    def lost_capture(self) -> None:
        """Pointer capture lost mid-gesture; treated exactly like pointer-up."""
        self._finish_gesture()

    def double_click(self, target: Optional[str] = None, point: Optional[Point] = None) -> None:
        """Enter text editing on a text element."""
        page = self.page
        if page is None:
            return
        if target is None and point is not None:
            target = self.hit_test(self.to_page(point))
        if target is None or not isinstance(page.find(target), TextElement):
            return
        if isinstance(self._state, EditingText):
            if self._state.target == target:
                return
            self._commit_text()
        self._finish_gesture()
        self._selection = (target,)
        self.session.begin_gesture()
        self._state = EditingText(target)
        logger.debug(f"Editing text {target}")

    # ─────────────────────────────────────────────────────────────────────────
    # Keyboard and focus
    # ─────────────────────────────────────────────────────────────────────────

    def key_down(self, key: str, modifier: Modifier = Modifier.NONE) -> None:
        if isinstance(self._state, EditingText):
            if key == KEY_ESCAPE:
                self._commit_text()
            # Other keys belong to the text editor.
            return

        if key.lower() == "z" and modifier & COMMAND_MODIFIERS:
            self.undo()
        elif key in (KEY_DELETE, KEY_BACKSPACE):
            self.delete_selection()
        elif key == KEY_ESCAPE:
            self.clear_selection()

    def focus_lost(self) -> None:
        if isinstance(self._state, EditingText):
            self._commit_text()

    def edit_text(self, content: str) -> None:
        """Live update of the text being edited; recorded on commit."""
        current = self._state
        if not isinstance(current, EditingText):
            return
        page = self.page
        if page is None:
            return
        self.session.update(state.update_text, page.id, current.target, content=content)

    # ─────────────────────────────────────────────────────────────────────────
    # Commands
    # ─────────────────────────────────────────────────────────────────────────

    def undo(self) -> bool:
        if not isinstance(self._state, Idle):
            self._finish_gesture()
        restored = self.session.undo()
        if restored:
            self.select(self._selection)
        return restored

    def delete_selection(self) -> None:
        page = self.page
        if page is None or not self._selection:
            return
        if not isinstance(self._state, Idle):
            self._finish_gesture()
        self.session.apply(state.remove_many, page.id, self._selection)
        self.clear_selection()

    def external_drop(
        self,
        asset_id: str,
        point: Point,
        native_size: Optional[Size] = None,
    ) -> Optional[str]:
        """
        Place an asset dragged in from the asset list.

        The drop position is the pointer minus the margin. A debounce
        window then suppresses the synthetic pointer-down some platforms
        fire immediately after a drop.

        Returns:
            Placement id, or None if nothing was placed
        """
        page = self.page
        if page is None:
            logger.warning(f"Drop of {asset_id} ignored: no active page")
            return None

        if native_size is None:
            if self.assets is None:
                logger.warning(f"Drop of {asset_id} ignored: no asset library")
                return None
            try:
                native_size = self.assets.native_size(asset_id)
            except (MissingAssetError, RenderAssetError) as e:
                logger.warning(f"Drop of {asset_id} ignored: {e}")
                return None

        if not isinstance(self._state, Idle):
            self._finish_gesture()
        position = self.to_page(point)
        position = Position(self._snap(position.x), self._snap(position.y))
        placement_id = self.session.apply(
            state.add_snippet_placement, page.id, asset_id, position, native_size
        )
        self._last_drop_at = self._clock()
        if placement_id is not None:
            self._selection = (placement_id,)
        return placement_id

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _within_drop_debounce(self) -> bool:
        if self._last_drop_at is None:
            return False
        return self._clock() - self._last_drop_at < self.config.drop_debounce_s

    def _start_drag(self, page: Page, target: str, position: Position) -> None:
        element = page.find(target)
        if element is None:
            return
        starts = []
        for element_id in self._selection:
            member = page.find(element_id)
            if member is not None:
                starts.append((element_id, member.position))
        self.session.begin_gesture()
        self._state = Dragging(
            target=target,
            offset=Position(position.x - element.position.x, position.y - element.position.y),
            starts=tuple(starts),
        )

    def _start_resize(self, page: Page, handle: Handle, position: Position) -> None:
        if len(self._selection) != 1:
            return
        element = page.find(self._selection[0])
        if element is None:
            return
        self.session.begin_gesture()
        self._state = Resizing(
            target=element.element_id,
            handle=handle,
            start_geometry=element.rect,
            start_pointer=position,
        )

    def _drag_to(self, current: Dragging, position: Position) -> None:
        page = self.page
        if page is None:
            return
        target_start = dict(current.starts).get(current.target)
        if target_start is None:
            return
        x = self._snap(position.x - current.offset.x)
        y = self._snap(position.y - current.offset.y)
        dx, dy = x - target_start.x, y - target_start.y
        for element_id, start in current.starts:
            self.session.update(state.move, page.id, element_id, start.translated(dx, dy))

    def _resize_to(self, current: Resizing, position: Position) -> None:
        page = self.page
        if page is None:
            return
        grid = self.config.grid_size_units if self.config.snap_to_grid else 0.0
        delta = (position.x - current.start_pointer.x, position.y - current.start_pointer.y)
        self.session.update(
            state.resize,
            page.id,
            current.target,
            current.handle,
            delta,
            start=(current.start_geometry.position, current.start_geometry.size),
            grid=grid,
        )

    def _finish_gesture(self) -> None:
        current = self._state
        if isinstance(current, (Dragging, Resizing)):
            changed = self.session.end_gesture()
            logger.debug(f"{type(current).__name__} of {current.target} ended (changed={changed})")
        elif isinstance(current, MultiSelecting):
            self._select_in(current.rect)
        elif isinstance(current, EditingText):
            self._commit_text()
            return
        self._state = Idle()

    def _select_in(self, band: Rect) -> None:
        page = self.page
        if page is None:
            return
        hits = tuple(e.element_id for e in page.elements() if _intersects(band, e.rect))
        self._selection = tuple(dict.fromkeys(self._selection + hits))

    def _commit_text(self) -> None:
        current = self._state
        if not isinstance(current, EditingText):
            return
        changed = self.session.end_gesture()
        logger.debug(f"Text edit of {current.target} committed (changed={changed})")
        self._state = Idle()
