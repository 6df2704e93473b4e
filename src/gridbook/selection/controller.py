"""Interpretation of pointer and keyboard gestures into selection state.

The controller owns the current ``Selection`` plus the transient drag state.
It never touches workbook data; edit-related keys are reported back as
``KeyAction`` values for the owner to apply.
"""

import logging

from ..core.constants import KEYS
from ..models.selection import KeyAction, KeyActionKind, Selection
from ..utils.address import cell_id, parse_cell_id
from ..utils.ranges import build_range

logger = logging.getLogger(__name__)

# (column delta, row delta) per navigation key
_MOVES: dict[str, tuple[int, int]] = {
    KEYS.ARROW_UP: (0, -1),
    KEYS.ARROW_DOWN: (0, 1),
    KEYS.ARROW_LEFT: (-1, 0),
    KEYS.ARROW_RIGHT: (1, 0),
    KEYS.ENTER: (0, 1),
    KEYS.TAB: (1, 0),
}

LEFT_BUTTON = 0


class SelectionController:
    """State machine over the current selection."""

    def __init__(
        self,
        max_rows: int | None = None,
        max_columns: int | None = None,
        forward_typed_character: bool = False,
    ) -> None:
        """Initialize the controller with A1 selected.

        Args:
            max_rows: Rows reachable by keyboard navigation (None for unbounded)
            max_columns: Columns reachable by keyboard navigation (None for unbounded)
            forward_typed_character: Pass the printable key that starts an
                edit on as the seed of the edit buffer
        """
        self.max_rows = max_rows
        self.max_columns = max_columns
        self.forward_typed_character = forward_typed_character

        self._selection = Selection()
        self.dragging = False
        self.drag_anchor: str | None = None
        self._drag_cell: str | None = None

    @property
    def selection(self) -> Selection:
        """The current selection."""
        return self._selection

    def reset(self, selection: Selection | None = None) -> Selection:
        """Replace the selection and drop any drag in progress."""
        self._selection = selection or Selection()
        self.pointer_up()
        return self._selection

    # Pointer gestures

    def click(self, target: str) -> Selection:
        """Plain click: select exactly ``target`` and anchor there."""
        parse_cell_id(target)
        self._selection = Selection(active_cell=target, range=[target], anchor=target)
        return self._selection

    def ctrl_click(self, target: str) -> Selection:
        """Add ``target`` to the selection without moving the active cell.

        This is the one gesture that can leave a non-rectangular range.
        """
        parse_cell_id(target)
        current = self._selection
        if target in current.range:
            return current
        self._selection = Selection(
            active_cell=current.active_cell,
            range=[*current.range, target],
            anchor=current.anchor,
        )
        return self._selection

    def shift_click(self, target: str) -> Selection:
        """Select the rectangle from the first selected cell to ``target``."""
        current = self._selection
        if not current.range:
            return self.click(target)
        self._selection = self._rectangle(current.range[0], target)
        return self._selection

    def pointer_down(
        self,
        target: str,
        *,
        ctrl: bool = False,
        meta: bool = False,
        shift: bool = False,
        button: int = LEFT_BUTTON,
    ) -> Selection:
        """Mouse-down on a cell: click by modifier, then start dragging."""
        if button != LEFT_BUTTON:
            return self._selection

        if ctrl or meta:
            self.ctrl_click(target)
        elif shift and self._selection.range:
            self.shift_click(target)
        else:
            self.click(target)

        self.dragging = True
        self.drag_anchor = target
        self._drag_cell = target
        return self._selection

    def pointer_move(self, target: str) -> bool:
        """Pointer entered ``target``; extend the drag rectangle if dragging.

        Returns:
            True if the selection changed
        """
        if not self.dragging or self.drag_anchor is None or target == self._drag_cell:
            return False
        self._drag_cell = target
        self._selection = self._rectangle(self.drag_anchor, target)
        return True

    def pointer_up(self) -> None:
        """Button released anywhere; the drag ends."""
        self.dragging = False
        self.drag_anchor = None
        self._drag_cell = None

    def _rectangle(self, origin: str, target: str) -> Selection:
        cells = build_range(origin, target)
        active = self._selection.active_cell
        if active not in cells:
            # Keep the active cell inside the range it belongs to
            active = origin
        return Selection(active_cell=active, range=cells, anchor=self._selection.anchor)

    # Keyboard

    def navigate(self, key: str) -> Selection | None:
        """Move the active cell one step for a navigation key.

        Up and Left stop at the first row and column. Down and Right stop at
        ``max_rows``/``max_columns`` when set.

        Returns:
            The new selection, or None if ``key`` is not a navigation key
        """
        move = _MOVES.get(key)
        if move is None:
            return None

        address = parse_cell_id(self._selection.active_cell)
        column = max(0, address.column + move[0])
        row = max(0, address.row + move[1])
        if self.max_columns is not None:
            column = min(column, self.max_columns - 1)
        if self.max_rows is not None:
            row = min(row, self.max_rows - 1)

        target = cell_id(column, row)
        self._selection = Selection(active_cell=target, range=[target], anchor=target)
        return self._selection

    def handle_key(
        self, key: str, *, ctrl: bool = False, meta: bool = False, editing: bool = False
    ) -> KeyAction:
        """Interpret a key press.

        While editing only Enter (commit) and Escape (cancel) are acted on.
        Otherwise navigation keys move the selection, and F2 or a printable
        character starts an edit of the active cell.
        """
        active = self._selection.active_cell

        if editing:
            if key == KEYS.ENTER:
                return KeyAction(kind=KeyActionKind.COMMIT_EDIT, prevent_default=True, cell_id=active)
            if key == KEYS.ESCAPE:
                return KeyAction(kind=KeyActionKind.CANCEL_EDIT, prevent_default=True, cell_id=active)
            return KeyAction(kind=KeyActionKind.IGNORED)

        selection = self.navigate(key)
        if selection is not None:
            logger.debug(f"{key} moved active cell {active} -> {selection.active_cell}")
            return KeyAction(
                kind=KeyActionKind.NAVIGATE, prevent_default=True, cell_id=selection.active_cell
            )

        if key == KEYS.F2:
            return KeyAction(kind=KeyActionKind.START_EDIT, prevent_default=True, cell_id=active)

        if len(key) == 1 and key.isprintable() and not ctrl and not meta:
            seed = key if self.forward_typed_character else None
            return KeyAction(kind=KeyActionKind.START_EDIT, cell_id=active, seed_text=seed)

        return KeyAction(kind=KeyActionKind.IGNORED)
