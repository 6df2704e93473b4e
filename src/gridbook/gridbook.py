"""Main Gridbook class."""

import logging
from collections.abc import Callable, Mapping

from . import store
from .config import Config
from .core.constants import KEYS, STYLE
from .core.exceptions import InvalidOperationError
from .history import HistoryManager
from .models import (
    CellData,
    CellStyle,
    KeyAction,
    KeyActionKind,
    Selection,
    SelectionStats,
    SheetData,
    StateChange,
    StateChangeKind,
    WorkbookData,
)
from .selection import SelectionController
from .utils.logging_context import LogContext, get_contextual_logger
from .utils.statistics import selection_stats

logger = logging.getLogger(__name__)
clog = get_contextual_logger(__name__)

Listener = Callable[[StateChange], None]


class Gridbook:
    """In-memory spreadsheet session: workbook, selection, editing and history.

    All state changes go through the methods of this class. Each mutation
    records exactly one undo step, and subscribers are notified after every
    change.
    """

    def __init__(
        self,
        config: Config | None = None,
        workbook: WorkbookData | None = None,
        **kwargs,
    ):
        """Initialize Gridbook.

        Args:
            config: Configuration object. If None, loads from environment.
            workbook: Starting workbook. If None, one empty sheet is created.
            **kwargs: Config overrides
        """
        if config is None:
            config = Config.from_env()

        overrides = {key: value for key, value in kwargs.items() if key in Config.model_fields}
        if overrides:
            config = Config.model_validate({**config.model_dump(), **overrides})

        self.config = config
        self._setup_logging()

        self._workbook = workbook or store.new_workbook(config.default_sheet_prefix)
        self._controller = SelectionController(
            max_rows=config.max_rows,
            max_columns=config.max_columns,
            forward_typed_character=config.forward_typed_character,
        )
        self._history = HistoryManager(
            max_depth=config.history_max_depth, deep_copy=config.history_deep_copy
        )

        self._editing = False
        self._edit_buffer = ""
        self._edit_cell: str | None = None
        self._listeners: list[Listener] = []

        logger.info(f"Gridbook initialized with {self._workbook.sheet_count} sheet(s)")

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        level = "DEBUG" if self.config.enable_debug else self.config.log_level
        logging.basicConfig(
            level=getattr(logging, level.upper()),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            filename=self.config.log_file,
        )

    # Read accessors

    @property
    def workbook(self) -> WorkbookData:
        return self._workbook

    @property
    def active_sheet(self) -> SheetData:
        return self._workbook.active_sheet

    @property
    def selection(self) -> Selection:
        return self._controller.selection

    @property
    def active_cell(self) -> str:
        return self._controller.selection.active_cell

    @property
    def selected_range(self) -> list[str]:
        return list(self._controller.selection.range)

    @property
    def is_dragging(self) -> bool:
        return self._controller.dragging

    @property
    def is_editing(self) -> bool:
        return self._editing

    @property
    def edit_buffer(self) -> str:
        return self._edit_buffer

    @property
    def edit_cell(self) -> str | None:
        return self._edit_cell

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def can_delete_sheet(self) -> bool:
        return store.can_delete_sheet(self._workbook)

    def get_cell(self, cell_id: str) -> CellData:
        """Cell on the active sheet (the empty cell if unset)."""
        return store.get_cell(self.active_sheet, cell_id)

    def get_cell_value(self, cell_id: str) -> str:
        return self.get_cell(cell_id).value

    def stats(self) -> SelectionStats:
        """Count, sum and average of the numeric values in the selected range."""
        return selection_stats(self.get_cell_value(cell) for cell in self.selection.range)

    # Notifications

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: StateChangeKind, detail: str = "") -> None:
        change = StateChange(kind=kind, detail=detail)
        for listener in list(self._listeners):
            listener(change)

    # Mutations

    def _commit(self, workbook: WorkbookData, detail: str) -> None:
        self._history.begin_mutation(self._workbook)
        self._workbook = workbook
        clog.debug(f"Committed {detail}")
        self._notify(StateChangeKind.WORKBOOK, detail)

    def _commit_sheet(self, sheet: SheetData, detail: str) -> None:
        self._commit(store.replace_sheet(self._workbook, sheet), detail)
        logger.debug(f"Sheet {sheet.id} stores {sheet.cell_count} cell(s)")

    def set_cell_value(self, cell_id: str, value: str) -> None:
        """Set a cell's displayed value on the active sheet."""
        sheet = self.active_sheet
        with LogContext("set_cell_value", sheet.id, cell_id):
            self._commit_sheet(store.set_cell_value(sheet, cell_id, value), cell_id)

    def set_cell_values(self, values: Mapping[str, str]) -> None:
        """Set several values on the active sheet as a single undo step."""
        if not values:
            return
        sheet = self.active_sheet
        with LogContext("set_cell_values", sheet.id):
            self._commit_sheet(store.set_cell_values(sheet, values), f"{len(values)} cell(s)")

    def update_cell(
        self,
        cell_id: str,
        *,
        value: str | None = None,
        formula: str | None = None,
        style: CellStyle | None = None,
    ) -> None:
        """Overwrite the given fields of a cell on the active sheet."""
        sheet = self.active_sheet
        with LogContext("update_cell", sheet.id, cell_id):
            updated = store.update_cell(sheet, cell_id, value=value, formula=formula, style=style)
            self._commit_sheet(updated, cell_id)

    def format_selection(self, style: CellStyle | None = None, **fields) -> bool:
        """Merge a partial style into every selected cell as one undo step.

        Style fields may be passed as a CellStyle or as keyword arguments,
        e.g. ``format_selection(bold=True, text_align="center")``.

        Returns:
            False if nothing is selected, True otherwise
        """
        cells = self.selection.range
        if not cells:
            return False

        partial = style or CellStyle()
        if fields:
            partial = partial.merge(CellStyle.model_validate(fields, strict=False))

        sheet = self.active_sheet
        with LogContext("format_selection", sheet.id):
            updated = store.update_cells_style(sheet, cells, partial)
            target = cells[0] if self.selection.is_single_cell else f"{len(cells)} cells"
            self._commit_sheet(updated, f"style of {target}")
        return True

    def toggle_style(self, field: str) -> bool:
        """Flip bold, italic or underline across the selection.

        The new value is the opposite of the active cell's, applied to every
        selected cell as one undo step.

        Raises:
            InvalidOperationError: If ``field`` is not a toggleable style field
        """
        if field not in STYLE.TOGGLE_FIELDS:
            raise InvalidOperationError(
                f"Cannot toggle {field!r}; expected one of {', '.join(STYLE.TOGGLE_FIELDS)}"
            )
        current = self.get_cell(self.active_cell).style
        enabled = bool(current and getattr(current, field))
        return self.format_selection(**{field: not enabled})

    def toggle_bold(self) -> bool:
        return self.toggle_style("bold")

    def toggle_italic(self) -> bool:
        return self.toggle_style("italic")

    def toggle_underline(self) -> bool:
        return self.toggle_style("underline")

    def add_sheet(self) -> SheetData:
        """Append a new sheet and make it active."""
        self._abandon_edit()
        with LogContext("add_sheet"):
            workbook = store.add_sheet(self._workbook, self.config.default_sheet_prefix)
            self._commit(workbook, f"add {workbook.active_sheet_id}")
        return self.active_sheet

    def delete_sheet(self, sheet_id: str) -> None:
        """Delete a sheet.

        Raises:
            InvalidOperationError: If it is the last sheet or does not exist;
                the workbook is left unchanged
        """
        with LogContext("delete_sheet", sheet_id):
            try:
                workbook = store.delete_sheet(self._workbook, sheet_id)
            except InvalidOperationError as e:
                clog.warning(f"Delete rejected: {e}")
                raise
            self._abandon_edit()
            self._commit(workbook, f"delete {sheet_id}")

    def rename_sheet(self, sheet_id: str, new_name: str) -> None:
        """Rename a sheet.

        Raises:
            InvalidOperationError: If the sheet does not exist or the name is blank
        """
        with LogContext("rename_sheet", sheet_id):
            try:
                workbook = store.rename_sheet(self._workbook, sheet_id, new_name)
            except InvalidOperationError as e:
                clog.warning(f"Rename rejected: {e}")
                raise
            self._commit(workbook, f"rename {sheet_id}")

    def select_sheet(self, sheet_id: str) -> None:
        """Make another sheet active. Not recorded in history."""
        self._abandon_edit()
        self._workbook = store.set_active_sheet(self._workbook, sheet_id)
        self._notify(StateChangeKind.WORKBOOK, f"activate {sheet_id}")

    # History

    def undo(self) -> bool:
        """Revert the last change. Returns False if there was nothing to undo."""
        previous = self._history.undo(self._workbook)
        if previous is None:
            return False
        self._workbook = previous
        logger.debug(f"Undo ({self._history.undo_depth} step(s) left)")
        self._notify(StateChangeKind.HISTORY, "undo")
        return True

    def redo(self) -> bool:
        """Re-apply the last undone change. Returns False if there was none."""
        following = self._history.redo(self._workbook)
        if following is None:
            return False
        self._workbook = following
        logger.debug(f"Redo ({self._history.redo_depth} step(s) left)")
        self._notify(StateChangeKind.HISTORY, "redo")
        return True

    # Editing

    def start_edit(self, cell_id: str | None = None, seed_text: str | None = None) -> None:
        """Open the editor on a cell (the active cell by default).

        The buffer starts with ``seed_text`` if given, otherwise with the
        cell's current value.
        """
        if cell_id is not None and cell_id != self.active_cell:
            self._controller.click(cell_id)
            self._notify(StateChangeKind.SELECTION, cell_id)

        target = self.active_cell
        self._edit_cell = target
        self._edit_buffer = seed_text if seed_text is not None else self.get_cell_value(target)
        self._editing = True
        self._notify(StateChangeKind.EDIT, f"start {target}")

    def set_edit_buffer(self, text: str) -> None:
        """Replace the text being edited.

        Raises:
            InvalidOperationError: If no edit is in progress
        """
        if not self._editing:
            raise InvalidOperationError("No edit in progress")
        self._edit_buffer = text
        self._notify(StateChangeKind.EDIT, "buffer")

    def stop_edit(self, commit: bool = True) -> bool:
        """Leave edit mode, writing the buffer to the cell if ``commit``.

        A commit is recorded even when the text is unchanged.

        Returns:
            True if a value was committed
        """
        if not self._editing:
            return False

        committed = False
        if commit and self._edit_cell is not None:
            self.set_cell_value(self._edit_cell, self._edit_buffer)
            committed = True

        self._editing = False
        self._edit_buffer = ""
        self._edit_cell = None
        self._notify(StateChangeKind.EDIT, "commit" if committed else "cancel")
        return committed

    def cancel_edit(self) -> None:
        """Leave edit mode without writing anything."""
        self.stop_edit(commit=False)

    def blur(self) -> None:
        """Focus left the editor; an unconfirmed edit is abandoned."""
        self._abandon_edit()

    def _abandon_edit(self) -> None:
        if self._editing:
            self.cancel_edit()

    # Pointer gestures

    def click(self, cell_id: str) -> Selection:
        """Plain click on a cell."""
        self._abandon_edit()
        selection = self._controller.click(cell_id)
        self._notify(StateChangeKind.SELECTION, cell_id)
        return selection

    def ctrl_click(self, cell_id: str) -> Selection:
        """Ctrl/Cmd-click: add a cell to the selection."""
        self._abandon_edit()
        selection = self._controller.ctrl_click(cell_id)
        self._notify(StateChangeKind.SELECTION, cell_id)
        return selection

    def shift_click(self, cell_id: str) -> Selection:
        """Shift-click: select the rectangle up to a cell."""
        self._abandon_edit()
        selection = self._controller.shift_click(cell_id)
        self._notify(StateChangeKind.SELECTION, cell_id)
        return selection

    def double_click(self, cell_id: str) -> None:
        """Double-click: select the cell and start editing it."""
        self._abandon_edit()
        self._controller.click(cell_id)
        self.start_edit()

    def pointer_down(
        self,
        cell_id: str,
        *,
        ctrl: bool = False,
        meta: bool = False,
        shift: bool = False,
        button: int = 0,
    ) -> Selection:
        """Mouse button pressed on a cell; starts a drag for the left button."""
        if button == 0:
            self._abandon_edit()
        selection = self._controller.pointer_down(
            cell_id, ctrl=ctrl, meta=meta, shift=shift, button=button
        )
        self._notify(StateChangeKind.SELECTION, cell_id)
        return selection

    def pointer_move(self, cell_id: str) -> bool:
        """Pointer entered a cell; extends the selection while dragging."""
        changed = self._controller.pointer_move(cell_id)
        if changed:
            self._notify(StateChangeKind.SELECTION, cell_id)
        return changed

    def pointer_up(self) -> None:
        """Mouse button released anywhere (global listener)."""
        self._controller.pointer_up()

    # Keyboard

    def key_down(
        self, key: str, *, ctrl: bool = False, meta: bool = False, shift: bool = False
    ) -> KeyAction:
        """Handle one key press and apply the resulting action.

        Ctrl/Cmd+Z undoes, Ctrl/Cmd+Shift+Z and Ctrl/Cmd+Y redo. Other keys
        are interpreted by the selection controller.
        """
        if ctrl or meta:
            shortcut = key.lower()
            if shortcut == KEYS.UNDO:
                if shift:
                    self.redo()
                    return KeyAction(kind=KeyActionKind.REDO, prevent_default=True)
                self.undo()
                return KeyAction(kind=KeyActionKind.UNDO, prevent_default=True)
            if shortcut == KEYS.REDO:
                self.redo()
                return KeyAction(kind=KeyActionKind.REDO, prevent_default=True)

        action = self._controller.handle_key(key, ctrl=ctrl, meta=meta, editing=self._editing)

        if action.kind is KeyActionKind.NAVIGATE:
            self._notify(StateChangeKind.SELECTION, self.active_cell)
        elif action.kind is KeyActionKind.START_EDIT:
            self.start_edit(seed_text=action.seed_text)
        elif action.kind is KeyActionKind.COMMIT_EDIT:
            self.stop_edit(commit=True)
        elif action.kind is KeyActionKind.CANCEL_EDIT:
            self.stop_edit(commit=False)

        return action
