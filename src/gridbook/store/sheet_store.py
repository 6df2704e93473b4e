"""Copy-on-write operations on sheets and workbooks.

Every function here returns a new model and leaves its arguments untouched.
Cell identifiers coming from user input are validated with
``parse_cell_id`` and raise ``InvalidAddressError`` when malformed.
"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..core.constants import WORKBOOK
from ..core.exceptions import InvalidOperationError
from ..models.sheet_data import EMPTY_CELL, CellData, CellStyle, SheetData, WorkbookData
from ..utils.address import parse_cell_id

logger = logging.getLogger(__name__)


def _checked(cell_id: str) -> str:
    parse_cell_id(cell_id)
    return cell_id


# Cell operations


def get_cell(sheet: SheetData, cell_id: str) -> CellData:
    """Return the stored cell, or the empty cell if there is no entry."""
    return sheet.cells.get(cell_id, EMPTY_CELL)


def _with_cells(sheet: SheetData, updates: dict[str, CellData]) -> SheetData:
    cells = dict(sheet.cells)
    for cell_id, cell in updates.items():
        # Cells back to the default are dropped to keep the mapping sparse
        if cell.is_empty:
            cells.pop(cell_id, None)
        else:
            cells[cell_id] = cell
    return sheet.model_copy(update={"cells": MappingProxyType(cells)})


def set_cell_value(sheet: SheetData, cell_id: str, value: str) -> SheetData:
    """Replace a cell's displayed value, keeping its formula and style."""
    cell = get_cell(sheet, _checked(cell_id))
    return _with_cells(sheet, {cell_id: cell.model_copy(update={"value": value})})


def set_cell_values(sheet: SheetData, values: Mapping[str, str]) -> SheetData:
    """Replace several values at once; every id is checked before any change."""
    targets = {_checked(cell_id): value for cell_id, value in values.items()}
    updates = {
        cell_id: get_cell(sheet, cell_id).model_copy(update={"value": value})
        for cell_id, value in targets.items()
    }
    return _with_cells(sheet, updates)


def update_cell(
    sheet: SheetData,
    cell_id: str,
    *,
    value: str | None = None,
    formula: str | None = None,
    style: CellStyle | None = None,
) -> SheetData:
    """Overwrite the given fields of a cell; fields left as None are kept.

    Unlike ``update_cell_style`` a given style replaces the old one whole.
    """
    updates = {
        field: new
        for field, new in (("value", value), ("formula", formula), ("style", style))
        if new is not None
    }
    cell = get_cell(sheet, _checked(cell_id))
    return _with_cells(sheet, {cell_id: cell.model_copy(update=updates)})


def _merge_style(cell: CellData, partial_style: CellStyle) -> CellData:
    base = cell.style or CellStyle()
    return cell.model_copy(update={"style": base.merge(partial_style)})


def update_cell_style(sheet: SheetData, cell_id: str, partial_style: CellStyle) -> SheetData:
    """Shallow-merge ``partial_style`` into one cell's style."""
    cell = get_cell(sheet, _checked(cell_id))
    return _with_cells(sheet, {cell_id: _merge_style(cell, partial_style)})


def update_cells_style(
    sheet: SheetData, cell_ids: Iterable[str], partial_style: CellStyle
) -> SheetData:
    """Shallow-merge ``partial_style`` into every listed cell.

    All identifiers are validated before anything is built, so the result
    either covers every cell or an error is raised.
    """
    targets = [_checked(cell_id) for cell_id in cell_ids]
    updates = {cell_id: _merge_style(get_cell(sheet, cell_id), partial_style) for cell_id in targets}
    return _with_cells(sheet, updates)


# Sheet operations


def new_sheet(number: int, prefix: str = WORKBOOK.DEFAULT_SHEET_PREFIX) -> SheetData:
    """Create an empty sheet numbered ``number``."""
    return SheetData(id=f"{WORKBOOK.SHEET_ID_PREFIX}{number}", name=f"{prefix}{number}")


def new_workbook(prefix: str = WORKBOOK.DEFAULT_SHEET_PREFIX) -> WorkbookData:
    """Create a workbook holding one empty sheet."""
    sheet = new_sheet(1, prefix)
    return WorkbookData(sheets=[sheet], active_sheet_id=sheet.id)


def get_sheet(workbook: WorkbookData, sheet_id: str) -> SheetData:
    """Look up a sheet by id.

    Raises:
        InvalidOperationError: If no sheet has that id
    """
    sheet = workbook.get_sheet_by_id(sheet_id)
    if sheet is None:
        raise InvalidOperationError(f"Unknown sheet id: {sheet_id!r}")
    return sheet


def replace_sheet(workbook: WorkbookData, sheet: SheetData) -> WorkbookData:
    """Swap in a new version of a sheet, matched by id."""
    get_sheet(workbook, sheet.id)
    sheets = tuple(sheet if existing.id == sheet.id else existing for existing in workbook.sheets)
    return workbook.model_copy(update={"sheets": sheets})


def add_sheet(workbook: WorkbookData, prefix: str = WORKBOOK.DEFAULT_SHEET_PREFIX) -> WorkbookData:
    """Append a new empty sheet and make it active.

    The sheet is numbered one past the current count, skipping numbers whose
    id or name is already taken.
    """
    taken = {sheet.id for sheet in workbook.sheets} | set(workbook.get_sheet_names())
    number = workbook.sheet_count + 1
    while (
        f"{WORKBOOK.SHEET_ID_PREFIX}{number}" in taken or f"{prefix}{number}" in taken
    ):
        number += 1

    sheet = new_sheet(number, prefix)
    logger.debug(f"Adding sheet {sheet.id} ({sheet.name})")
    return WorkbookData(sheets=[*workbook.sheets, sheet], active_sheet_id=sheet.id)


def can_delete_sheet(workbook: WorkbookData) -> bool:
    """Whether a sheet may be deleted (more than one remains)."""
    return workbook.sheet_count > 1


def delete_sheet(workbook: WorkbookData, sheet_id: str) -> WorkbookData:
    """Remove a sheet.

    If the removed sheet was active, the first remaining sheet becomes active.

    Raises:
        InvalidOperationError: If it is the last sheet or the id is unknown
    """
    get_sheet(workbook, sheet_id)
    if not can_delete_sheet(workbook):
        raise InvalidOperationError("Cannot delete the last remaining sheet")

    remaining = [sheet for sheet in workbook.sheets if sheet.id != sheet_id]
    active_id = workbook.active_sheet_id
    if active_id == sheet_id or workbook.get_sheet_by_id(active_id) is None:
        active_id = remaining[0].id
    return WorkbookData(sheets=remaining, active_sheet_id=active_id)


def rename_sheet(workbook: WorkbookData, sheet_id: str, new_name: str) -> WorkbookData:
    """Change a sheet's display name. Names need not be unique.

    Raises:
        InvalidOperationError: If the id is unknown or the name is blank
    """
    name = new_name.strip()
    if not name:
        raise InvalidOperationError("Sheet name must not be empty")
    sheet = get_sheet(workbook, sheet_id)
    return replace_sheet(workbook, sheet.model_copy(update={"name": name}))


def set_active_sheet(workbook: WorkbookData, sheet_id: str) -> WorkbookData:
    """Make another sheet active.

    Raises:
        InvalidOperationError: If the id is unknown
    """
    get_sheet(workbook, sheet_id)
    return workbook.model_copy(update={"active_sheet_id": sheet_id})
