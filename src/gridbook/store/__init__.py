"""Workbook and sheet storage operations."""

from .sheet_store import (
    add_sheet,
    can_delete_sheet,
    delete_sheet,
    get_cell,
    get_sheet,
    new_sheet,
    new_workbook,
    rename_sheet,
    replace_sheet,
    set_active_sheet,
    set_cell_value,
    set_cell_values,
    update_cell,
    update_cell_style,
    update_cells_style,
)

__all__ = [
    "add_sheet",
    "can_delete_sheet",
    "delete_sheet",
    "get_cell",
    "get_sheet",
    "new_sheet",
    "new_workbook",
    "rename_sheet",
    "replace_sheet",
    "set_active_sheet",
    "set_cell_value",
    "set_cell_values",
    "update_cell",
    "update_cell_style",
    "update_cells_style",
]
