"""Data models for Gridbook."""

from .selection import (
    KeyAction,
    KeyActionKind,
    Selection,
    SelectionStats,
    StateChange,
    StateChangeKind,
)
from .sheet_data import (
    EMPTY_CELL,
    CellAddress,
    CellData,
    CellStyle,
    HorizontalAlignment,
    SheetData,
    WorkbookData,
)

__all__ = [
    "CellAddress",
    "CellData",
    "CellStyle",
    "EMPTY_CELL",
    "HorizontalAlignment",
    "SheetData",
    "WorkbookData",
    "Selection",
    "SelectionStats",
    "KeyAction",
    "KeyActionKind",
    "StateChange",
    "StateChangeKind",
]
