"""Gridbook - In-memory spreadsheet model with selection and undo history."""

__version__ = "0.1.0"

from gridbook.config import Config, GridbookConfig
from gridbook.core.exceptions import (
    ConfigurationError,
    GridbookError,
    InvalidAddressError,
    InvalidOperationError,
)
from gridbook.gridbook import Gridbook
from gridbook.models import CellData, CellStyle, Selection, SelectionStats, SheetData, WorkbookData

__all__ = [
    "Gridbook",
    "Config",
    "GridbookConfig",
    "CellData",
    "CellStyle",
    "Selection",
    "SelectionStats",
    "SheetData",
    "WorkbookData",
    "GridbookError",
    "InvalidAddressError",
    "InvalidOperationError",
    "ConfigurationError",
]
