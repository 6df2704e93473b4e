"""Centralized constants for Gridbook.

This module contains the constants shared by the address codec and the
workbook store, organized by category.
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class AddressConstants:
    """Constants for cell identifier encoding."""

    ALPHABET_SIZE: Final[int] = 26
    BASE_LETTER: Final[str] = "A"
    CELL_ID_PATTERN: Final[str] = r"^([A-Z]+)([0-9]+)$"
    RANGE_SEPARATOR: Final[str] = ":"


@dataclass(frozen=True)
class WorkbookConstants:
    """Constants for new workbooks and sheets."""

    SHEET_ID_PREFIX: Final[str] = "sheet"
    DEFAULT_SHEET_PREFIX: Final[str] = "Sheet"
    FIRST_CELL: Final[str] = "A1"


@dataclass(frozen=True)
class KeyConstants:
    """Key names understood by the selection controller."""

    ARROW_UP: Final[str] = "ArrowUp"
    ARROW_DOWN: Final[str] = "ArrowDown"
    ARROW_LEFT: Final[str] = "ArrowLeft"
    ARROW_RIGHT: Final[str] = "ArrowRight"
    ENTER: Final[str] = "Enter"
    TAB: Final[str] = "Tab"
    ESCAPE: Final[str] = "Escape"
    F2: Final[str] = "F2"
    UNDO: Final[str] = "z"
    REDO: Final[str] = "y"


@dataclass(frozen=True)
class StyleConstants:
    """Constants for cell formatting."""

    TOGGLE_FIELDS: Final[tuple[str, ...]] = ("bold", "italic", "underline")


# Create singleton instances for easy access
ADDRESS = AddressConstants()
WORKBOOK = WorkbookConstants()
KEYS = KeyConstants()
STYLE = StyleConstants()
