"""Pytest configuration and shared fixtures."""

import pytest

from gridbook.config import Config
from gridbook.gridbook import Gridbook
from gridbook.models.sheet_data import CellData, CellStyle, SheetData, WorkbookData


@pytest.fixture
def config() -> Config:
    """Default configuration, independent of the environment."""
    return Config()


@pytest.fixture
def book(config: Config) -> Gridbook:
    """Fresh session with one empty sheet."""
    return Gridbook(config)


@pytest.fixture
def sample_sheet() -> SheetData:
    """Sheet with a small header row and numbers below."""
    return SheetData(
        id="sheet1",
        name="Sheet1",
        cells={
            "A1": CellData(value="Item", style=CellStyle(bold=True)),
            "B1": CellData(value="Qty", style=CellStyle(bold=True)),
            "A2": CellData(value="Apples"),
            "B2": CellData(value="3"),
            "A3": CellData(value="Pears"),
            "B3": CellData(value="4.5", formula="=1.5*3"),
        },
    )


@pytest.fixture
def three_sheet_workbook() -> WorkbookData:
    """Workbook with three empty sheets, the second one active."""
    sheets = [SheetData(id=f"sheet{n}", name=f"Sheet{n}") for n in (1, 2, 3)]
    return WorkbookData(sheets=sheets, active_sheet_id="sheet2")
