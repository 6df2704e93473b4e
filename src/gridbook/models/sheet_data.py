"""Data models for representing workbook content.

All models are frozen and their containers are read-only: ``sheets`` is a
tuple and ``cells`` a read-only mapping. Operations in ``gridbook.store``
build new instances rather than editing existing ones, so a workbook value
can be kept as an undo snapshot without copying it.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


class HorizontalAlignment(str, Enum):
    """Horizontal text alignment within a cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class CellAddress(BaseModel):
    """Zero-based (column, row) coordinate of a cell."""

    model_config = ConfigDict(strict=True, frozen=True)

    column: int = Field(..., ge=0, description="Column index (0-based)")
    row: int = Field(..., ge=0, description="Row index (0-based)")


class CellStyle(BaseModel):
    """Formatting applied to a cell.

    Every field is optional; ``None`` means the rendering default applies.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    bold: bool | None = Field(None, description="Text is bold")
    italic: bool | None = Field(None, description="Text is italic")
    underline: bool | None = Field(None, description="Text is underlined")
    color: str | None = Field(None, description="Font color")
    background_color: str | None = Field(None, description="Background color")
    text_align: HorizontalAlignment | None = Field(None, description="Horizontal alignment")
    font_size: float | None = Field(None, gt=0, description="Font size")

    def merge(self, other: "CellStyle") -> "CellStyle":
        """Shallow-merge ``other`` on top of this style.

        Fields set on ``other`` win; fields it leaves unset are kept.
        """
        return self.model_copy(update=other.model_dump(exclude_none=True))

    @property
    def is_default(self) -> bool:
        """Check if no style field is set."""
        return not self.model_dump(exclude_none=True)


class CellData(BaseModel):
    """Represents a single cell with its display value, formula and style."""

    model_config = ConfigDict(strict=True, frozen=True)

    value: str = Field("", description="Displayed text")
    formula: str | None = Field(None, description="Raw formula text (never evaluated)")
    style: CellStyle | None = Field(None, description="Cell formatting")

    @property
    def is_empty(self) -> bool:
        """Check if cell is equivalent to an absent entry."""
        return self.value == "" and self.formula is None and (
            self.style is None or self.style.is_default
        )


EMPTY_CELL = CellData()


def read_only_cells(cells: Mapping[str, CellData]) -> Mapping[str, CellData]:
    """Read-only view over a copy of ``cells``, without empty entries."""
    return MappingProxyType(
        {cell_id: cell for cell_id, cell in cells.items() if not cell.is_empty}
    )


class SheetData(BaseModel):
    """Represents one sheet with its sparse cell mapping.

    Only cells that differ from ``EMPTY_CELL`` are stored.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    id: str = Field(..., min_length=1, description="Unique sheet identifier")
    name: str = Field(..., description="Display name (not required to be unique)")
    cells: Mapping[str, CellData] = Field(
        default_factory=dict,
        validate_default=True,
        description="Cells indexed by cell identifier (e.g., 'A1')",
    )

    @field_validator("cells", mode="before")
    @classmethod
    def _unwrap_cells(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, dict):
            return dict(value)
        return value

    @field_validator("cells")
    @classmethod
    def _freeze_cells(cls, value: Mapping[str, CellData]) -> Mapping[str, CellData]:
        return read_only_cells(value)

    @field_serializer("cells", mode="wrap")
    def _dump_cells(self, value: Mapping[str, CellData], handler):
        return handler(dict(value))

    @property
    def cell_count(self) -> int:
        """Number of stored cells."""
        return len(self.cells)


class WorkbookData(BaseModel):
    """Represents the ordered sheets of a workbook and the active sheet."""

    model_config = ConfigDict(strict=True, frozen=True)

    sheets: tuple[SheetData, ...] = Field(..., min_length=1, description="Sheets in tab order")
    active_sheet_id: str = Field(..., description="Identifier of the active sheet")

    @field_validator("sheets", mode="before")
    @classmethod
    def _sheets_as_tuple(cls, value: Any) -> Any:
        return tuple(value) if isinstance(value, list) else value

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "WorkbookData":
        ids = [sheet.id for sheet in self.sheets]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate sheet ids: {ids}")
        return self

    @property
    def active_sheet(self) -> SheetData:
        """The active sheet, falling back to the first sheet if the id is stale."""
        for sheet in self.sheets:
            if sheet.id == self.active_sheet_id:
                return sheet
        return self.sheets[0]

    def get_sheet_by_id(self, sheet_id: str) -> SheetData | None:
        """Get sheet by id."""
        for sheet in self.sheets:
            if sheet.id == sheet_id:
                return sheet
        return None

    def get_sheet_names(self) -> list[str]:
        """Get list of all sheet names."""
        return [sheet.name for sheet in self.sheets]

    @property
    def sheet_count(self) -> int:
        """Number of sheets in the workbook."""
        return len(self.sheets)
