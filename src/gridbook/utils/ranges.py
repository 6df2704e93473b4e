"""Rectangular range construction.

Ranges are enumerated row-major (rows ascending, then columns ascending
within a row). Consumers such as the status-bar statistics see cells in
that order.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import ADDRESS
from ..core.exceptions import InvalidAddressError
from ..models.sheet_data import CellAddress
from .address import cell_id, format_cell_id, parse_cell_id


class RangeBounds(BaseModel):
    """Inclusive, normalized bounds of a rectangular range."""

    model_config = ConfigDict(strict=True, frozen=True)

    start_col: int = Field(..., ge=0, description="Starting column (0-indexed)")
    start_row: int = Field(..., ge=0, description="Starting row (0-indexed)")
    end_col: int = Field(..., ge=0, description="Ending column (inclusive)")
    end_row: int = Field(..., ge=0, description="Ending row (inclusive)")

    @classmethod
    def from_corners(cls, first: CellAddress, second: CellAddress) -> "RangeBounds":
        """Bounds of the rectangle spanned by two opposite corners, in any order."""
        return cls(
            start_col=min(first.column, second.column),
            start_row=min(first.row, second.row),
            end_col=max(first.column, second.column),
            end_row=max(first.row, second.row),
        )

    @property
    def excel_range(self) -> str:
        """A1-style range, e.g. 'A1:C3' (or 'A1' for a single cell)."""
        start = cell_id(self.start_col, self.start_row)
        if self.start_col == self.end_col and self.start_row == self.end_row:
            return start
        return f"{start}{ADDRESS.RANGE_SEPARATOR}{cell_id(self.end_col, self.end_row)}"

    @property
    def row_count(self) -> int:
        """Number of rows in the range."""
        return self.end_row - self.start_row + 1

    @property
    def col_count(self) -> int:
        """Number of columns in the range."""
        return self.end_col - self.start_col + 1

    @property
    def cell_count(self) -> int:
        """Number of cells in the range."""
        return self.row_count * self.col_count

    def contains(self, address: CellAddress) -> bool:
        """Check whether an address lies inside the range."""
        return (
            self.start_col <= address.column <= self.end_col
            and self.start_row <= address.row <= self.end_row
        )

    def cell_ids(self) -> list[str]:
        """Cell identifiers in the range, row-major."""
        return [
            cell_id(col, row)
            for row in range(self.start_row, self.end_row + 1)
            for col in range(self.start_col, self.end_col + 1)
        ]


def _as_address(cell: str | CellAddress) -> CellAddress:
    return cell if isinstance(cell, CellAddress) else parse_cell_id(cell)


def build_range(anchor: str | CellAddress, target: str | CellAddress) -> list[str]:
    """Cell identifiers of the rectangle between two cells, inclusive.

    Args:
        anchor: One corner, as an identifier or CellAddress
        target: The opposite corner

    Returns:
        Identifiers in row-major order
    """
    return RangeBounds.from_corners(_as_address(anchor), _as_address(target)).cell_ids()


def bounding_range(cells: Iterable[str | CellAddress]) -> RangeBounds | None:
    """Smallest rectangle containing every cell, or None for no cells."""
    addresses = [_as_address(cell) for cell in cells]
    if not addresses:
        return None
    return RangeBounds(
        start_col=min(a.column for a in addresses),
        start_row=min(a.row for a in addresses),
        end_col=max(a.column for a in addresses),
        end_row=max(a.row for a in addresses),
    )


def is_rectangular(cells: Iterable[str | CellAddress]) -> bool:
    """Check whether a set of cells exactly fills its bounding rectangle."""
    identifiers = {
        format_cell_id(cell) if isinstance(cell, CellAddress) else cell for cell in cells
    }
    bounds = bounding_range(identifiers)
    return bounds is not None and bounds.cell_count == len(identifiers)


def parse_range(notation: str) -> RangeBounds:
    """Parse a typed range reference such as ``"A1:C3"`` or ``"B7"``.

    Corners may be given in any order.

    Raises:
        InvalidAddressError: If either corner is malformed
    """
    notation = notation.strip()
    if not notation:
        raise InvalidAddressError("Empty range notation")

    parts = notation.split(ADDRESS.RANGE_SEPARATOR)
    if len(parts) > 2:
        raise InvalidAddressError(f"Invalid range notation: {notation}")

    first = parse_cell_id(parts[0].strip())
    second = parse_cell_id(parts[-1].strip())
    return RangeBounds.from_corners(first, second)
