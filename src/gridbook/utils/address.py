"""Conversion between A1-style cell identifiers and zero-based coordinates.

Column labels use bijective base-26 numbering: there is no zero digit, so
A=0, Z=25, AA=26, AZ=51, BA=52 and so on. Row numbers are 1-based in text and
0-based internally.
"""

import re

from ..core.constants import ADDRESS
from ..core.exceptions import InvalidAddressError
from ..models.sheet_data import CellAddress

_CELL_ID_RE = re.compile(ADDRESS.CELL_ID_PATTERN)
_BASE = ord(ADDRESS.BASE_LETTER)


def column_label(index: int) -> str:
    """Convert a zero-based column index to its letter label.

    Args:
        index: Column index (0 = A, 25 = Z, 26 = AA, ...)

    Returns:
        Column label in A1 notation

    Raises:
        InvalidAddressError: If index is negative
    """
    if index < 0:
        raise InvalidAddressError(f"Column index must be non-negative, got {index}")

    result = ""
    while index >= 0:
        result = chr(_BASE + index % ADDRESS.ALPHABET_SIZE) + result
        index = index // ADDRESS.ALPHABET_SIZE - 1
    return result


def column_index(label: str) -> int:
    """Convert a column label to its zero-based index.

    Only uppercase ASCII letters are accepted.

    Raises:
        InvalidAddressError: If label is empty or has non-letter characters
    """
    if not label:
        raise InvalidAddressError("Column label must not be empty")

    result = 0
    for char in label:
        if not ("A" <= char <= "Z"):
            raise InvalidAddressError(f"Invalid column label: {label!r}")
        result = result * ADDRESS.ALPHABET_SIZE + (ord(char) - _BASE + 1)
    return result - 1


def parse_cell_id(cell_id: str) -> CellAddress:
    """Parse a cell identifier such as ``"AA12"`` into a CellAddress.

    Malformed identifiers always raise; there is no silent fallback to the
    origin cell.

    Raises:
        InvalidAddressError: If cell_id does not match ``<letters><digits>``
            or names row 0
    """
    match = _CELL_ID_RE.fullmatch(cell_id) if isinstance(cell_id, str) else None
    if not match:
        raise InvalidAddressError(f"Invalid cell identifier: {cell_id!r}")

    letters, digits = match.groups()
    row_number = int(digits)
    if row_number < 1:
        raise InvalidAddressError(f"Row numbers start at 1: {cell_id!r}")

    return CellAddress(column=column_index(letters), row=row_number - 1)


def format_cell_id(address: CellAddress) -> str:
    """Format a CellAddress as its A1 identifier."""
    return cell_id(address.column, address.row)


def cell_id(column: int, row: int) -> str:
    """Build a cell identifier from zero-based column and row indices."""
    if row < 0:
        raise InvalidAddressError(f"Row index must be non-negative, got {row}")
    return f"{column_label(column)}{row + 1}"


def is_valid_cell_id(text: str) -> bool:
    """Check whether text is a well-formed cell identifier."""
    try:
        parse_cell_id(text)
    except InvalidAddressError:
        return False
    return True
