"""Custom exceptions for Gridbook."""


class GridbookError(Exception):
    """Base exception for all Gridbook errors."""

    pass


class InvalidAddressError(GridbookError, ValueError):
    """Raised when a cell identifier or column label is malformed."""

    pass


class InvalidOperationError(GridbookError):
    """Raised when a workbook operation is not allowed.

    Examples are deleting the last remaining sheet, referring to a sheet id
    that is not in the workbook, or renaming a sheet to an empty name.
    """

    pass


class ConfigurationError(GridbookError):
    """Raised when configuration is invalid."""

    pass
