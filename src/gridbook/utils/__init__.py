"""Utility functions for Gridbook."""

from .address import (
    cell_id,
    column_index,
    column_label,
    format_cell_id,
    is_valid_cell_id,
    parse_cell_id,
)
from .ranges import RangeBounds, bounding_range, build_range, is_rectangular, parse_range
from .statistics import format_stats, parse_number, selection_stats

__all__ = [
    "cell_id",
    "column_index",
    "column_label",
    "format_cell_id",
    "is_valid_cell_id",
    "parse_cell_id",
    "RangeBounds",
    "bounding_range",
    "build_range",
    "is_rectangular",
    "parse_range",
    "format_stats",
    "parse_number",
    "selection_stats",
]
