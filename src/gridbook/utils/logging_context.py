"""Context-aware logging for workbook mutations.

Mutations run inside a ``LogContext`` naming the sheet, cell and operation
involved; loggers from ``get_contextual_logger`` prefix every message with
whatever context is active, e.g. ``[sheet=sheet1, cell=B2, op=set_cell_value]``.
"""

import contextvars
import logging
from collections.abc import Mapping
from typing import Any

current_sheet = contextvars.ContextVar[str | None]("current_sheet", default=None)
current_cell = contextvars.ContextVar[str | None]("current_cell", default=None)
current_operation = contextvars.ContextVar[str | None]("current_operation", default=None)

# Record attribute and message label for each context variable
_FIELDS = (
    ("sheet", "sheet", current_sheet),
    ("cell", "cell", current_cell),
    ("operation", "op", current_operation),
)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that adds the active sheet, cell and operation."""

    def process(self, msg: str, kwargs: Mapping[str, Any]) -> tuple[str, Mapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        labels = []
        for attr, label, var in _FIELDS:
            value = var.get()
            if value:
                extra[attr] = value
                labels.append(f"{label}={value}")
        kwargs["extra"] = extra

        if labels:
            msg = f"[{', '.join(labels)}] {msg}"
        return msg, kwargs


def get_contextual_logger(name: str) -> ContextualLogger:
    """Get a logger that automatically includes context information.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextualLogger instance
    """
    return ContextualLogger(logging.getLogger(name), {})


class LogContext:
    """Context manager setting the sheet, cell and operation for log records.

    Only the values given are set; the others keep their enclosing value.
    """

    def __init__(
        self,
        operation: str,
        sheet_id: str | None = None,
        cell_id: str | None = None,
    ):
        self.values = {
            current_operation: operation,
            current_sheet: sheet_id,
            current_cell: cell_id,
        }
        self.tokens: list[contextvars.Token] = []

    def __enter__(self):
        for var, value in self.values.items():
            if value is not None:
                self.tokens.append(var.set(value))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        while self.tokens:
            token = self.tokens.pop()
            token.var.reset(token)
