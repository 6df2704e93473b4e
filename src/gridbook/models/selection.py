"""Selection, keyboard and notification models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.constants import WORKBOOK


class Selection(BaseModel):
    """The active cell, the selected range and the anchor for extension.

    ``range`` keeps insertion order. Rectangles are enumerated row-major;
    ctrl-click appends to the end.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    active_cell: str = Field(WORKBOOK.FIRST_CELL, description="Cell that receives edits")
    range: tuple[str, ...] = Field(
        default=(WORKBOOK.FIRST_CELL,), description="Selected cell identifiers"
    )
    anchor: str = Field(WORKBOOK.FIRST_CELL, description="Cell where the last plain click landed")

    @field_validator("range", mode="before")
    @classmethod
    def _range_as_tuple(cls, value: Any) -> Any:
        return tuple(value) if isinstance(value, list) else value

    @model_validator(mode="after")
    def _check_active_in_range(self) -> "Selection":
        if self.range and self.active_cell not in self.range:
            raise ValueError(f"Active cell {self.active_cell} is not in the selected range")
        if len(set(self.range)) != len(self.range):
            raise ValueError("Selected range contains duplicate cells")
        return self

    @property
    def is_single_cell(self) -> bool:
        """Whether exactly one cell is selected."""
        return len(self.range) == 1


class SelectionStats(BaseModel):
    """Aggregates over the numeric values of a selection."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(0, ge=0, description="Number of numeric values")
    sum: float = Field(0.0, description="Sum of numeric values")
    average: float | None = Field(None, description="Mean of numeric values (None if count is 0)")


class KeyActionKind(str, Enum):
    """What a key press resolved to."""

    NAVIGATE = "navigate"
    START_EDIT = "start_edit"
    COMMIT_EDIT = "commit_edit"
    CANCEL_EDIT = "cancel_edit"
    UNDO = "undo"
    REDO = "redo"
    IGNORED = "ignored"


class KeyAction(BaseModel):
    """Result of interpreting a key press."""

    model_config = ConfigDict(frozen=True)

    kind: KeyActionKind = Field(..., description="Resolved action")
    prevent_default: bool = Field(
        False, description="Host should suppress its default handling (e.g. Tab focus traversal)"
    )
    cell_id: str | None = Field(None, description="Cell the action applies to")
    seed_text: str | None = Field(None, description="Initial edit buffer, if forwarded")


class StateChangeKind(str, Enum):
    """Kinds of state change reported to subscribers."""

    WORKBOOK = "workbook"
    SELECTION = "selection"
    EDIT = "edit"
    HISTORY = "history"


class StateChange(BaseModel):
    """Notification sent to subscribers after a state change."""

    model_config = ConfigDict(frozen=True)

    kind: StateChangeKind
    detail: str = ""
