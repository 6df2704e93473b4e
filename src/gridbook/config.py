"""Configuration model for Gridbook."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .core.constants import WORKBOOK
from .core.exceptions import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseModel):
    """Configuration for Gridbook."""

    # Grid extent (None means the grid grows without bound)
    max_rows: int | None = Field(
        None, ge=1, description="Number of rows keyboard navigation may reach"
    )
    max_columns: int | None = Field(
        None, ge=1, description="Number of columns keyboard navigation may reach"
    )

    # Editing
    forward_typed_character: bool = Field(
        False,
        description=(
            "Seed the edit buffer with the printable key that started editing. "
            "When False the editor opens with the cell's existing value."
        ),
    )

    # History
    history_max_depth: int | None = Field(
        None, ge=1, description="Maximum number of undo steps kept (None for unlimited)"
    )
    history_deep_copy: bool = Field(
        False, description="Deep-copy workbook snapshots instead of sharing structure"
    )

    # Sheets
    default_sheet_prefix: str = Field(
        WORKBOOK.DEFAULT_SHEET_PREFIX, min_length=1, description="Display name prefix for new sheets"
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_file: Path | None = Field(None, description="Log file path")
    enable_debug: bool = Field(False, description="Enable debug mode")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables.

        This method will automatically load from a .env file if present, then read
        configuration from environment variables.
        """
        import os

        from dotenv import find_dotenv, load_dotenv

        # Load .env from the working directory if it exists (will not override existing env vars)
        load_dotenv(find_dotenv(usecwd=True))

        def _optional_int(name: str) -> int | None:
            raw = os.getenv(name, "").strip()
            return int(raw) if raw else None

        return cls(
            # Grid extent
            max_rows=_optional_int("GRIDBOOK_MAX_ROWS"),
            max_columns=_optional_int("GRIDBOOK_MAX_COLUMNS"),
            # Editing
            forward_typed_character=os.getenv("GRIDBOOK_FORWARD_TYPED_CHARACTER", "false").lower()
            == "true",
            # History
            history_max_depth=_optional_int("GRIDBOOK_HISTORY_MAX_DEPTH"),
            history_deep_copy=os.getenv("GRIDBOOK_HISTORY_DEEP_COPY", "false").lower() == "true",
            # Sheets
            default_sheet_prefix=os.getenv(
                "GRIDBOOK_DEFAULT_SHEET_PREFIX", WORKBOOK.DEFAULT_SHEET_PREFIX
            ),
            # Logging
            log_level=os.getenv("GRIDBOOK_LOG_LEVEL", "INFO"),
            log_file=os.getenv("GRIDBOOK_LOG_FILE") or None,
            enable_debug=os.getenv("GRIDBOOK_DEBUG", "false").lower() == "true",
        )


# Type alias for backwards compatibility
GridbookConfig = Config
