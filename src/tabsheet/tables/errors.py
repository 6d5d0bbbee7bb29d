"""Exception types raised by the table pipeline."""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-checkable category of a ConfigurationError."""

    INVALID_COLUMN_ORDER = "invalid_column_order"
    INVALID_COLUMN_MODIFIER = "invalid_column_modifier"
    UNKNOWN_PRESET = "unknown_preset"
    UNKNOWN_MODIFIER = "unknown_modifier"
    INVALID_PRESET_FILE = "invalid_preset_file"


class TabsheetError(Exception):
    """Base class for all tabsheet errors."""


class ConfigurationError(TabsheetError):
    """A preset or option set is malformed.  Fatal to the call that hit it."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
