"""Domain errors and failure typing."""

from __future__ import annotations


class PriorityOrderError(Exception):
    """Base class for ordering and configuration failures."""

    error_code = "PRIORITY_ORDER_ERROR"


class NullArgumentError(PriorityOrderError, TypeError):
    """Raised when a required argument is missing."""

    error_code = "NULL_ARGUMENT"

    def __init__(self, param_name: str) -> None:
        super().__init__(f"{param_name} must not be None")
        self.param_name = param_name


class DuplicatePriorityError(PriorityOrderError, ValueError):
    """Raised when a priority list repeats a key."""

    error_code = "DUPLICATE_PRIORITY"

    def __init__(self, param_name: str, duplicates: list) -> None:
        shown = ", ".join(repr(value) for value in duplicates)
        super().__init__(f"{param_name} contain duplicate values: {shown}")
        self.param_name = param_name
        self.duplicates = duplicates


class ConfigError(PriorityOrderError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class InputError(PriorityOrderError):
    """Raised when input data cannot be read or would not round-trip."""

    error_code = "INPUT_ERROR"
