"""
Exceptions raised while building a picker configuration or loading settings.

State transitions never raise these; they only surface from ``PickerConfig``
validation and from ``load_settings``.
"""

from typing import Any, Optional


class PickerError(Exception):
    """Base exception for calendarpicker errors.

    Args:
        message: Human-readable error description
        details: Context rendered after the message by ``str()``
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class PickerConfigError(PickerError):
    """A picker option is out of range or does not fit the selection mode.

    Example:
        >>> raise PickerConfigError(
        ...     "week_start_index must be between 0 (Sunday) and 6 (Saturday)",
        ...     field_name="week_start_index",
        ...     field_value=9,
        ... )
    """

    def __init__(self, message: str, field_name: str, field_value: Any = None) -> None:
        self.field_name = field_name
        self.field_value = field_value
        super().__init__(message, {"field_name": field_name, "field_value": repr(field_value)})


class PickerSettingsError(PickerError):
    """Ambient settings could not be read, parsed or validated.

    Args:
        message: Human-readable error description
        operation: Failed step, one of "read", "parse" or "validate"
        file_path: Settings file involved, if any
        original_error: Underlying exception
    """

    def __init__(
        self,
        message: str,
        operation: str,
        file_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.operation = operation
        self.file_path = file_path
        self.original_error = original_error

        details: dict[str, Any] = {"operation": operation}
        if file_path:
            details["file_path"] = file_path
        if original_error is not None:
            details["error_type"] = type(original_error).__name__
            details["original_error"] = str(original_error)

        super().__init__(message, details)
