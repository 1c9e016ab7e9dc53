"""
Setup domain exceptions.

Exception hierarchy for conversational plugin setup: session lookup, field
validation, lifecycle conflicts and failures reported by external
capabilities.

Exception Hierarchy:
    SetupError (base)
    ├── SessionNotFoundError             - No session with that ID
    ├── SessionAlreadyCompletedError     - Session is terminal
    ├── FieldValidationError
    │   ├── UnknownFieldError            - Field not declared in schema
    │   ├── RequiredFieldError           - Required field left empty
    │   ├── PatternMismatchError         - Value fails the field pattern
    │   └── UnsupportedValueTypeError    - Value is not a config primitive
    └── CapabilityError
        ├── DependencyInstallError       - Platform refused the install
        └── ConfigPersistenceError       - Host could not persist config
"""

from typing import Any


class SetupError(Exception):
    """Base exception for all setup errors."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class SessionNotFoundError(SetupError):
    """Raised when a setup session cannot be found."""

    def __init__(self, session_id: str, message: str | None = None) -> None:
        self.session_id = session_id
        msg = message or f"No active setup session: {session_id}"
        super().__init__(msg, details={"session_id": session_id})


class SessionAlreadyCompletedError(SetupError):
    """Raised when an operation targets a session that already completed."""

    def __init__(self, session_id: str, message: str | None = None) -> None:
        self.session_id = session_id
        msg = message or "Setup already completed."
        super().__init__(msg, details={"session_id": session_id})


class FieldValidationError(SetupError):
    """Base exception for rejected config values."""

    def __init__(self, key: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.key = key
        super().__init__(message, details={"key": key, **(details or {})})


class UnknownFieldError(FieldValidationError):
    """Raised when a key is not declared by the session's config schema."""

    def __init__(self, key: str, valid_fields: list[str]) -> None:
        self.valid_fields = valid_fields
        msg = f"Unknown config field: {key}. Valid fields: {', '.join(valid_fields)}"
        super().__init__(key, msg, details={"valid_fields": valid_fields})


class RequiredFieldError(FieldValidationError):
    """Raised when a required field is given an empty value."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f'Field "{key}" is required and cannot be empty.')


class PatternMismatchError(FieldValidationError):
    """Raised when a string value does not match the field pattern."""

    def __init__(self, key: str, pattern: str, message: str | None = None) -> None:
        self.pattern = pattern
        msg = message or f'Value for "{key}" does not match pattern: {pattern}'
        super().__init__(key, msg, details={"pattern": pattern})


class UnsupportedValueTypeError(FieldValidationError):
    """Raised when a value is not a string, number or boolean."""

    def __init__(self, key: str, value_type: str) -> None:
        self.value_type = value_type
        msg = (
            f'Unsupported value type for "{key}": {value_type}. '
            "Expected a string, number or boolean."
        )
        super().__init__(key, msg, details={"value_type": value_type})


class CapabilityError(SetupError):
    """Base exception for failures reported by external capabilities."""


class DependencyInstallError(CapabilityError):
    """Raised when the platform fails to install a dependency."""

    def __init__(
        self,
        plugin_id: str,
        reason: str,
        original_error: Exception | None = None,
    ) -> None:
        self.plugin_id = plugin_id
        self.reason = reason
        super().__init__(
            f"Failed to install {plugin_id}: {reason}",
            original_error=original_error,
            details={"plugin_id": plugin_id},
        )


class ConfigPersistenceError(CapabilityError):
    """Raised when the host configuration could not be written."""

    def __init__(self, key: str, original_error: Exception) -> None:
        self.key = key
        super().__init__(
            f'Failed to save "{key}": {original_error}',
            original_error=original_error,
            details={"key": key},
        )
