"""
Field validation for proposed config values.

Checks a value against the constraints its field declares. Validation is
pure: it never touches the session or the host configuration.
"""

import re
from typing import Any

from plugin_setup.domain.exceptions import (
    FieldValidationError,
    PatternMismatchError,
    RequiredFieldError,
    UnknownFieldError,
    UnsupportedValueTypeError,
)
from plugin_setup.domain.model.config_schema import ConfigField, ConfigSchema

_PRIMITIVE_TYPES = (str, int, float, bool)


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def validate_field_value(schema: ConfigSchema, key: str, value: Any) -> ConfigField:
    """
    Validate a proposed value for ``key`` against the schema.

    Pattern checks only apply to string values; numbers and booleans are
    accepted without consulting the pattern.

    Args:
        schema: Config schema of the session
        key: Field name the value is meant for
        value: Raw value supplied by the caller

    Returns:
        The matching field definition

    Raises:
        UnknownFieldError: If ``key`` is not declared in the schema
        RequiredFieldError: If the field is required and the value is empty
        UnsupportedValueTypeError: If the value is not a config primitive
        PatternMismatchError: If a string value fails the field pattern
    """
    config_field = schema.get_field(key)
    if config_field is None:
        raise UnknownFieldError(key, schema.field_names())

    if config_field.required and _is_empty(value):
        raise RequiredFieldError(key)

    if not isinstance(value, _PRIMITIVE_TYPES):
        raise UnsupportedValueTypeError(key, type(value).__name__)

    if config_field.pattern and isinstance(value, str):
        try:
            matched = re.search(config_field.pattern, value) is not None
        except re.error as e:
            raise FieldValidationError(
                key,
                f'Field "{key}" declares an invalid pattern: {config_field.pattern} ({e})',
                details={"pattern": config_field.pattern},
            ) from e
        if not matched:
            raise PatternMismatchError(key, config_field.pattern, config_field.pattern_error)

    return config_field
