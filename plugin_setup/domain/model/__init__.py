"""Setup domain models."""

from plugin_setup.domain.model.config_schema import (
    ConfigField,
    ConfigSchema,
    ConfigValue,
    FieldType,
    SelectOption,
)
from plugin_setup.domain.model.setup_session import (
    InstallDependencyMutation,
    SaveConfigMutation,
    SetupMutation,
    SetupSession,
)

__all__ = [
    "ConfigField",
    "ConfigSchema",
    "ConfigValue",
    "FieldType",
    "SelectOption",
    "InstallDependencyMutation",
    "SaveConfigMutation",
    "SetupMutation",
    "SetupSession",
]
