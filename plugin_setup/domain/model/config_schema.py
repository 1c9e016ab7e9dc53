"""
Config schema models.

A plugin declares the configuration it needs as a ConfigSchema: an ordered
list of ConfigField definitions. Schemas come from the host as plain JSON, so
they are pydantic models and accept the host's camelCase keys.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FieldType = Literal["text", "password", "select", "checkbox", "number", "textarea"]

# Primitive values a config field can hold.
ConfigValue = str | int | float | bool


class SelectOption(BaseModel):
    """One choice of a select field."""

    value: str
    label: str


class ConfigField(BaseModel):
    """A single named, typed configuration input."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str
    type: FieldType
    label: str
    description: str | None = None
    placeholder: str | None = None
    required: bool = False
    pattern: str | None = None
    pattern_error: str | None = Field(default=None, alias="patternError")
    options: list[SelectOption] | None = None
    default: ConfigValue | None = None


class ConfigSchema(BaseModel):
    """Ordered set of fields a plugin needs configured."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str | None = None
    fields: list[ConfigField] = Field(default_factory=list)

    def get_field(self, name: str) -> ConfigField | None:
        """Find a field by name."""
        for config_field in self.fields:
            if config_field.name == name:
                return config_field
        return None

    def field_names(self) -> list[str]:
        """Names of all declared fields, in schema order."""
        return [config_field.name for config_field in self.fields]
