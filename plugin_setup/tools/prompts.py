"""Prompt text for asking the user for a config value."""

from plugin_setup.domain.model import ConfigField


def format_field_prompt(config_field: ConfigField) -> str:
    """
    Build a type-aware prompt for ``config_field``.

    Password fields carry a secure-storage note and never echo a value.
    Select fields list their options, placeholders become an example, and
    required fields are flagged.
    """
    prompt = f"Please provide: **{config_field.label}**"
    if config_field.description:
        prompt += f"\n{config_field.description}"
    if config_field.type == "password":
        prompt += "\n(This value will be stored securely and never displayed.)"
    if config_field.type == "select" and config_field.options:
        prompt += "\n\nOptions:"
        for option in config_field.options:
            prompt += f"\n- `{option.value}` - {option.label}"
    if config_field.placeholder:
        prompt += f"\n\nExample: `{config_field.placeholder}`"
    if config_field.required:
        prompt += "\n\n*This field is required.*"
    return prompt
