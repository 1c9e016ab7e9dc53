"""Tests for field prompt formatting."""

import pytest

from plugin_setup.domain.model import ConfigField
from plugin_setup.tools.prompts import format_field_prompt


@pytest.mark.unit
class TestFormatFieldPrompt:
    def test_text_field(self):
        prompt = format_field_prompt(ConfigField(name="n", type="text", label="Name"))
        assert prompt == "Please provide: **Name**"

    def test_password_field_notes_secure_storage(self):
        field = ConfigField(name="t", type="password", label="Token", default="sk-secret")
        prompt = format_field_prompt(field)
        assert "stored securely and never displayed" in prompt
        assert "sk-secret" not in prompt

    def test_select_field_lists_options(self):
        field = ConfigField.model_validate(
            {
                "name": "model",
                "type": "select",
                "label": "Model",
                "options": [{"value": "gpt-4", "label": "GPT-4"}],
            }
        )
        assert "Options:\n- `gpt-4` - GPT-4" in format_field_prompt(field)

    def test_placeholder_and_required(self):
        field = ConfigField(
            name="id", type="text", label="ID", placeholder="12345", required=True,
            description="Your guild ID",
        )
        prompt = format_field_prompt(field)
        assert prompt.splitlines()[1] == "Your guild ID"
        assert "Example: `12345`" in prompt
        assert prompt.endswith("*This field is required.*")
