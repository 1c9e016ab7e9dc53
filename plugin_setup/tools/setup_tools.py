"""Setup tools exposed to the host's A2A server.

Each tool wraps one SetupService operation and always returns a tagged
result; domain errors and capability failures become ``isError`` results.
"""

import logging
from typing import Any

from pydantic import ValidationError

from plugin_setup.application.services import SetupService
from plugin_setup.domain.exceptions import SetupError
from plugin_setup.domain.model import ConfigField
from plugin_setup.tools.prompts import format_field_prompt
from plugin_setup.tools.registry import ToolDefinition, text_result

logger = logging.getLogger(__name__)

FIELD_TYPES = ["text", "password", "select", "checkbox", "number", "textarea"]


class SetupTools:
    """Tool handlers bound to one SetupService."""

    def __init__(self, service: SetupService) -> None:
        self.service = service

    async def execute_ask(self, session_id: str, field: dict[str, Any], **kwargs) -> dict[str, Any]:
        """Prompt the user for a config value."""
        try:
            self.service.require_session(session_id)
            config_field = ConfigField.model_validate(field)
        except SetupError as e:
            return text_result(str(e), is_error=True)
        except ValidationError as e:
            return text_result(f"Invalid field definition: {e}", is_error=True)

        return text_result(format_field_prompt(config_field))

    async def execute_validate_key(self, provider: str, key: str, **kwargs) -> dict[str, Any]:
        """Validate an API key against its provider."""
        try:
            result = await self.service.validate_key(provider, key)
        except Exception as e:
            logger.error(f"Error validating key for '{provider}': {e}", exc_info=True)
            return text_result(f"Key validation failed: {e}", is_error=True)

        if result.valid:
            return text_result(f"Key validated successfully for provider: {provider}")
        return text_result(f"Key validation failed: {result.error}", is_error=True)

    async def execute_install_dependency(
        self, session_id: str, plugin_id: str, **kwargs
    ) -> dict[str, Any]:
        """Install a plugin dependency and record it for rollback."""
        try:
            await self.service.install_dependency(session_id, plugin_id)
        except SetupError as e:
            return text_result(str(e), is_error=True)
        return text_result(f"Successfully installed {plugin_id}")

    async def execute_test_connection(self, service: str, **kwargs) -> dict[str, Any]:
        """Test a live connection to a service."""
        try:
            result = await self.service.test_connection(service)
        except Exception as e:
            logger.warning(f"Connection test for '{service}' could not reach the platform: {e}")
            return text_result(
                f"Connection test failed for {service}: could not reach platform ({e})",
                is_error=True,
            )

        if result.healthy:
            return text_result(f"Connection to {service} is healthy.")
        return text_result(
            f"Connection test failed for {service}: HTTP {result.status_code} - {result.body}",
            is_error=True,
        )

    async def execute_save_config(
        self, session_id: str, key: str, value: Any = None, **kwargs
    ) -> dict[str, Any]:
        """Validate and persist a config value."""
        try:
            await self.service.save_config(session_id, key, value)
        except SetupError as e:
            return text_result(str(e), is_error=True)
        return text_result(f'Saved "{key}" successfully.')

    async def execute_complete(self, session_id: str, **kwargs) -> dict[str, Any]:
        """Finish a setup session."""
        try:
            session = self.service.complete(session_id)
        except SetupError as e:
            return text_result(str(e), is_error=True)
        return text_result(f"Setup complete for {session.plugin_id}. Plugin is now active.")

    async def execute_rollback(self, session_id: str, **kwargs) -> dict[str, Any]:
        """Undo everything a session changed and discard it."""
        try:
            report = await self.service.rollback(session_id)
        except SetupError as e:
            return text_result(str(e), is_error=True)

        if report.errors:
            return text_result(
                "Rollback completed with errors:\n" + "\n".join(report.errors),
                is_error=True,
            )
        return text_result("Rollback complete. All changes undone.")


def _session_id_property() -> dict[str, Any]:
    return {"type": "string", "description": "Active setup session ID (sessionId is also accepted)"}


def create_setup_tools(service: SetupService) -> list[ToolDefinition]:
    """
    Create the seven setup tools bound to ``service``.

    Args:
        service: Setup service the tools operate on

    Returns:
        Tool definitions, in registration order
    """
    tools = SetupTools(service)
    providers = ", ".join(service.supported_providers())

    return [
        ToolDefinition(
            name="setup.ask",
            description=(
                "Prompt the user for a config value. Type-aware: password fields "
                "are masked, select fields show options."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "session_id": _session_id_property(),
                    "field": {
                        "type": "object",
                        "description": "ConfigField definition",
                        "properties": {
                            "name": {"type": "string"},
                            "type": {"type": "string", "enum": FIELD_TYPES},
                            "label": {"type": "string"},
                            "description": {"type": "string"},
                            "placeholder": {"type": "string"},
                            "required": {"type": "boolean"},
                            "options": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "value": {"type": "string"},
                                        "label": {"type": "string"},
                                    },
                                },
                            },
                        },
                        "required": ["name", "type", "label"],
                    },
                },
                "required": ["session_id", "field"],
            },
            handler=tools.execute_ask,
        ),
        ToolDefinition(
            name="setup.validateKey",
            description="Validate an API key against a real provider endpoint.",
            input_schema={
                "type": "object",
                "properties": {
                    "provider": {
                        "type": "string",
                        "description": f"Provider name: {providers}",
                    },
                    "key": {"type": "string", "description": "The API key to validate"},
                },
                "required": ["provider", "key"],
            },
            handler=tools.execute_validate_key,
        ),
        ToolDefinition(
            name="setup.installDependency",
            description="Install a required plugin dependency via the platform API.",
            input_schema={
                "type": "object",
                "properties": {
                    "session_id": _session_id_property(),
                    "plugin_id": {
                        "type": "string",
                        "description": "Plugin package name to install (pluginId is also accepted)",
                    },
                },
                "required": ["session_id", "plugin_id"],
            },
            handler=tools.execute_install_dependency,
        ),
        ToolDefinition(
            name="setup.testConnection",
            description="Test a live connection to an external service.",
            input_schema={
                "type": "object",
                "properties": {
                    "service": {
                        "type": "string",
                        "description": "Service identifier (e.g. discord, slack, telegram)",
                    },
                },
                "required": ["service"],
            },
            handler=tools.execute_test_connection,
        ),
        ToolDefinition(
            name="setup.saveConfig",
            description="Persist a config value for the plugin being set up.",
            input_schema={
                "type": "object",
                "properties": {
                    "session_id": _session_id_property(),
                    "key": {"type": "string", "description": "Config key to save"},
                    "value": {
                        "type": ["string", "number", "boolean"],
                        "description": "Config value to save",
                    },
                },
                "required": ["session_id", "key", "value"],
            },
            handler=tools.execute_save_config,
        ),
        ToolDefinition(
            name="setup.complete",
            description="Mark setup as done and emit the setup:complete event.",
            input_schema={
                "type": "object",
                "properties": {"session_id": _session_id_property()},
                "required": ["session_id"],
            },
            handler=tools.execute_complete,
        ),
        ToolDefinition(
            name="setup.rollback",
            description=(
                "Undo all saveConfig and installDependency calls from this session, "
                "newest first, and discard the session."
            ),
            input_schema={
                "type": "object",
                "properties": {"session_id": _session_id_property()},
                "required": ["session_id"],
            },
            handler=tools.execute_rollback,
        ),
    ]
