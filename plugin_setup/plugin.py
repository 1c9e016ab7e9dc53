"""
Setup plugin entry point.

Wires the setup service to a host context: registers the setup tools as an
A2A server and exposes the ``setup`` extension other plugins use to start a
setup conversation.

Example:
    plugin = SetupPlugin()
    await plugin.init(context)
    await plugin.extension.begin_setup("my-plugin", schema, "sess-1")
    ...
    await plugin.shutdown()
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from plugin_setup.application.services import SessionStore, SetupService
from plugin_setup.configuration import Settings, get_settings
from plugin_setup.domain.model import ConfigSchema, SetupSession
from plugin_setup.domain.ports import PluginContext
from plugin_setup.infrastructure.config_store import HostConfigStore
from plugin_setup.infrastructure.credentials import ProviderCredentialValidator
from plugin_setup.infrastructure.events import SetupEventBus
from plugin_setup.infrastructure.platform import PlatformClient
from plugin_setup.tools import ToolDefinition, ToolRegistry, create_setup_tools

logger = logging.getLogger(__name__)

PLUGIN_NAME = "plugin-setup"
PLUGIN_VERSION = "0.1.0"
EXTENSION_NAME = "setup"


@dataclass
class A2AServerConfig:
    """Tool server registration handed to the host."""

    name: str
    version: str
    tools: list[ToolDefinition] = field(default_factory=list)


class SetupExtension:
    """Extension surface registered with the host under ``setup``."""

    def __init__(self, service: SetupService) -> None:
        self._service = service

    async def begin_setup(
        self,
        plugin_id: str,
        config_schema: ConfigSchema | dict[str, Any],
        session_id: str,
    ) -> SetupSession:
        return self._service.begin_setup(plugin_id, config_schema, session_id)

    def get_session(self, session_id: str) -> SetupSession | None:
        return self._service.get_session(session_id)

    def is_setup_active(self, session_id: str) -> bool:
        return self._service.is_setup_active(session_id)

    def list_sessions(self) -> list[dict[str, Any]]:
        """Summaries of every session the plugin currently holds."""
        return [session.to_dict() for session in self._service.list_sessions()]


def create_setup_service(context: PluginContext, settings: Settings) -> SetupService:
    """Build a SetupService whose capabilities talk to the host and platform."""
    events = SetupEventBus()
    events.subscribe(context.emit_event)

    return SetupService(
        store=SessionStore(),
        config_store=HostConfigStore(context),
        platform=PlatformClient(base_url=settings.platform_url, timeout=settings.http_timeout),
        credentials=ProviderCredentialValidator(timeout=settings.http_timeout),
        events=events,
        complete_event=settings.complete_event,
    )


class SetupPlugin:
    """Conversational setup plugin: configures plugins via chat."""

    name = PLUGIN_NAME
    version = PLUGIN_VERSION
    description = "Conversational setup plugin - configures plugins via chat"

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._context: PluginContext | None = None
        self.service: SetupService | None = None
        self.registry: ToolRegistry | None = None
        self.a2a_config: A2AServerConfig | None = None
        self.extension: SetupExtension | None = None

    async def init(self, context: PluginContext) -> None:
        """Build the service graph and register with the host."""
        settings = self._settings or get_settings()
        self._context = context
        self.service = create_setup_service(context, settings)

        tools = create_setup_tools(self.service)
        self.registry = ToolRegistry()
        self.registry.register_all(tools)
        self.a2a_config = A2AServerConfig(
            name=EXTENSION_NAME, version=self.version, tools=self.registry.export_tools()
        )

        register_a2a_server = getattr(context, "register_a2a_server", None)
        if register_a2a_server is not None:
            register_a2a_server(self.a2a_config)
            logger.info(f"Registered setup A2A server with {len(tools)} tools")

        self.extension = SetupExtension(self.service)
        register_extension = getattr(context, "register_extension", None)
        if register_extension is not None:
            register_extension(EXTENSION_NAME, self.extension)
            logger.info("Registered setup extension")

    async def shutdown(self) -> None:
        """Unregister from the host and drop all sessions."""
        unregister_extension = getattr(self._context, "unregister_extension", None)
        if unregister_extension is not None:
            unregister_extension(EXTENSION_NAME)

        if self.service is not None:
            self.service.shutdown()
        logger.info("Setup plugin shut down")
