"""Conversational plugin setup with session-scoped rollback."""

from plugin_setup.application.services import RollbackEngine, RollbackReport, SessionStore, SetupService
from plugin_setup.plugin import A2AServerConfig, SetupExtension, SetupPlugin, create_setup_service

__all__ = [
    "A2AServerConfig",
    "RollbackEngine",
    "RollbackReport",
    "SessionStore",
    "SetupExtension",
    "SetupPlugin",
    "SetupService",
    "create_setup_service",
]
