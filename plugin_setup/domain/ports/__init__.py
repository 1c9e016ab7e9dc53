"""Domain ports for external capabilities."""

from plugin_setup.domain.ports.config_store_port import ConfigStorePort
from plugin_setup.domain.ports.credential_validator_port import (
    CredentialValidatorPort,
    KeyValidationResult,
)
from plugin_setup.domain.ports.event_emitter_port import EventEmitterPort
from plugin_setup.domain.ports.platform_port import (
    HealthCheckResult,
    InstallResult,
    PlatformPort,
    UninstallResult,
)
from plugin_setup.domain.ports.plugin_context_port import PluginContext

__all__ = [
    "ConfigStorePort",
    "CredentialValidatorPort",
    "KeyValidationResult",
    "EventEmitterPort",
    "HealthCheckResult",
    "InstallResult",
    "PlatformPort",
    "UninstallResult",
    "PluginContext",
]
