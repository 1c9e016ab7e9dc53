"""
Plugin Context - what the host hands the setup plugin on init.

Only config access and event emission are required. Hosts may also offer
``register_a2a_server(config)``, ``register_extension(name, extension)`` and
``unregister_extension(name)``; the plugin probes for them at runtime.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PluginContext(Protocol):
    """Host services available to the plugin."""

    def get_config(self) -> Any:
        """Current plugin configuration mapping (or an awaitable of it)."""
        ...

    def save_config(self, config: dict[str, Any]) -> Any:
        """Persist the configuration mapping (may return an awaitable)."""
        ...

    def emit_event(self, name: str, payload: dict[str, Any]) -> Any: ...
