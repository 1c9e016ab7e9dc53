"""
Config store backed by the host plugin context.

The host exposes ``get_config()`` and ``save_config(config)``; either may be
synchronous or a coroutine function.
"""

import inspect
from typing import Any

from plugin_setup.domain.ports import ConfigStorePort
from plugin_setup.domain.ports.plugin_context_port import PluginContext


class HostConfigStore(ConfigStorePort):
    """ConfigStorePort adapter over a PluginContext."""

    def __init__(self, context: PluginContext) -> None:
        self._context = context

    async def get_config(self) -> dict[str, Any]:
        config = self._context.get_config()
        if inspect.isawaitable(config):
            config = await config
        return dict(config or {})

    async def save_config(self, config: dict[str, Any]) -> None:
        result = self._context.save_config(config)
        if inspect.isawaitable(result):
            await result
