"""
Config Store Port - host-provided plugin configuration persistence.

Read-modify-write only; there is no optimistic concurrency check, so the last
writer wins.
"""

from abc import ABC, abstractmethod
from typing import Any


class ConfigStorePort(ABC):
    """Port for reading and writing the current configuration."""

    @abstractmethod
    async def get_config(self) -> dict[str, Any]:
        """Return a copy of the current configuration (empty if unset)."""

    @abstractmethod
    async def save_config(self, config: dict[str, Any]) -> None:
        """Persist the full configuration mapping. May raise."""
