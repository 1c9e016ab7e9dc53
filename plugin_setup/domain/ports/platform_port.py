"""
Platform Port - interface to the local plugin platform API.

Installs, uninstalls and health-checks plugins. Implementations report HTTP
outcomes through the result objects and let transport failures raise.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class InstallResult:
    """Result of a plugin installation."""

    success: bool
    status_code: int | None = None
    error: str | None = None


@dataclass
class UninstallResult:
    """Result of a plugin removal."""

    success: bool
    status_code: int | None = None


@dataclass
class HealthCheckResult:
    """Result of a service health check."""

    healthy: bool
    status_code: int | None = None
    body: str = ""


class PlatformPort(ABC):
    """Port for plugin lifecycle calls against the platform."""

    @abstractmethod
    async def install(self, plugin_id: str) -> InstallResult:
        """
        Install a plugin package.

        Args:
            plugin_id: Package name of the plugin

        Returns:
            InstallResult; ``error`` carries the platform's reason on failure
        """

    @abstractmethod
    async def uninstall(self, plugin_id: str) -> UninstallResult:
        """Remove a previously installed plugin package."""

    @abstractmethod
    async def health_check(self, service: str) -> HealthCheckResult:
        """
        Probe the health endpoint of a service.

        Args:
            service: Service identifier (e.g. discord, slack)

        Returns:
            HealthCheckResult with the HTTP status and response body
        """
