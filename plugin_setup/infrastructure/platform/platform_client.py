"""
HTTP client for the local plugin platform API.

Endpoints (relative to the platform base URL):
    POST /plugins/install        {"name": "<plugin id>"}
    POST /plugins/uninstall      {"name": "<plugin id>"}
    GET  /plugins/<service>/health
"""

import logging
from typing import Any

import httpx

from plugin_setup.domain.ports import (
    HealthCheckResult,
    InstallResult,
    PlatformPort,
    UninstallResult,
)

logger = logging.getLogger(__name__)

DEFAULT_PLATFORM_URL = "http://localhost:7437"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class PlatformClient(PlatformPort):
    """
    PlatformPort implementation over httpx.

    A short-lived AsyncClient is opened per call. HTTP failures are reported
    in the result objects; transport failures (``httpx.RequestError``)
    propagate to the caller. No retries are attempted.
    """

    def __init__(self, base_url: str = DEFAULT_PLATFORM_URL, timeout: float | None = None):
        """
        Initialize the platform client.

        Args:
            base_url: Platform API base URL
            timeout: Request timeout in seconds; None waits indefinitely
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def install(self, plugin_id: str) -> InstallResult:
        url = f"{self.base_url}/plugins/install"
        logger.debug(f"Installing plugin via {url}: {plugin_id}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(url, json={"name": plugin_id})

        body = self._json_body(response)
        if _is_success(response.status_code) and body.get("success"):
            return InstallResult(success=True, status_code=response.status_code)

        return InstallResult(
            success=False,
            status_code=response.status_code,
            error=body.get("error") or f"HTTP {response.status_code}",
        )

    async def uninstall(self, plugin_id: str) -> UninstallResult:
        url = f"{self.base_url}/plugins/uninstall"
        logger.debug(f"Uninstalling plugin via {url}: {plugin_id}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(url, json={"name": plugin_id})

        return UninstallResult(
            success=_is_success(response.status_code),
            status_code=response.status_code,
        )

    async def health_check(self, service: str) -> HealthCheckResult:
        url = f"{self.base_url}/plugins/{service}/health"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url)

        if _is_success(response.status_code):
            return HealthCheckResult(healthy=True, status_code=response.status_code)
        return HealthCheckResult(
            healthy=False,
            status_code=response.status_code,
            body=response.text,
        )

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
