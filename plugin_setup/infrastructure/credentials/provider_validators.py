"""
Credential checks against real provider APIs.

Each supported provider maps to a cheap authenticated endpoint. A 2xx
response means the key is valid; any other status means the provider
rejected it. Transport failures are reported as network errors.
"""

import logging
from collections.abc import Callable
from typing import NamedTuple

import httpx

from plugin_setup.domain.ports import CredentialValidatorPort, KeyValidationResult

logger = logging.getLogger(__name__)


class _KeyCheckEndpoint(NamedTuple):
    """Endpoint used to check a provider key."""

    display_name: str
    url: str
    headers: dict[str, str] | None


def _endpoint_anthropic(key: str) -> _KeyCheckEndpoint:
    return _KeyCheckEndpoint(
        display_name="Anthropic",
        url="https://api.anthropic.com/v1/models",
        headers={"x-api-key": key, "anthropic-version": "2023-06-01"},
    )


def _endpoint_openai(key: str) -> _KeyCheckEndpoint:
    return _KeyCheckEndpoint(
        display_name="OpenAI",
        url="https://api.openai.com/v1/models",
        headers={"Authorization": f"Bearer {key}"},
    )


def _endpoint_discord(key: str) -> _KeyCheckEndpoint:
    return _KeyCheckEndpoint(
        display_name="Discord",
        url="https://discord.com/api/v10/users/@me",
        headers={"Authorization": f"Bot {key}"},
    )


def _endpoint_telegram(key: str) -> _KeyCheckEndpoint:
    # Telegram authenticates through the URL path.
    return _KeyCheckEndpoint(
        display_name="Telegram",
        url=f"https://api.telegram.org/bot{key}/getMe",
        headers=None,
    )


_ENDPOINT_BUILDERS: dict[str, Callable[[str], _KeyCheckEndpoint]] = {
    "anthropic": _endpoint_anthropic,
    "openai": _endpoint_openai,
    "discord": _endpoint_discord,
    "telegram": _endpoint_telegram,
}


class ProviderCredentialValidator(CredentialValidatorPort):
    """Validates API keys by calling each provider's API."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    def supported_providers(self) -> list[str]:
        return list(_ENDPOINT_BUILDERS.keys())

    async def validate(self, provider: str, key: str) -> KeyValidationResult:
        builder = _ENDPOINT_BUILDERS.get(provider)
        if builder is None:
            return KeyValidationResult(
                valid=False,
                error=(
                    f"Unknown provider: {provider}. "
                    f"Supported: {', '.join(self.supported_providers())}"
                ),
            )

        logger.debug(f"Validating API key for provider: {provider}")
        endpoint = builder(key)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                if endpoint.headers is None:
                    response = await client.get(endpoint.url)
                else:
                    response = await client.get(endpoint.url, headers=endpoint.headers)
        except httpx.RequestError as e:
            logger.debug(f"Credential check for {provider} could not reach the API: {e}")
            return KeyValidationResult(valid=False, error=f"Network error: {e}")

        if 200 <= response.status_code < 300:
            return KeyValidationResult(valid=True)

        return KeyValidationResult(
            valid=False,
            error=f"{endpoint.display_name} API returned {response.status_code}: {response.text}",
        )
