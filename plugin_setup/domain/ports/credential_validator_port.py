"""
Credential Validator Port - checks API keys against their providers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class KeyValidationResult:
    """Outcome of a credential check."""

    valid: bool
    error: str | None = None


class CredentialValidatorPort(ABC):
    """Port for provider-specific credential checks."""

    @abstractmethod
    async def validate(self, provider: str, key: str) -> KeyValidationResult:
        """
        Validate ``key`` against ``provider``.

        Network failures must be reported as invalid results whose error
        text says so, distinct from a rejected credential.
        """

    @abstractmethod
    def supported_providers(self) -> list[str]:
        """Names of the providers this validator can check."""
