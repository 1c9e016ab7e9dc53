"""Pytest configuration and shared fixtures for setup tests."""

import copy
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from plugin_setup.application.services import RollbackEngine, SessionStore, SetupService
from plugin_setup.domain.model import ConfigSchema
from plugin_setup.domain.ports import (
    ConfigStorePort,
    CredentialValidatorPort,
    InstallResult,
    PlatformPort,
    UninstallResult,
)
from plugin_setup.infrastructure.events import SetupEventBus
from plugin_setup.tools import ToolRegistry, create_setup_tools

SUPPORTED_PROVIDERS = ["anthropic", "openai", "discord", "telegram"]


class RecordingListener:
    """Event listener that remembers every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, name: str, payload: dict[str, Any]) -> None:
        self.events.append((name, payload))


class InMemoryConfigStore(ConfigStorePort):
    """Config store kept in a dict. Reads and writes are copies."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._config: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.save_count = 0

    async def get_config(self) -> dict[str, Any]:
        return copy.deepcopy(self._config)

    async def save_config(self, config: dict[str, Any]) -> None:
        self._config = copy.deepcopy(config)
        self.save_count += 1

    @property
    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._config)


def make_schema(*fields: dict[str, Any], title: str = "Test") -> ConfigSchema:
    """Build a ConfigSchema from plain field dicts."""
    return ConfigSchema.model_validate({"title": title, "fields": list(fields)})


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def config_store() -> InMemoryConfigStore:
    return InMemoryConfigStore()


@pytest.fixture
def platform() -> AsyncMock:
    """Platform capability that succeeds unless a test says otherwise."""
    mock = AsyncMock(spec=PlatformPort)
    mock.install.return_value = InstallResult(success=True, status_code=200)
    mock.uninstall.return_value = UninstallResult(success=True, status_code=200)
    return mock


@pytest.fixture
def credentials() -> MagicMock:
    mock = MagicMock(spec=CredentialValidatorPort)
    mock.validate = AsyncMock()
    mock.supported_providers.return_value = list(SUPPORTED_PROVIDERS)
    return mock


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def event_bus(listener: RecordingListener) -> SetupEventBus:
    bus = SetupEventBus()
    bus.subscribe(listener)
    return bus


@pytest.fixture
def service(store, config_store, platform, credentials, event_bus) -> SetupService:
    return SetupService(
        store=store,
        config_store=config_store,
        platform=platform,
        credentials=credentials,
        events=event_bus,
        rollback_engine=RollbackEngine(config_store, platform),
    )


@pytest.fixture
def registry(service: SetupService) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register_all(create_setup_tools(service))
    return registry


def result_text(result: dict[str, Any]) -> str:
    """Text of the first content block of a tool result."""
    return result["content"][0]["text"]
