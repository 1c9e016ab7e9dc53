"""
Setup session and mutation ledger.

A SetupSession tracks one configuration conversation. Every side effect the
conversation performs is appended to ``mutations`` in the order it happened;
rollback walks that ledger backwards.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from plugin_setup.domain.model.config_schema import ConfigSchema, ConfigValue


@dataclass(frozen=True)
class SaveConfigMutation:
    """A config key written to the host configuration."""

    key: str
    value: ConfigValue

    @property
    def type(self) -> str:
        return "saveConfig"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "key": self.key, "value": self.value}


@dataclass(frozen=True)
class InstallDependencyMutation:
    """A plugin installed through the platform API."""

    plugin_id: str

    @property
    def type(self) -> str:
        return "installDependency"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "pluginId": self.plugin_id}


SetupMutation = SaveConfigMutation | InstallDependencyMutation


@dataclass
class SetupSession:
    """All state for a single setup conversation.

    Attributes:
        session_id: Caller-supplied session identifier
        plugin_id: Plugin being configured
        config_schema: Fields the plugin declares
        mutations: Ledger of reversible side effects, oldest first
        collected_values: Values saved during this session by field name
        completed: Set once by ``complete``; terminal afterwards
        created_at: Creation time (informational)
    """

    session_id: str
    plugin_id: str
    config_schema: ConfigSchema
    mutations: list[SetupMutation] = field(default_factory=list)
    collected_values: dict[str, ConfigValue] = field(default_factory=dict)
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def record(self, mutation: SetupMutation) -> None:
        """Append a mutation to the ledger."""
        self.mutations.append(mutation)

    def clear_ledger(self) -> None:
        """Drop all mutations and collected values."""
        self.mutations.clear()
        self.collected_values.clear()

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "plugin_id": self.plugin_id,
            "mutations": [m.to_dict() for m in self.mutations],
            "config_keys": list(self.collected_values.keys()),
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
        }
