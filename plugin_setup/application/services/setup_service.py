"""
Setup Service - orchestrates a conversational setup session.

Implements the setup operations on top of the session store, the field
validator and the external capability ports. Operations raise SetupError
subclasses; the tool layer turns them into error results.
"""

import logging
from typing import Any

from plugin_setup.application.services.rollback_engine import RollbackEngine, RollbackReport
from plugin_setup.application.services.session_store import SessionStore
from plugin_setup.domain.exceptions import (
    ConfigPersistenceError,
    DependencyInstallError,
    SessionAlreadyCompletedError,
    SessionNotFoundError,
)
from plugin_setup.domain.field_validator import validate_field_value
from plugin_setup.domain.model import (
    ConfigSchema,
    InstallDependencyMutation,
    SaveConfigMutation,
    SetupSession,
)
from plugin_setup.domain.ports import (
    ConfigStorePort,
    CredentialValidatorPort,
    EventEmitterPort,
    HealthCheckResult,
    KeyValidationResult,
    PlatformPort,
)

logger = logging.getLogger(__name__)

SETUP_COMPLETE_EVENT = "setup:complete"


class SetupService:
    """
    Application service for setup sessions.

    All collaborators are injected, so independent instances never share
    session state.

    Example:
        service = SetupService(
            store=SessionStore(),
            config_store=config_store,
            platform=platform_client,
            credentials=credential_validator,
            events=event_bus,
        )
        service.begin_setup("my-plugin", schema, "sess-1")
        await service.save_config("sess-1", "token", "sk-123")
        service.complete("sess-1")
    """

    def __init__(
        self,
        store: SessionStore,
        config_store: ConfigStorePort,
        platform: PlatformPort,
        credentials: CredentialValidatorPort,
        events: EventEmitterPort,
        rollback_engine: RollbackEngine | None = None,
        complete_event: str = SETUP_COMPLETE_EVENT,
    ) -> None:
        self.store = store
        self._config_store = config_store
        self._platform = platform
        self._credentials = credentials
        self._events = events
        self._rollback_engine = rollback_engine or RollbackEngine(config_store, platform)
        self._complete_event = complete_event

    # -- Session lifecycle --

    def begin_setup(
        self,
        plugin_id: str,
        config_schema: ConfigSchema | dict[str, Any],
        session_id: str,
    ) -> SetupSession:
        """Start (or restart) a setup session for ``plugin_id``."""
        if not isinstance(config_schema, ConfigSchema):
            config_schema = ConfigSchema.model_validate(config_schema)
        session = self.store.create(session_id, plugin_id, config_schema)
        logger.info(f"Setup session started: plugin={plugin_id} session={session_id}")
        return session

    def get_session(self, session_id: str) -> SetupSession | None:
        return self.store.get(session_id)

    def is_setup_active(self, session_id: str) -> bool:
        return self.store.is_active(session_id)

    def require_session(self, session_id: str) -> SetupSession:
        """Return the session or raise SessionNotFoundError."""
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def _require_active(self, session_id: str) -> SetupSession:
        session = self.require_session(session_id)
        if session.completed:
            raise SessionAlreadyCompletedError(session_id)
        return session

    # -- Operations --

    async def validate_key(self, provider: str, key: str) -> KeyValidationResult:
        """Check an API key with the provider's credential endpoint."""
        return await self._credentials.validate(provider, key)

    async def install_dependency(self, session_id: str, plugin_id: str) -> None:
        """
        Install a dependency and record it for rollback.

        Nothing is recorded unless the platform reports success.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionAlreadyCompletedError: If the session already completed
            DependencyInstallError: If the install failed or could not be sent
        """
        session = self._require_active(session_id)

        try:
            result = await self._platform.install(plugin_id)
        except Exception as e:
            raise DependencyInstallError(plugin_id, str(e), original_error=e) from e

        if not result.success:
            raise DependencyInstallError(plugin_id, result.error or f"HTTP {result.status_code}")

        session.record(InstallDependencyMutation(plugin_id=plugin_id))
        logger.info(f"Installed dependency {plugin_id} session={session_id}")

    async def test_connection(self, service: str) -> HealthCheckResult:
        """Probe a service's health endpoint. Transport errors propagate."""
        return await self._platform.health_check(service)

    async def save_config(self, session_id: str, key: str, value: Any) -> None:
        """
        Validate and persist a config value, recording it for rollback.

        A rejected value or a failed write leaves the session unchanged and
        usable for a retry.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionAlreadyCompletedError: If the session already completed
            FieldValidationError: If the value is rejected by its field
            ConfigPersistenceError: If the host could not store the config
        """
        session = self._require_active(session_id)
        validate_field_value(session.config_schema, key, value)

        try:
            config = await self._config_store.get_config()
            config[key] = value
            await self._config_store.save_config(config)
        except Exception as e:
            raise ConfigPersistenceError(key, e) from e

        session.record(SaveConfigMutation(key=key, value=value))
        session.collected_values[key] = value
        logger.info(f"Saved config key={key} session={session_id}")

    def complete(self, session_id: str) -> SetupSession:
        """
        Mark a session completed and announce it.

        The session stays in the store after completion.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionAlreadyCompletedError: If ``complete`` already succeeded
        """
        session = self._require_active(session_id)
        session.completed = True

        self._events.emit(
            self._complete_event,
            {
                "pluginId": session.plugin_id,
                "sessionId": session_id,
                "configKeys": list(session.collected_values.keys()),
            },
        )
        logger.info(f"Setup completed: plugin={session.plugin_id} session={session_id}")
        return session

    async def rollback(self, session_id: str) -> RollbackReport:
        """
        Undo every mutation of a session and discard it.

        Completed sessions cannot be rolled back. Once rollback starts the
        session is always deleted, whatever the compensations report.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionAlreadyCompletedError: If the session already completed
        """
        session = self._require_active(session_id)
        try:
            return await self._rollback_engine.rollback(session)
        finally:
            self.store.delete(session_id)
            logger.info(f"Setup session discarded: session={session_id}")

    def list_sessions(self) -> list[SetupSession]:
        return self.store.list_sessions()

    def supported_providers(self) -> list[str]:
        return self._credentials.supported_providers()

    def shutdown(self) -> None:
        """Drop all sessions."""
        unfinished = [s.session_id for s in self.store.list_sessions() if not s.completed]
        if unfinished:
            logger.info(f"Dropping unfinished setup sessions on shutdown: {unfinished}")
        self.store.clear_all()
