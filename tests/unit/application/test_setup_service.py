"""Tests for SetupService operations."""

import logging

import pytest

from conftest import make_schema
from plugin_setup.domain.exceptions import (
    ConfigPersistenceError,
    DependencyInstallError,
    PatternMismatchError,
    RequiredFieldError,
    SessionAlreadyCompletedError,
    SessionNotFoundError,
)
from plugin_setup.domain.model import InstallDependencyMutation, SaveConfigMutation
from plugin_setup.domain.ports import InstallResult, KeyValidationResult, UninstallResult

TOKEN_SCHEMA = make_schema({"name": "token", "type": "password", "label": "Token", "required": True})


@pytest.mark.unit
class TestSessionLifecycle:
    def test_begin_setup_accepts_plain_schema_dict(self, service):
        session = service.begin_setup(
            "test-plugin", {"title": "Test", "fields": []}, "sess-99"
        )
        assert session.plugin_id == "test-plugin"
        assert service.is_setup_active("sess-99")
        assert service.get_session("sess-99") is session

    def test_require_session_raises_for_unknown(self, service):
        with pytest.raises(SessionNotFoundError) as exc_info:
            service.require_session("nope")
        assert str(exc_info.value) == "No active setup session: nope"

    def test_shutdown_clears_sessions(self, service, store):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        service.shutdown()
        assert len(store) == 0

    def test_list_sessions(self, service):
        service.begin_setup("a", TOKEN_SCHEMA, "s1")
        service.begin_setup("b", TOKEN_SCHEMA, "s2")

        assert sorted(s.session_id for s in service.list_sessions()) == ["s1", "s2"]

    def test_shutdown_logs_unfinished_sessions(self, service, caplog):
        service.begin_setup("a", TOKEN_SCHEMA, "s1")
        service.begin_setup("b", TOKEN_SCHEMA, "s2")
        service.complete("s2")

        with caplog.at_level(logging.INFO, logger="plugin_setup"):
            service.shutdown()

        assert "['s1']" in caplog.text


@pytest.mark.unit
class TestSaveConfig:
    @pytest.mark.asyncio
    async def test_saves_value_and_records_mutation(self, service, config_store):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")

        await service.save_config("s1", "token", "sk-123")

        session = service.get_session("s1")
        assert len(session.mutations) == 1
        assert session.mutations[0] == SaveConfigMutation(key="token", value="sk-123")
        assert session.mutations[0].to_dict() == {
            "type": "saveConfig",
            "key": "token",
            "value": "sk-123",
        }
        assert session.collected_values == {"token": "sk-123"}
        assert config_store.snapshot == {"token": "sk-123"}

    @pytest.mark.asyncio
    async def test_last_write_wins_in_collected_values(self, service):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")

        await service.save_config("s1", "token", "first")
        await service.save_config("s1", "token", "second")

        session = service.get_session("s1")
        assert session.collected_values == {"token": "second"}
        assert len(session.mutations) == 2

    @pytest.mark.asyncio
    async def test_empty_required_value_records_nothing(self, service, config_store):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")

        with pytest.raises(RequiredFieldError) as exc_info:
            await service.save_config("s1", "token", "")

        assert "required" in str(exc_info.value)
        assert service.get_session("s1").mutations == []
        assert config_store.save_count == 0

    @pytest.mark.asyncio
    async def test_pattern_error_leaves_session_usable(self, service):
        schema = make_schema(
            {"name": "id", "type": "text", "label": "ID", "pattern": r"^\d+$",
             "patternError": "Must be numeric"}
        )
        service.begin_setup("p", schema, "s1")

        with pytest.raises(PatternMismatchError):
            await service.save_config("s1", "id", "abc")
        await service.save_config("s1", "id", "42")

        assert service.get_session("s1").collected_values == {"id": "42"}

    @pytest.mark.asyncio
    async def test_persistence_failure_records_nothing(self, service, config_store, monkeypatch):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")

        async def failing_save(config):
            raise OSError("read-only")

        monkeypatch.setattr(config_store, "save_config", failing_save)

        with pytest.raises(ConfigPersistenceError) as exc_info:
            await service.save_config("s1", "token", "sk-1")

        assert str(exc_info.value) == 'Failed to save "token": read-only'
        session = service.get_session("s1")
        assert session.mutations == []
        assert session.collected_values == {}
        assert service.is_setup_active("s1")

    @pytest.mark.asyncio
    async def test_rejected_after_completion(self, service):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        service.complete("s1")

        with pytest.raises(SessionAlreadyCompletedError):
            await service.save_config("s1", "token", "sk-1")

    @pytest.mark.asyncio
    async def test_missing_session(self, service):
        with pytest.raises(SessionNotFoundError):
            await service.save_config("nope", "token", "x")


@pytest.mark.unit
class TestInstallDependency:
    @pytest.mark.asyncio
    async def test_records_mutation_on_success(self, service, platform):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")

        await service.install_dependency("s1", "voice-plugin")

        platform.install.assert_awaited_once_with("voice-plugin")
        assert service.get_session("s1").mutations == [
            InstallDependencyMutation(plugin_id="voice-plugin")
        ]

    @pytest.mark.asyncio
    async def test_platform_error_records_nothing(self, service, platform):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        platform.install.return_value = InstallResult(success=False, status_code=500, error="boom")

        with pytest.raises(DependencyInstallError) as exc_info:
            await service.install_dependency("s1", "bad-plugin")

        assert str(exc_info.value) == "Failed to install bad-plugin: boom"
        assert service.get_session("s1").mutations == []

    @pytest.mark.asyncio
    async def test_falls_back_to_http_status(self, service, platform):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        platform.install.return_value = InstallResult(success=False, status_code=502)

        with pytest.raises(DependencyInstallError, match="HTTP 502"):
            await service.install_dependency("s1", "bad-plugin")

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, service, platform):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        platform.install.side_effect = ConnectionError("refused")

        with pytest.raises(DependencyInstallError) as exc_info:
            await service.install_dependency("s1", "x")

        assert isinstance(exc_info.value.original_error, ConnectionError)
        assert service.get_session("s1").mutations == []


@pytest.mark.unit
class TestComplete:
    def test_marks_completed_and_emits_event(self, service, listener):
        service.begin_setup("my-plugin", TOKEN_SCHEMA, "s1")
        service.get_session("s1").collected_values["token"] = "sk"

        session = service.complete("s1")

        assert session.completed is True
        assert service.get_session("s1") is session
        assert not service.is_setup_active("s1")
        assert listener.events == [
            ("setup:complete", {"pluginId": "my-plugin", "sessionId": "s1", "configKeys": ["token"]})
        ]

    def test_second_complete_fails_without_reemitting(self, service, listener):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        service.complete("s1")

        with pytest.raises(SessionAlreadyCompletedError, match="already completed"):
            service.complete("s1")

        assert len(listener.events) == 1

    def test_missing_session(self, service):
        with pytest.raises(SessionNotFoundError):
            service.complete("nope")


@pytest.mark.unit
class TestRollback:
    @pytest.mark.asyncio
    async def test_save_then_rollback_restores_config(self, service, config_store):
        await config_store.save_config({"existing": "keep"})
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        await service.save_config("s1", "token", "sk-123")

        report = await service.rollback("s1")

        assert report.success
        assert config_store.snapshot == {"existing": "keep"}
        assert service.get_session("s1") is None

    @pytest.mark.asyncio
    async def test_partial_failure_still_deletes_session(self, service, platform, config_store):
        service.begin_setup("p", make_schema({"name": "a", "type": "number", "label": "A"}), "s3")
        await service.save_config("s3", "a", 1)
        await service.install_dependency("s3", "p1")
        platform.uninstall.return_value = UninstallResult(success=False, status_code=500)
        saves_before = config_store.save_count

        report = await service.rollback("s3")

        assert report.errors == ["Failed to uninstall p1: HTTP 500"]
        assert config_store.save_count == saves_before + 1
        assert service.get_session("s3") is None

    @pytest.mark.asyncio
    async def test_completed_session_cannot_be_rolled_back(self, service, config_store):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        await service.save_config("s1", "token", "sk-123")
        service.complete("s1")

        with pytest.raises(SessionAlreadyCompletedError):
            await service.rollback("s1")

        session = service.get_session("s1")
        assert session is not None
        assert len(session.mutations) == 1
        assert config_store.snapshot == {"token": "sk-123"}

    @pytest.mark.asyncio
    async def test_complete_after_rollback_fails(self, service):
        service.begin_setup("p", TOKEN_SCHEMA, "s1")
        await service.rollback("s1")

        with pytest.raises(SessionNotFoundError):
            service.complete("s1")

    @pytest.mark.asyncio
    async def test_missing_session(self, service):
        with pytest.raises(SessionNotFoundError):
            await service.rollback("nope")


@pytest.mark.unit
class TestCapabilityPassThrough:
    @pytest.mark.asyncio
    async def test_validate_key_delegates(self, service, credentials):
        credentials.validate.return_value = KeyValidationResult(valid=True)

        result = await service.validate_key("openai", "sk-test")

        assert result.valid
        credentials.validate.assert_awaited_once_with("openai", "sk-test")

    def test_supported_providers(self, service):
        assert "anthropic" in service.supported_providers()
