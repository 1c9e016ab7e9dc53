"""
Compensating rollback for setup sessions.

Undoes a session's mutation ledger newest-first, one compensation at a time.
A failed compensation is recorded and the remaining mutations are still
attempted.
"""

import logging
from dataclasses import dataclass, field

from plugin_setup.domain.model import (
    InstallDependencyMutation,
    SaveConfigMutation,
    SetupMutation,
    SetupSession,
)
from plugin_setup.domain.ports import ConfigStorePort, PlatformPort

logger = logging.getLogger(__name__)


@dataclass
class RollbackReport:
    """Outcome of rolling back one session."""

    session_id: str
    attempted: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class RollbackEngine:
    """Applies the inverse of each recorded mutation."""

    def __init__(self, config_store: ConfigStorePort, platform: PlatformPort) -> None:
        self._config_store = config_store
        self._platform = platform

    async def rollback(self, session: SetupSession) -> RollbackReport:
        """
        Compensate every mutation of ``session`` in reverse order.

        The ledger and collected values are cleared afterwards whatever the
        outcome. Removing the session from its store is left to the caller.

        Args:
            session: Session whose ledger should be undone

        Returns:
            RollbackReport listing every compensation that failed
        """
        report = RollbackReport(session_id=session.session_id)

        for mutation in reversed(list(session.mutations)):
            report.attempted += 1
            try:
                error = await self._compensate(session.session_id, mutation)
            except Exception as e:
                error = f"Rollback error: {e}"
            if error:
                logger.warning(f"[Rollback] {session.session_id}: {error}")
                report.errors.append(error)

        session.clear_ledger()

        logger.info(
            f"[Rollback] session={session.session_id} attempted={report.attempted} "
            f"failed={len(report.errors)}"
        )
        return report

    async def _compensate(self, session_id: str, mutation: SetupMutation) -> str | None:
        """Undo one mutation. Returns an error message, or None on success."""
        if isinstance(mutation, SaveConfigMutation):
            config = await self._config_store.get_config()
            config.pop(mutation.key, None)
            await self._config_store.save_config(config)
            logger.info(f"Rolled back config key={mutation.key} session={session_id}")
            return None

        if isinstance(mutation, InstallDependencyMutation):
            result = await self._platform.uninstall(mutation.plugin_id)
            if not result.success:
                return f"Failed to uninstall {mutation.plugin_id}: HTTP {result.status_code}"
            logger.info(f"Rolled back dependency {mutation.plugin_id} session={session_id}")
            return None

        raise TypeError(f"Unknown mutation type: {type(mutation).__name__}")
