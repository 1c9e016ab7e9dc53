"""Application services for setup sessions."""

from plugin_setup.application.services.rollback_engine import RollbackEngine, RollbackReport
from plugin_setup.application.services.session_store import SessionStore
from plugin_setup.application.services.setup_service import SETUP_COMPLETE_EVENT, SetupService

__all__ = [
    "RollbackEngine",
    "RollbackReport",
    "SessionStore",
    "SETUP_COMPLETE_EVENT",
    "SetupService",
]
