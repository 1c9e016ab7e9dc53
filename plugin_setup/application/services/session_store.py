"""
In-memory registry of setup sessions.

Sessions live only as long as the process. Each SessionStore instance owns
its own mapping, so independent stores (e.g. one per test) never share state.
"""

import logging
import threading

from plugin_setup.domain.model import ConfigSchema, SetupSession

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Registry of active setup sessions keyed by session ID.

    Every method holds a single lock around the mapping so concurrent request
    handlers see atomic create/get/delete. Per-session state is not guarded;
    callers serialize operations on one session.

    Usage:
        store = SessionStore()
        session = store.create("sess-1", "my-plugin", schema)
        store.is_active("sess-1")  # True
        store.delete("sess-1")
    """

    def __init__(self) -> None:
        self._sessions: dict[str, SetupSession] = {}
        self._lock = threading.Lock()

    def create(self, session_id: str, plugin_id: str, config_schema: ConfigSchema) -> SetupSession:
        """Create a session, replacing any existing session with the same ID."""
        session = SetupSession(
            session_id=session_id,
            plugin_id=plugin_id,
            config_schema=config_schema,
        )
        with self._lock:
            replaced = session_id in self._sessions
            self._sessions[session_id] = session
        if replaced:
            logger.debug(f"Replaced existing setup session: {session_id}")
        return session

    def get(self, session_id: str) -> SetupSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        """Remove a session. Returns True if one was removed."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def is_active(self, session_id: str) -> bool:
        """True if the session exists and has not completed."""
        with self._lock:
            session = self._sessions.get(session_id)
        return session is not None and not session.completed

    def list_sessions(self) -> list[SetupSession]:
        with self._lock:
            return list(self._sessions.values())

    def clear_all(self) -> None:
        """Drop every session unconditionally."""
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        logger.debug(f"Cleared {count} setup sessions")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
