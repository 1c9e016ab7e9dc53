"""
In-process event bus for setup notifications.

Listeners are plain callables ``listener(name, payload)``. Emitting never
waits on a listener: synchronous listeners run inline, coroutine listeners
are scheduled on the running loop and left to finish on their own.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from plugin_setup.domain.ports import EventEmitterPort

logger = logging.getLogger(__name__)

EventListener = Callable[[str, dict[str, Any]], Any]


class SetupEventBus(EventEmitterPort):
    """Fan-out of setup events to registered listeners."""

    def __init__(self) -> None:
        self._listeners: list[EventListener] = []
        self._pending: set[asyncio.Task] = set()

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, name: str, payload: dict[str, Any]) -> None:
        if not self._listeners:
            logger.debug(f"No listeners for event {name}")
            return

        for listener in list(self._listeners):
            try:
                result = listener(name, payload)
            except Exception as e:
                logger.warning(f"Event listener failed for {name}: {e}", exc_info=True)
                continue
            if inspect.isawaitable(result):
                self._schedule(name, result)

    def _schedule(self, name: str, awaitable: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"Dropped async listener for {name}: no running event loop")
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return
        task = asyncio.ensure_future(awaitable, loop=loop)
        self._pending.add(task)
        task.add_done_callback(self._on_listener_done)

    def _on_listener_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning(f"Async event listener failed: {task.exception()}")

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()
