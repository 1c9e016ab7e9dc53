from abc import ABC, abstractmethod
from typing import Any


class EventEmitterPort(ABC):
    """Port for fire-and-forget outbound notifications."""

    @abstractmethod
    def emit(self, name: str, payload: dict[str, Any]) -> None:
        """
        Publish an event without waiting for any acknowledgement.

        Args:
            name: Event name (e.g. ``setup:complete``)
            payload: Event data
        """
