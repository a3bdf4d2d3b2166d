"""
Multi-listener notification channels.
Plain-Python counterpart of a Qt signal with token-based disconnect.
"""
import itertools
from typing import Callable, Dict

from .logging_utils import get_logger

logger = get_logger(__name__)

Listener = Callable[[], None]


class GestureEvent:
    """
    Zero-argument notification channel.

    Listeners are called synchronously in registration order. Exceptions
    raised by a listener propagate to the caller of `emit()`.
    """

    def __init__(self, name: str = "event"):
        self.name = name
        self._listeners: Dict[int, Listener] = {}
        self._tokens = itertools.count(1)

    def connect(self, callback: Listener) -> int:
        """
        Register a listener.

        Returns:
            Token to pass to `disconnect()`.
        """
        if not callable(callback):
            raise TypeError(f"{self.name}: listener must be callable, got {callback!r}")
        token = next(self._tokens)
        self._listeners[token] = callback
        return token

    def disconnect(self, token: int) -> bool:
        """Remove a listener. Returns False if the token is unknown."""
        return self._listeners.pop(token, None) is not None

    def clear(self) -> None:
        self._listeners.clear()

    def emit(self) -> None:
        """Call every listener."""
        # Snapshot so listeners may disconnect themselves while we iterate
        listeners = list(self._listeners.values())
        logger.debug(f"{self.name}: notifying {len(listeners)} listener(s)")
        for callback in listeners:
            callback()

    def __len__(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"GestureEvent({self.name!r}, listeners={len(self)})"
