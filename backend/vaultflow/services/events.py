import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

VAULT_ADDED = "vault-added"
CHOICE = "choice"


class EventEmitter:
    """Synchronous fan-out of named events to the listeners subscribed at emit time."""

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        if listener not in self._listeners[event]:
            self._listeners[event].append(listener)
        return lambda: self.remove_listener(event, listener)

    def once(self, event: str, listener: Listener) -> Callable[[], None]:
        def wrapper(*args):
            self.remove_listener(event, wrapper)
            listener(*args)

        return self.on(event, wrapper)

    def remove_listener(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)
            if not listeners:
                del self._listeners[event]

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def emit(self, event: str, *args) -> bool:
        # Copy so listeners may deregister themselves while being called.
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener for %r failed", event)
        return bool(listeners)

    def emit_first(self, event: str, *args) -> bool:
        """Deliver to the oldest listener only."""
        listeners = self._listeners.get(event)
        if not listeners:
            return False
        listener = listeners[0]
        try:
            listener(*args)
        except Exception:
            logger.exception("Listener for %r failed", event)
        return True
