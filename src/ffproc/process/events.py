"""Per-instance observer registry for process notifications."""

import logging
from collections.abc import Callable
from typing import Any

from ffproc.models.events import ProcessEvent

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventEmitter:
    """Maps each ProcessEvent to an ordered list of listeners."""

    def __init__(self):
        self._listeners: dict[ProcessEvent, list[Listener]] = {event: [] for event in ProcessEvent}

    def on(self, event: ProcessEvent | str, listener: Listener) -> Listener:
        """Register ``listener`` for ``event`` and return it."""
        self._listeners[ProcessEvent(event)].append(listener)
        return listener

    def off(self, event: ProcessEvent | str, listener: Listener) -> bool:
        """Remove the first registration of ``listener``; False if absent."""
        listeners = self._listeners[ProcessEvent(event)]
        try:
            listeners.remove(listener)
        except ValueError:
            return False
        return True

    def listener_count(self, event: ProcessEvent | str) -> int:
        return len(self._listeners[ProcessEvent(event)])

    def _emit(self, event: ProcessEvent, payload: Any) -> None:
        # Copy so listeners may subscribe or unsubscribe while being notified.
        for listener in list(self._listeners[event]):
            try:
                listener(payload)
            except Exception:
                logger.exception("Error in %s listener %r", event.value, listener)
