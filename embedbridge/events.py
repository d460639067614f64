from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List

Listener = Callable[[Any], None]


class Emitter:
    """Per-channel event sink. Listeners run synchronously, in registration order."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def on(self, event: str, cb: Listener) -> Callable[[], None]:
        self._listeners[event].append(cb)

        def unbind() -> None:
            listeners = self._listeners.get(event)
            if listeners and cb in listeners:
                listeners.remove(cb)
                if not listeners:
                    del self._listeners[event]
        return unbind

    def emit(self, event: str, payload: Any) -> int:
        """Invoke listeners for `event`; returns how many were called."""
        # Snapshot, listeners may unbind themselves
        listeners = list(self._listeners.get(event, ()))
        for cb in listeners:
            cb(payload)
        return len(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def clear(self) -> None:
        self._listeners.clear()
