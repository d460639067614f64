from __future__ import annotations
from typing import Any, Callable, Generic, List, Optional, Protocol as TypingProtocol, TypeVar

T = TypeVar("T")

StopHandle = Callable[[], None]

class TargetSignal(TypingProtocol):
    """
    Anything that reports a remote target as it becomes available.
    watch() must call back immediately with the current value (None if not
    ready yet), then again on every change, until the returned stop handle runs.
    """
    def watch(self, cb: Callable[[Optional[Any]], None]) -> StopHandle: ...

class TargetRef(Generic[T]):
    """Value holder that notifies watchers on assignment (e.g. a frame's window)."""

    def __init__(self, value: Optional[T] = None):
        self._value = value
        self._watchers: List[Callable[[Optional[T]], None]] = []

    @property
    def value(self) -> Optional[T]:
        return self._value

    @value.setter
    def value(self, value: Optional[T]) -> None:
        if value is self._value:
            return
        self._value = value
        for cb in list(self._watchers):
            cb(value)

    @property
    def watcher_count(self) -> int:
        return len(self._watchers)

    def watch(self, cb: Callable[[Optional[T]], None]) -> StopHandle:
        self._watchers.append(cb)
        cb(self._value)

        def stop() -> None:
            if cb in self._watchers:
                self._watchers.remove(cb)
        return stop
