from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Protocol as TypingProtocol, runtime_checkable

from .message import InboundMessage

MessageCallback = Callable[[InboundMessage], None]

@runtime_checkable
class Target(TypingProtocol):
    """A remote context messages can be posted to (e.g. a frame's window)."""
    origin: str

class Transport(ABC):
    """
    The local context's view of the raw channel: post to a target, and
    install/remove the process-wide inbound listener.
    """

    @property
    @abstractmethod
    def origin(self) -> str:
        """Origin this context declares to receivers."""
        raise NotImplementedError

    @property
    @abstractmethod
    def parent(self) -> Optional[Target]:
        """The embedding context, or None at the top level."""
        raise NotImplementedError

    @abstractmethod
    def send(self, target: Target, data: Any, target_origin: str = "*") -> None:
        """Deliver one raw message to `target`, scoped to `target_origin` ("*" for any)."""
        raise NotImplementedError

    @abstractmethod
    def on_message(self, cb: MessageCallback) -> None:
        raise NotImplementedError

    @abstractmethod
    def off_message(self, cb: MessageCallback) -> None:
        raise NotImplementedError
