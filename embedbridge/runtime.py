
from __future__ import annotations
import logging
import weakref
from typing import Optional, Union

from .channel import DEFAULT_TIMEOUT, Channel
from .discovery import TargetSignal
from .message import Mode
from .protocol import Dispatcher
from .registry import ChannelRegistry
from .transport import Transport

logger = logging.getLogger(__name__)

class EmbedRuntime:
    """
    Channels sharing one transport. The dispatcher is installed as the
    transport's listener while at least one channel is registered.
    """

    def __init__(self, transport: Transport):
        # Weak: the per-transport runtime map must not keep its own key alive
        self._transport_ref = weakref.ref(transport)
        self.registry = ChannelRegistry(on_first=self._attach, on_empty=self._detach)
        self.dispatcher = Dispatcher(self.registry)
        self.listening = False

    @property
    def transport(self) -> Transport:
        transport = self._transport_ref()
        if transport is None:
            raise RuntimeError("Transport was garbage collected")
        return transport

    def _attach(self):
        self.transport.on_message(self.dispatcher)
        self.listening = True
        logger.debug("Dispatcher attached to %r", self.transport)

    def _detach(self):
        self.transport.off_message(self.dispatcher)
        self.listening = False
        logger.debug("Dispatcher detached from %r", self.transport)

    # ---- API ----
    def acquire(self, channel_id: str, mode: Union[Mode, str], *,
                remote: Optional[str] = None,
                embedding: Optional[TargetSignal] = None,
                timeout: float = DEFAULT_TIMEOUT) -> Channel:
        """Return the channel registered under `channel_id`, creating it if needed.
        Options are ignored when the channel already exists."""
        existing = self.registry.get(channel_id)
        if existing is not None:
            return existing
        if not channel_id:
            raise ValueError("Channel id must be a non-empty string")

        channel = Channel(
            channel_id, mode,
            transport=self.transport,
            remote=remote,
            embedding=embedding,
            timeout=timeout,
            on_destroy=self._on_channel_destroyed,
        )
        self.registry.add(channel)
        return channel

    def release(self, channel_id: str) -> None:
        channel = self.registry.get(channel_id)
        if channel is not None:
            channel.destroy()

    def get(self, channel_id: str) -> Optional[Channel]:
        return self.registry.get(channel_id)

    def close(self) -> None:
        """Destroy every channel (detaches the dispatcher)."""
        for channel_id in self.registry:
            self.release(channel_id)

    def _on_channel_destroyed(self, channel: Channel) -> None:
        if self.registry.get(channel.id) is channel:
            self.registry.remove(channel.id)
