from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Iterator, Optional

if TYPE_CHECKING:
    from .channel import Channel

def _noop() -> None:
    pass

@dataclass
class ChannelRegistry:
    """
    Channel id -> Channel. Observers fire on size transitions only:
    on_first when going 0 -> 1, on_empty when going 1 -> 0.
    """
    on_first: Callable[[], None] = _noop
    on_empty: Callable[[], None] = _noop
    _channels: Dict[str, "Channel"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._channels)

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self._channels

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._channels))

    def get(self, channel_id: str) -> Optional["Channel"]:
        return self._channels.get(channel_id)

    def add(self, channel: "Channel") -> None:
        if channel.id in self._channels:
            raise ValueError(f"Channel {channel.id!r} is already registered")
        self._channels[channel.id] = channel
        if len(self._channels) == 1:
            self.on_first()

    def remove(self, channel_id: str) -> Optional["Channel"]:
        channel = self._channels.pop(channel_id, None)
        if channel is not None and not self._channels:
            self.on_empty()
        return channel
