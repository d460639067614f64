
from __future__ import annotations
import asyncio
from typing import Any, List, Optional, Union
from urllib.parse import urlsplit

from ..codecs import Codec, get_codec
from ..message import InboundMessage, Origin
from ..transport import MessageCallback, Transport

class Window(Transport):
    """In-process transport that behaves like a browsing context.

    Mapping:
    - send -> encode with the target's codec, then deliver on the next loop iteration
      (call_soon keeps send order). Receivers get a decoded copy, never the
      sender's objects.
    - target_origin scoping -> delivery is skipped unless the target's origin
      matches (scheme + host + port), or target_origin is "*".
    - open_frame -> a child window whose parent is this one.

    Must be used from inside a running event loop.
    """

    def __init__(self, origin: str = Origin.OPAQUE, *,
                 parent: Optional["Window"] = None,
                 codec: Union[str, Codec] = "json"):
        self._origin = str(origin)
        self._parent = parent
        self._codec = get_codec(codec) if isinstance(codec, str) else codec
        self._listeners: List[MessageCallback] = []
        self.frames: List["Window"] = []

    def __repr__(self) -> str:
        return f"<Window origin={self._origin!r}>"

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def parent(self) -> Optional["Window"]:
        return self._parent

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def open_frame(self, origin: str = Origin.OPAQUE, codec: Union[str, Codec, None] = None) -> "Window":
        child = Window(origin, parent=self, codec=codec or self._codec)
        self.frames.append(child)
        return child

    def on_message(self, cb: MessageCallback) -> None:
        if cb not in self._listeners:
            self._listeners.append(cb)

    def off_message(self, cb: MessageCallback) -> None:
        try:
            self._listeners.remove(cb)
        except ValueError:
            pass

    def send(self, target: "Window", data: Any, target_origin: str = "*") -> None:
        # Encode eagerly, in the receiver's format, so unencodable payloads
        # fail in the caller and mixed-codec parent/child pairs interoperate
        frame = target.codec.dumps(data)
        loop = asyncio.get_running_loop()
        loop.call_soon(target._receive, frame, self, str(target_origin))

    def _receive(self, frame: bytes, source: "Window", target_origin: str) -> None:
        if not _origin_matches(target_origin, self._origin):
            return
        msg = InboundMessage(data=self._codec.loads(frame), origin=source.origin, source=source)
        for cb in list(self._listeners):
            cb(msg)

def _origin_matches(target_origin: str, origin: str) -> bool:
    if target_origin == Origin.ANY:
        return True
    return _origin_of(target_origin) == _origin_of(origin)

def _origin_of(url: str) -> str:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return url
    return f"{parts.scheme}://{parts.netloc}"
