
from __future__ import annotations
from typing import Optional, Union
import weakref

from .channel import DEFAULT_TIMEOUT, Channel
from .discovery import TargetSignal
from .message import Mode
from .runtime import EmbedRuntime
from .transport import Transport

# One runtime per transport, i.e. one inbound listener per local context
_runtimes: "weakref.WeakKeyDictionary[Transport, EmbedRuntime]" = weakref.WeakKeyDictionary()

def runtime_for(transport: Transport) -> EmbedRuntime:
    rt = _runtimes.get(transport)
    if rt is None:
        rt = EmbedRuntime(transport)
        _runtimes[transport] = rt
    return rt

def use_embed(mode: Union[Mode, str],
              channel_id: str,
              *,
              transport: Transport,
              remote: Optional[str] = None,
              embedding: Optional[TargetSignal] = None,
              timeout: float = DEFAULT_TIMEOUT) -> Channel:
    """
    One-liner factory:
      use_embed("guest", "editor", transport=window, remote="https://app.example")
      use_embed("host", "editor", transport=window, embedding=frame_ref, timeout=5.0)

    - mode: "host" (embeds the remote, needs `embedding`) | "guest"
    - channel_id: application-chosen name; asking again returns the same Channel
    - transport: the local context (e.g. transports.Window)
    - remote: origin prefix accepted from the peer; None or "*" accepts any
    - embedding: TargetSignal reporting the remote target (host mode)
    - timeout: seconds before call() gives up
    """
    return runtime_for(transport).acquire(
        channel_id, mode,
        remote=remote,
        embedding=embedding,
        timeout=timeout,
    )
