"""
Public API:
- use_embed: get or create a Channel for (transport, channel id)
- Channel: emit/on events, call/handle_call RPC, destroy
- EmbedRuntime: channels sharing one transport (registry + dispatcher)
- Dispatcher, ChannelRegistry: the routing core, usable on their own
- Transport, Target: abstract contract a context must implement
- Window: in-process transport (asyncio, codec-cloned messages)
- TargetRef, TargetSignal: remote-target discovery for host channels
- Envelope, InboundMessage, MsgType, Mode, Origin: wire-level types
- errors: EmbedError and subclasses
"""

import logging

# Core runtime
from .factory import use_embed, runtime_for
from .runtime import EmbedRuntime
from .channel import Channel, DEFAULT_TIMEOUT
from .protocol import Dispatcher
from .registry import ChannelRegistry

# Wire types
from .message import (
    Envelope,
    InboundMessage,
    MsgType,
    Mode,
    Origin,
)
from .codecs import Codec, get_codec, register_codec, available_codecs

# Transport contract
from .transport import Transport, Target
from .transports.inmemory import Window

# Discovery
from .discovery import TargetRef, TargetSignal

# Errors
from .errors import (
    EmbedError,
    TargetUnavailableError,
    CallTimeoutError,
    ChannelClosedError,
    RemoteCallError,
    NoHandlerError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "use_embed",
    "runtime_for",
    "EmbedRuntime",
    "Channel",
    "DEFAULT_TIMEOUT",
    "Dispatcher",
    "ChannelRegistry",
    "Envelope",
    "InboundMessage",
    "MsgType",
    "Mode",
    "Origin",
    "Codec",
    "get_codec",
    "register_codec",
    "available_codecs",
    "Transport",
    "Target",
    "Window",
    "TargetRef",
    "TargetSignal",
    "EmbedError",
    "TargetUnavailableError",
    "CallTimeoutError",
    "ChannelClosedError",
    "RemoteCallError",
    "NoHandlerError",
]

__version__ = "0.1.0"
