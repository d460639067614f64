from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional
from enum import StrEnum

# Reserved message types; anything else is an application event
class MsgType(StrEnum):
    CALL       = "_async"
    RESPONSE   = "_asyncResponse"

class Mode(StrEnum):
    HOST  = "host"     # embeds the remote context, discovers its target
    GUEST = "guest"    # runs inside the embedded context, targets its parent

class Origin(StrEnum):
    # Sandboxed contexts without same-origin permission report "null";
    # they cannot be verified, so origin filters are not applied to them
    OPAQUE = "null"
    ANY    = "*"

@dataclass(frozen=True)
class Envelope:
    """
    Envelope fields, 'payload' is whatever the sender attached
    """
    id: str                      # channel identifier
    type: str                    # MsgType.CALL | MsgType.RESPONSE | event name
    payload: Any                 # call/response record or event body

    @property
    def reserved(self) -> bool:
        return self.type in (MsgType.CALL, MsgType.RESPONSE)

@dataclass(frozen=True)
class InboundMessage:
    data: Any                    # decoded raw message, not yet validated
    origin: str                  # origin declared by the sending context
    source: Optional[Any] = None # sending context handle (compared by identity)
