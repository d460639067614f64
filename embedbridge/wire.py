from __future__ import annotations
from typing import Any, Dict, Optional

from .message import Envelope, MsgType
from .errors import NoHandlerError, RemoteCallError

def pack_envelope(env: Envelope) -> Dict[str, Any]:
    return {
        "id":      env.id,
        "type":    str(env.type),
        "payload": env.payload,
    }

def unpack_envelope(data: Any) -> Optional[Envelope]:
    """Return the envelope carried by a raw message, or None if it isn't one of ours."""
    if not isinstance(data, dict):
        return None
    channel_id = data.get("id")
    msg_type = data.get("type")
    if not channel_id or not isinstance(channel_id, str) or not isinstance(msg_type, str):
        return None
    return Envelope(id=channel_id, type=msg_type, payload=data.get("payload"))

# ---- internal call records ----

def call_payload(call_id: int, call_type: str, message: Any) -> Dict[str, Any]:
    return {"id": call_id, "type": call_type, "message": message}

def response_payload(call_id: Any, *, response: Any = None,
                     error: Optional[BaseException] = None) -> Dict[str, Any]:
    if error is not None:
        return {"id": call_id, "error": encode_error(error)}
    return {"id": call_id, "response": response}

def encode_error(exc: BaseException) -> Dict[str, Any]:
    if isinstance(exc, RemoteCallError):
        out = {"name": exc.name, "message": str(exc)}
    else:
        out = {"name": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, NoHandlerError):
        out["type"] = exc.call_type
    return out

def decode_error(error: Any) -> RemoteCallError:
    if not isinstance(error, dict):
        return RemoteCallError(str(error))
    name = str(error.get("name") or "Error")
    if name == "NoHandlerError" and isinstance(error.get("type"), str):
        return NoHandlerError(error["type"])
    return RemoteCallError(str(error.get("message", "")), name=name)

def is_call(env: Envelope) -> bool:
    p = env.payload
    return env.type == MsgType.CALL and isinstance(p, dict) and "id" in p and isinstance(p.get("type"), str)

def is_response(env: Envelope) -> bool:
    p = env.payload
    return env.type == MsgType.RESPONSE and isinstance(p, dict) and "id" in p
