
from __future__ import annotations
from typing import Any, Dict, List, Protocol as TypingProtocol

import json

import msgpack

class Codec(TypingProtocol):
    """
    How a context turns messages into bytes and back. A message crossing
    contexts is encoded with the receiver's codec, so each side only ever
    decodes its own format.
    """
    name: str
    def dumps(self, obj: Any) -> bytes: ...
    def loads(self, data: bytes) -> Any: ...

class JSONCodec:
    # allow_nan=False: NaN/Infinity are not JSON, refuse them at send time
    name = "json"
    def dumps(self, obj: Any) -> bytes:
        return json.dumps(obj, separators=(",", ":"), allow_nan=False).encode("utf-8")
    def loads(self, data: bytes) -> Any:
        return json.loads(data)

class MsgPackCodec:
    # Keeps bytes as bytes; int map keys allowed for user payloads
    name = "msgpack"
    def dumps(self, obj: Any) -> bytes:
        return msgpack.packb(obj, use_bin_type=True)
    def loads(self, data: bytes) -> Any:
        return msgpack.unpackb(data, raw=False, strict_map_key=False)

_codecs: Dict[str, Codec] = {}

def register_codec(codec: Codec) -> None:
    """Make `codec` selectable by name (e.g. Window(codec="cbor"))."""
    _codecs[codec.name] = codec

def get_codec(name: str) -> Codec:
    if name not in _codecs:
        raise ValueError(f"Unknown codec: {name} (available: {', '.join(available_codecs())})")
    return _codecs[name]

def available_codecs() -> List[str]:
    return sorted(_codecs)

register_codec(JSONCodec())
register_codec(MsgPackCodec())
