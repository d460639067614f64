from __future__ import annotations
import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from .discovery import StopHandle, TargetSignal
from .errors import CallTimeoutError, ChannelClosedError, TargetUnavailableError
from .events import Emitter, Listener
from .message import Envelope, Mode, MsgType, Origin
from .transport import Target, Transport
from .wire import call_payload, decode_error, pack_envelope

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0  # seconds

Handler = Callable[[Any], Union[Any, Awaitable[Any]]]

@dataclass
class PendingCall:
    future: asyncio.Future
    timer: asyncio.TimerHandle

    def cancel_timer(self) -> None:
        self.timer.cancel()


class Channel:
    """
    One logical endpoint over the shared transport.

    - emit/on: fire-and-forget events
    - call: request/response, rejected on timeout
    - handle_call: serve calls from the peer (handlers are per channel)
    - destroy: stop discovery, drop listeners, reject in-flight calls, unregister

    Host channels learn their target from `embedding`; guest channels post to
    the transport's parent.
    """

    def __init__(self, channel_id: str, mode: Union[Mode, str], *,
                 transport: Transport,
                 remote: Optional[str] = None,
                 embedding: Optional[TargetSignal] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 on_destroy: Optional[Callable[["Channel"], None]] = None):
        self.id = channel_id
        self.mode = Mode(mode)
        self.remote = remote
        self.embedding = embedding
        self.timeout = float(timeout)
        self.events = Emitter()
        self.target: Optional[Target] = None

        self._transport = transport
        self._handlers: Dict[str, Handler] = {}
        self._pending: Dict[int, PendingCall] = {}
        self._call_ids = itertools.count(1)
        self._on_destroy = on_destroy
        self._stop_watch: Optional[StopHandle] = None
        self._destroyed = False

        if self.mode == Mode.HOST:
            if embedding is None:
                raise ValueError("Host channels require an embedding to discover their target")
            self._stop_watch = embedding.watch(self._bind)
        else:
            self.target = transport.parent

    def __repr__(self) -> str:
        return f"<Channel id={self.id!r} mode={self.mode.value}>"

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    def _bind(self, target: Optional[Target]) -> None:
        # Keep the last live target if the element reports nothing
        if target:
            self.target = target
            logger.debug("Channel %r bound to %r", self.id, target)

    def origin_hint(self) -> str:
        if self.target is None or getattr(self.target, "origin", Origin.OPAQUE) == Origin.OPAQUE:
            return Origin.ANY
        return self.remote or Origin.ANY

    # ---- events ----
    def emit(self, type: str, message: Any = None) -> None:
        """Send an envelope of `type` to the remote side. Raises TargetUnavailableError if unbound."""
        if self.target is None:
            raise TargetUnavailableError()
        env = Envelope(id=self.id, type=type, payload={} if message is None else message)
        self._transport.send(self.target, pack_envelope(env), self.origin_hint())

    post = emit

    def on(self, type: str, listener: Listener) -> Callable[[], None]:
        return self.events.on(type, listener)

    # ---- calls ----
    async def call(self, type: str, message: Any = None) -> Any:
        """
        Invoke the peer's handler for `type` and return its result.

        Raises CallTimeoutError when no response arrives within `timeout`,
        RemoteCallError/NoHandlerError when the peer reports a failure, and
        ChannelClosedError if the channel is destroyed first.
        """
        if self._destroyed:
            raise ChannelClosedError(self.id)

        loop = asyncio.get_running_loop()
        call_id = next(self._call_ids)
        future = loop.create_future()
        self._pending[call_id] = PendingCall(
            future=future,
            timer=loop.call_later(self.timeout, self._expire, call_id),
        )
        try:
            self.emit(MsgType.CALL, call_payload(call_id, type, {} if message is None else message))
            return await future
        finally:
            # No-op once settled; covers send failures and cancelled awaits
            pending = self._pending.pop(call_id, None)
            if pending is not None:
                pending.cancel_timer()

    def _expire(self, call_id: int) -> None:
        pending = self._pending.pop(call_id, None)
        if pending is None:
            return
        logger.debug("Call %s on channel %r timed out after %ss", call_id, self.id, self.timeout)
        if not pending.future.done():
            pending.future.set_exception(CallTimeoutError())

    def settle(self, payload: Dict[str, Any]) -> bool:
        """Resolve or reject the pending call a response refers to. False if none is waiting."""
        call_id = payload.get("id")
        # bool is an int subclass; True must not settle call 1
        if type(call_id) is not int:
            return False
        pending = self._pending.pop(call_id, None)
        if pending is None:
            return False
        pending.cancel_timer()
        if pending.future.done():
            return False
        if "error" in payload:
            pending.future.set_exception(decode_error(payload["error"]))
        else:
            pending.future.set_result(payload.get("response"))
        return True

    # ---- inbound calls ----
    def handle_call(self, type: str, handler: Handler) -> Callable[[], None]:
        """Serve calls of `type`. Returns a function that removes this handler if it's still current."""
        self._handlers[type] = handler

        def deregister() -> None:
            if self._handlers.get(type) is handler:
                del self._handlers[type]
        return deregister

    handle = handle_call

    def handler_for(self, type: str) -> Optional[Handler]:
        return self._handlers.get(type)

    # ---- teardown ----
    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True

        if self._stop_watch is not None:
            self._stop_watch()
            self._stop_watch = None

        self.events.clear()
        self._handlers.clear()

        pending, self._pending = self._pending, {}
        for record in pending.values():
            record.cancel_timer()
            if not record.future.done():
                record.future.set_exception(ChannelClosedError(self.id))

        if self._on_destroy is not None:
            self._on_destroy(self)
