from __future__ import annotations
import asyncio
import inspect
import logging
from typing import Any, Dict, Set

from .channel import Channel
from .errors import EmbedError, NoHandlerError
from .message import Envelope, InboundMessage, Mode, MsgType, Origin
from .registry import ChannelRegistry
from .wire import is_call, is_response, response_payload, unpack_envelope

logger = logging.getLogger(__name__)


class Dispatcher:

    # Notes:
    # - One instance is installed on the transport while any channel exists
    # - Unknown channel, foreign origin or wrong source -> silent drop
    # - CALL: run the channel's handler, always answer with exactly one RESPONSE
    # - RESPONSE: settle the matching pending call; late/unknown ids are ignored
    # - Anything else is an event for the channel's listeners

    def __init__(self, registry: ChannelRegistry):
        self.registry = registry
        self._tasks: Set[asyncio.Task] = set()

    def __call__(self, msg: InboundMessage) -> None:
        env = unpack_envelope(msg.data)
        if env is None:
            return
        channel = self.registry.get(env.id)
        if channel is None:
            return
        if not self.accepts(channel, msg):
            logger.debug("Dropped %r for channel %r from origin %r", env.type, env.id, msg.origin)
            return

        if env.type == MsgType.CALL:
            if is_call(env):
                self._spawn(self.run_call(channel, env.payload))
            return

        if env.type == MsgType.RESPONSE:
            if is_response(env):
                channel.settle(env.payload)
            return

        self._emit(channel, env)

    @staticmethod
    def accepts(channel: Channel, msg: InboundMessage) -> bool:
        """Origin filter (skipped for opaque origins) and, for hosts, the source check."""
        remote = channel.remote or Origin.ANY
        if (remote != Origin.ANY
                and msg.origin != Origin.OPAQUE
                and not str(msg.origin).startswith(remote)):
            return False
        if channel.mode == Mode.HOST and (channel.target is None or msg.source is not channel.target):
            return False
        return True

    async def run_call(self, channel: Channel, payload: Dict[str, Any]) -> None:
        call_type = payload["type"]
        handler = channel.handler_for(call_type)
        try:
            if handler is None:
                raise NoHandlerError(call_type)
            result = handler(payload.get("message"))
            if inspect.isawaitable(result):
                result = await result
        except Exception as ex:
            logger.debug("Call %r on channel %r failed", call_type, channel.id, exc_info=True)
            reply = response_payload(payload["id"], error=ex)
        else:
            # A returned exception is an error result, not a value
            if isinstance(result, BaseException):
                reply = response_payload(payload["id"], error=result)
            else:
                reply = response_payload(payload["id"], response=result)

        try:
            channel.emit(MsgType.RESPONSE, reply)
        except EmbedError as ex:
            logger.warning("Could not answer %r on channel %r: %s", call_type, channel.id, ex)
        except (TypeError, ValueError) as ex:
            # The codec rejected the result; the caller still gets exactly one answer
            logger.warning("Result of %r on channel %r is not encodable: %s", call_type, channel.id, ex)
            channel.emit(MsgType.RESPONSE, response_payload(payload["id"], error=ex))

    def _emit(self, channel: Channel, env: Envelope) -> None:
        try:
            channel.events.emit(env.type, env.payload)
        except Exception:
            logger.exception("Listener for %r on channel %r failed", env.type, channel.id)

    def _spawn(self, coro) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def active_calls(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for inbound calls that are still running."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
