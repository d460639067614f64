"""In-memory transport, codecs and the outbound origin hint."""

import pytest

from conftest import GUEST_ORIGIN, HOST_ORIGIN, settle
from embedbridge import TargetRef, Window, available_codecs, get_codec, register_codec, use_embed
from embedbridge.codecs import JSONCodec, MsgPackCodec


@pytest.mark.asyncio
async def test_window_delivers_a_copy_with_origin_and_source(page, frame_window):
    seen = []
    frame_window.on_message(seen.append)
    data = {"id": "x", "type": "t", "payload": {"list": [1, 2]}}

    page.send(frame_window, data)
    await settle()

    assert len(seen) == 1
    assert seen[0].data == data and seen[0].data is not data
    assert seen[0].origin == HOST_ORIGIN
    assert seen[0].source is page


@pytest.mark.asyncio
async def test_window_preserves_send_order(page, frame_window):
    seen = []
    frame_window.on_message(lambda msg: seen.append(msg.data))
    for n in range(5):
        page.send(frame_window, n)
    await settle()
    assert seen == [0, 1, 2, 3, 4]


@pytest.mark.asyncio
async def test_target_origin_scopes_delivery(page, frame_window):
    seen = []
    frame_window.on_message(lambda msg: seen.append(msg.data))

    page.send(frame_window, "wrong", "https://elsewhere.example")
    page.send(frame_window, "exact", GUEST_ORIGIN)
    page.send(frame_window, "with-path", GUEST_ORIGIN + "/embed/index.html")
    page.send(frame_window, "any", "*")
    await settle()

    assert seen == ["exact", "with-path", "any"]


@pytest.mark.asyncio
async def test_unencodable_payload_fails_at_send(pair):
    host, _guest = pair
    with pytest.raises(TypeError):
        host.emit("bad", {"when": object()})


@pytest.mark.asyncio
async def test_msgpack_windows_round_trip_calls():
    page = Window(HOST_ORIGIN, codec="msgpack")
    child = page.open_frame(GUEST_ORIGIN)
    assert child.codec.name == "msgpack"

    host = use_embed("host", "bin", transport=page, embedding=TargetRef(child))
    guest = use_embed("guest", "bin", transport=child)
    guest.handle_call("blob", lambda m: {"size": len(m["data"]), "data": m["data"][::-1]})

    result = await host.call("blob", {"data": b"\x00\x01\x02"})
    assert result == {"size": 3, "data": b"\x02\x01\x00"}

    host.destroy()
    guest.destroy()


@pytest.mark.asyncio
async def test_host_remote_filter_is_used_as_target_origin(page, frame_window):
    received = []
    guest = use_embed("guest", "scoped", transport=frame_window)
    guest.on("hello", received.append)

    wrong = use_embed("host", "scoped", transport=page, embedding=TargetRef(frame_window),
                      remote="https://not-the-frame.example")
    wrong.emit("hello", 1)
    await settle()
    assert received == []
    wrong.destroy()

    right = use_embed("host", "scoped", transport=page, embedding=TargetRef(frame_window),
                      remote=GUEST_ORIGIN)
    right.emit("hello", 2)
    await settle()
    assert received == [2]

    right.destroy()
    guest.destroy()


def test_origin_hint_is_wildcard_for_opaque_targets(page):
    sandboxed = page.open_frame()  # origin "null"
    host = use_embed("host", "sandbox", transport=page, embedding=TargetRef(sandboxed),
                     remote=GUEST_ORIGIN)
    assert host.origin_hint() == "*"
    host.destroy()


def test_codec_lookup():
    assert isinstance(get_codec("json"), JSONCodec)
    assert isinstance(get_codec("msgpack"), MsgPackCodec)
    assert {"json", "msgpack"} <= set(available_codecs())
    with pytest.raises(ValueError, match="Unknown codec: xml"):
        get_codec("xml")
    with pytest.raises(ValueError):
        Window(HOST_ORIGIN, codec="xml")

    custom = JSONCodec()
    assert Window(HOST_ORIGIN, codec=custom).codec is custom


def test_registered_codec_is_selectable_by_name():
    class CompactJSON(JSONCodec):
        name = "compact-json"

    register_codec(CompactJSON())
    assert Window(HOST_ORIGIN, codec="compact-json").codec.name == "compact-json"


def test_json_codec_refuses_nan(pair):
    host, _guest = pair
    with pytest.raises(ValueError):
        host.emit("reading", {"value": float("nan")})


@pytest.mark.asyncio
async def test_parent_and_child_with_different_codecs_interoperate():
    page = Window(HOST_ORIGIN, codec="json")
    child = page.open_frame(GUEST_ORIGIN, codec="msgpack")
    assert page.codec.name == "json" and child.codec.name == "msgpack"

    host = use_embed("host", "mixed", transport=page, embedding=TargetRef(child))
    guest = use_embed("guest", "mixed", transport=child)
    guest.handle_call("upper", lambda m: m["text"].upper())
    host.handle_call("count", lambda m: len(m))
    events = []
    host.on("loaded", events.append)

    assert await host.call("upper", {"text": "abc"}) == "ABC"
    assert await guest.call("count", [1, 2, 3]) == 3
    guest.emit("loaded", {"ok": True})
    await settle()
    assert events == [{"ok": True}]

    host.destroy()
    guest.destroy()
