"""Shared fixtures: a page at app.example embedding a frame from widgets.example."""

import asyncio

import pytest

from embedbridge import TargetRef, Window, use_embed

HOST_ORIGIN = "https://app.example"
GUEST_ORIGIN = "https://widgets.example"


async def settle(turns: int = 10) -> None:
    """Let queued deliveries and handler tasks run."""
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.fixture
def page():
    return Window(HOST_ORIGIN)


@pytest.fixture
def frame_window(page):
    return page.open_frame(GUEST_ORIGIN)


@pytest.fixture
def frame(frame_window):
    return TargetRef(frame_window)


@pytest.fixture
def pair(page, frame_window, frame):
    host = use_embed("host", "demo", transport=page, embedding=frame, remote=GUEST_ORIGIN)
    guest = use_embed("guest", "demo", transport=frame_window, remote=HOST_ORIGIN)
    yield host, guest
    host.destroy()
    guest.destroy()
