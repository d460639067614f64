
import asyncio

from embedbridge import TargetRef, Window, use_embed, NoHandlerError

async def main():
    # A page at app.example embedding a frame served from widgets.example
    page = Window("https://app.example")
    frame_window = page.open_frame("https://widgets.example")
    frame = TargetRef()

    host = use_embed("host", "widget", transport=page, embedding=frame,
                     remote="https://widgets.example", timeout=2.0)
    guest = use_embed("guest", "widget", transport=frame_window,
                      remote="https://app.example", timeout=2.0)

    # The frame "loads"
    frame.value = frame_window

    guest.handle_call("sum", lambda numbers: sum(numbers))
    host.on("ready", lambda payload: print("Guest is ready:", payload))

    guest.emit("ready", {"version": 1})
    print("sum ->", await host.call("sum", [1, 2, 3]))

    try:
        await host.call("missing")
    except NoHandlerError as e:
        print("Expected failure:", e)

    host.destroy()
    guest.destroy()

if __name__ == "__main__":
    asyncio.run(main())
