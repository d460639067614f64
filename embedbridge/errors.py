from __future__ import annotations


class EmbedError(Exception):
    """Base class for every error raised by embedbridge."""


class TargetUnavailableError(EmbedError):
    def __init__(self, message: str = "Target Window is unloaded"):
        super().__init__(message)


class CallTimeoutError(EmbedError, TimeoutError):
    def __init__(self, message: str = "Timed out"):
        super().__init__(message)


class ChannelClosedError(EmbedError):
    def __init__(self, channel_id: str):
        super().__init__(f"Channel {channel_id!r} was destroyed")
        self.channel_id = channel_id


class RemoteCallError(EmbedError):
    """
    A call failed on the remote side. `name` is the remote exception's class
    name, str(err) its message.
    """

    def __init__(self, message: str, name: str = "Error"):
        super().__init__(message)
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, name={self.name!r})"


class NoHandlerError(RemoteCallError):
    def __init__(self, call_type: str):
        super().__init__(f'No Handler for Event "{call_type}"', name="NoHandlerError")
        self.call_type = call_type
