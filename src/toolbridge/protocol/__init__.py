"""Protocol layer — framing, JSON-RPC models, dispatch, and the stream server."""

from toolbridge.protocol.dispatcher import MethodDispatcher
from toolbridge.protocol.errors import (
    BackendError,
    FramingError,
    ProtocolError,
    ToolArgumentError,
    ToolNotFoundError,
)
from toolbridge.protocol.framing import StreamBuffer
from toolbridge.protocol.server import ProxyServer

__all__ = [
    "BackendError",
    "FramingError",
    "MethodDispatcher",
    "ProtocolError",
    "ProxyServer",
    "StreamBuffer",
    "ToolArgumentError",
    "ToolNotFoundError",
]
