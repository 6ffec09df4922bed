"""ProxyServer — reads frames from a byte stream and writes one response per request.

Each parsed request is dispatched as its own task, so a slow backend call
does not hold up the requests behind it.  Responses are written as soon as
they are ready, which means they can leave in a different order than the
requests arrived; callers correlate them by ``id``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Protocol

from toolbridge.protocol.errors import FramingError
from toolbridge.protocol.framing import StreamBuffer, parse_frame
from toolbridge.protocol.models import INTERNAL_ERROR, JsonRpcResponse

if TYPE_CHECKING:
    from toolbridge.protocol.dispatcher import MethodDispatcher

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class ByteReader(Protocol):
    async def read(self, n: int = -1) -> bytes: ...


class ByteWriter(Protocol):
    def write(self, data: bytes) -> None: ...
    async def drain(self) -> None: ...


class ProxyServer:
    """Runs the read → frame → dispatch → write loop for one stream.

    Usage::

        server = ProxyServer(dispatcher)
        await server.serve(reader, writer)     # returns at end of stream

    The server owns its :class:`StreamBuffer`; two servers never share one.
    """

    def __init__(self, dispatcher: MethodDispatcher) -> None:
        self._dispatcher = dispatcher
        self._buffer = StreamBuffer()
        self._write_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def buffer(self) -> StreamBuffer:
        return self._buffer

    async def serve(self, reader: ByteReader, writer: ByteWriter) -> None:
        """Serve until *reader* reaches end of stream, then finish in-flight calls."""
        while True:
            chunk = await reader.read(CHUNK_SIZE)
            if not chunk:
                break
            for frame in self._buffer.feed(chunk):
                self._schedule(frame, writer)

        remainder = self._buffer.flush()
        if remainder is not None:
            self._schedule(remainder, writer)

        if self._tasks:
            await asyncio.gather(*self._tasks)

    def _schedule(self, frame: str, writer: ByteWriter) -> None:
        if not frame.strip():
            return
        task = asyncio.create_task(self._handle(frame, writer))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _handle(self, frame: str, writer: ByteWriter) -> None:
        try:
            request = parse_frame(frame)
        except FramingError as exc:
            logger.warning("%s", exc)
            return

        try:
            response = await self._dispatcher.dispatch(request)
        except Exception:
            logger.exception("Unhandled error while dispatching %s", request.method)
            response = JsonRpcResponse.failure(request.id, INTERNAL_ERROR, "Internal error")

        if response is not None:
            await self._write(response, writer)

    async def _write(self, response: JsonRpcResponse, writer: ByteWriter) -> None:
        line = json.dumps(response.to_wire(), separators=(",", ":")) + "\n"
        async with self._write_lock:
            try:
                writer.write(line.encode())
                await writer.drain()
            except OSError as exc:
                # The peer closed its end; the remaining responses have nowhere to go.
                logger.warning("Dropping response for id %r: %s", response.id, exc)


async def open_stdio() -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Wrap the process's stdin and stdout in asyncio streams."""
    loop = asyncio.get_running_loop()

    reader = asyncio.StreamReader()
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)

    transport, protocol = await loop.connect_write_pipe(
        asyncio.streams.FlowControlMixin, sys.stdout
    )
    writer = asyncio.StreamWriter(transport, protocol, reader, loop)
    return reader, writer


async def serve_stdio(dispatcher: MethodDispatcher) -> None:
    """Serve *dispatcher* on stdin/stdout until stdin closes."""
    reader, writer = await open_stdio()
    logger.info("Tool proxy ready on stdio")
    try:
        await ProxyServer(dispatcher).serve(reader, writer)
    finally:
        writer.close()
