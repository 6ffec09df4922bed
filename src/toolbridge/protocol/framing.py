"""Stream framing — turns chunked bytes into newline-delimited frames.

A :class:`StreamBuffer` is owned by exactly one stream.  Each call to
:meth:`StreamBuffer.feed` appends a chunk and lazily yields every complete
line, in arrival order.  Bytes after the last newline stay buffered until a
later chunk completes them, so the result is the same however the stream
happened to be split::

    buffer = StreamBuffer()
    list(buffer.feed(b'{"id":1,"method":"tools/l'))   # []
    list(buffer.feed(b'ist"}\\n'))                      # ['{"id":1,"method":"tools/list"}']
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from toolbridge.protocol.errors import FramingError
from toolbridge.protocol.models import JsonRpcRequest

NEWLINE = b"\n"


class StreamBuffer:
    """Accumulates bytes and splits them on newline boundaries.

    The buffer always holds exactly the bytes received after the last line
    that was handed out.  Lines are removed one at a time as the generator
    advances, so a partially consumed :meth:`feed` leaves the unread lines
    in place for the next call.
    """

    def __init__(self) -> None:
        self._pending = bytearray()

    @property
    def pending(self) -> bytes:
        """Bytes received but not yet terminated by a newline (or not yet yielded)."""
        return bytes(self._pending)

    def feed(self, chunk: bytes) -> Iterator[str]:
        """Append *chunk* and yield each complete line it finishes."""
        self._pending.extend(chunk)
        return self._drain()

    def flush(self) -> str | None:
        """Return and clear the unterminated remainder, if any."""
        if not self._pending:
            return None
        line = self._pending.decode("utf-8", errors="replace")
        self._pending.clear()
        return line

    def _drain(self) -> Iterator[str]:
        while True:
            index = self._pending.find(NEWLINE)
            if index < 0:
                return
            raw = bytes(self._pending[:index])
            del self._pending[: index + 1]
            yield raw.decode("utf-8", errors="replace")


def parse_frame(frame: str) -> JsonRpcRequest:
    """Parse one frame into a request.

    Raises:
        FramingError: If the frame is not JSON, not an object, or lacks a method.
    """
    try:
        data: Any = json.loads(frame)
    except json.JSONDecodeError as exc:
        raise FramingError(frame, str(exc)) from exc

    if not isinstance(data, dict):
        raise FramingError(frame, "expected a JSON object")

    try:
        return JsonRpcRequest.model_validate(data)
    except ValidationError as exc:
        raise FramingError(frame, f"{exc.error_count()} validation error(s)") from exc
