"""Shared error types for the protocol layer."""

from __future__ import annotations


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class FramingError(ProtocolError):
    """A frame could not be parsed into a request message."""

    def __init__(self, frame: str, detail: str = "") -> None:
        self.frame = frame
        self.detail = detail
        super().__init__(f"Unparseable frame: {frame[:200]}" + (f" ({detail})" if detail else ""))


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolArgumentError(ProtocolError):
    """A required tool argument is missing or has the wrong type."""

    def __init__(self, tool: str, detail: str) -> None:
        self.tool = tool
        self.detail = detail
        super().__init__(detail)


class BackendError(ProtocolError):
    """A backend call failed: network, timeout, non-2xx status, or bad JSON."""

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.detail = detail
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            prefix = f"HTTP {status_code} {reason}".rstrip()
            super().__init__(f"{prefix}: {detail}" if detail else prefix)
        else:
            super().__init__(detail)
