"""Protocol models — JSON-RPC 2.0 messages, tool descriptors, and tool results.

Implements the message format spoken on the proxy's stream: the
``initialize`` handshake, tool discovery (``tools/list``), the empty
``prompts/list`` / ``resources/list`` placeholders, and tool execution
(``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

PROTOCOL_VERSION = "2025-06-18"
JSONRPC_VERSION = "2.0"

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Any JSON value; the caller's id is echoed back without coercion.
RequestId = Any

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``id`` is kept exactly as the caller sent it; a missing id is ``None``
    and still comes back as ``"id": null`` in the response.
    """

    jsonrpc: str = JSONRPC_VERSION
    method: str
    id: RequestId = None
    params: dict[str, Any] = {}

    @field_validator("params", mode="before")
    @classmethod
    def _object_params(cls, value: Any) -> Any:
        # Positional (array) or null params carry nothing the handlers read.
        return value if isinstance(value, dict) else {}


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message carrying a result or an error, never both."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the stream, keeping ``id`` even when it is null."""
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            wire["error"] = self.error.model_dump(exclude_none=True)
        else:
            wire["result"] = self.result if self.result is not None else {}
        return wire


# ---------------------------------------------------------------------------
# Tool payloads
# ---------------------------------------------------------------------------


class ToolDef(BaseModel):
    """A tool descriptor as returned by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The payload of a ``tools/call`` response."""

    content: list[TextContent] = []

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        """Create a ToolResult with a single text content block."""
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.content)
