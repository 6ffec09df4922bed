"""MethodDispatcher — routes one request to its handler and builds the response."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from toolbridge.protocol.errors import ToolNotFoundError
from toolbridge.protocol.models import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PROTOCOL_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
)
from toolbridge.utils.telemetry import SPAN_DISPATCH, get_tracer, request_attributes

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from toolbridge.tools.profiles import ServerInfo
    from toolbridge.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class MethodDispatcher:
    """Maps each JSON-RPC method to a handler.

    ``initialize``, ``tools/list``, ``prompts/list``, ``resources/list`` and
    ``tools/call`` each produce exactly one response.  Any other method is
    dropped without a response, unless *strict* is set, in which case a
    request that carries an ``id`` gets a ``-32601`` error.  Notifications
    (no ``id`` key at all) are never answered in strict mode.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        server_info: ServerInfo,
        *,
        strict: bool = False,
    ) -> None:
        self._registry = registry
        self._server_info = server_info
        self._strict = strict
        self._handlers: dict[str, Callable[[JsonRpcRequest], Awaitable[JsonRpcResponse]]] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "prompts/list": self._list_prompts,
            "resources/list": self._list_resources,
            "tools/call": self._call_tool,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        """Handle *request*; ``None`` means no response is written."""
        handler = self._handlers.get(request.method)
        if handler is None:
            return self._unrecognized(request)

        with _tracer.start_as_current_span(
            SPAN_DISPATCH, attributes=request_attributes(request.method, request.id)
        ):
            return await handler(request)

    def _unrecognized(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        if self._strict and "id" in request.model_fields_set:
            return JsonRpcResponse.failure(
                request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )
        logger.debug("Dropping unrecognized method %s", request.method)
        return None

    async def _initialize(self, request: JsonRpcRequest) -> JsonRpcResponse:
        return JsonRpcResponse.success(
            request.id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": self._server_info.model_dump(),
            },
        )

    async def _list_tools(self, request: JsonRpcRequest) -> JsonRpcResponse:
        tools = [definition.to_wire() for definition in self._registry.definitions()]
        return JsonRpcResponse.success(request.id, {"tools": tools})

    async def _list_prompts(self, request: JsonRpcRequest) -> JsonRpcResponse:
        return JsonRpcResponse.success(request.id, {"prompts": []})

    async def _list_resources(self, request: JsonRpcRequest) -> JsonRpcResponse:
        return JsonRpcResponse.success(request.id, {"resources": []})

    async def _call_tool(self, request: JsonRpcRequest) -> JsonRpcResponse:
        name = request.params.get("name")
        if not isinstance(name, str) or not name:
            return JsonRpcResponse.failure(request.id, INVALID_PARAMS, "Missing tool name")

        arguments: Any = request.params.get("arguments")
        if not isinstance(arguments, dict):
            arguments = {}

        try:
            result = await self._registry.execute(name, arguments)
        except ToolNotFoundError as exc:
            return JsonRpcResponse.failure(request.id, INVALID_PARAMS, str(exc))
        return JsonRpcResponse.success(request.id, result.model_dump())
