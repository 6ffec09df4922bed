"""ToolRegistry — keeps tools in declaration order and routes calls by name."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from toolbridge.protocol.errors import ToolNotFoundError
from toolbridge.utils.telemetry import ATTR_TOOL_NAME, SPAN_TOOL_CALL, get_tracer

if TYPE_CHECKING:
    from toolbridge.protocol.models import ToolDef, ToolResult
    from toolbridge.tools.base import Tool

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ToolRegistry:
    """Maintains a name-to-tool map and dispatches tool calls.

    Usage::

        registry = ToolRegistry()
        registry.register(SqlQueryTool(sql_client))
        registry.register(GistCreateTool(gist_client))

        registry.definitions()                        # declaration order
        result = await registry.execute("sql_query", {"sql": "SELECT 1"})
    """

    def __init__(self, tools: list[Tool] | None = None) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """Add *tool*; a later tool with the same name replaces the earlier one."""
        self._tools[tool.definition.name] = tool

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def definitions(self) -> list[ToolDef]:
        """Return every tool descriptor, in registration order."""
        return [tool.definition for tool in self._tools.values()]

    async def execute(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Route a single tool call to its tool."""
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        logger.debug("Calling tool %s", name)
        with _tracer.start_as_current_span(SPAN_TOOL_CALL) as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            return await tool.call(arguments)
