"""simple_echo — answers locally, used to smoke-test a client without backends."""

from __future__ import annotations

import logging
from typing import Any

from toolbridge.protocol.models import ToolDef, ToolResult

logger = logging.getLogger(__name__)

ECHO_TOOL = ToolDef(
    name="simple_echo",
    description="Echoes back the message you send",
    input_schema={
        "type": "object",
        "properties": {
            "message": {
                "type": "string",
                "description": "Message to echo back",
            },
        },
        "required": ["message"],
    },
)


class EchoTool:
    @property
    def definition(self) -> ToolDef:
        return ECHO_TOOL

    async def call(self, arguments: dict[str, Any]) -> ToolResult:
        logger.debug("simple_echo received %r", arguments)
        message = arguments.get("message")
        if message is None or message == "":
            return ToolResult.from_text("Echo: No message received")
        return ToolResult.from_text(f"Echo: {message}")
