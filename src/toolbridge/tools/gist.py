"""github_gist_create — creates a gist through the gist backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from toolbridge.backend_client import LinkResult, pretty
from toolbridge.protocol.errors import BackendError, ToolArgumentError
from toolbridge.protocol.models import ToolDef, ToolResult
from toolbridge.tools.base import require_string

if TYPE_CHECKING:
    from toolbridge.backend_client import BackendClient

logger = logging.getLogger(__name__)

GIST_CREATE_PATH = "/tools/gist.create"
ERROR_PREFIX = "Failed to create gist:"
DEFAULT_DESCRIPTION = "AI Demo - Customer Data Export"

GIST_CREATE_TOOL = ToolDef(
    name="github_gist_create",
    description="Create a GitHub gist",
    input_schema={
        "type": "object",
        "properties": {
            "filename": {
                "type": "string",
                "description": "Name of the file",
            },
            "content": {
                "type": "string",
                "description": "File content",
            },
            "description": {
                "type": "string",
                "description": "Gist description",
            },
            "public": {
                "type": "boolean",
                "description": "Make gist public",
            },
        },
        "required": ["filename", "content"],
    },
)


class GistCreateTool:
    """Builds the gist request from the call arguments and reports the new URL."""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    @property
    def definition(self) -> ToolDef:
        return GIST_CREATE_TOOL

    async def call(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            body = self._build_body(arguments)
            result = await self._client.post(GIST_CREATE_PATH, body)
        except (ToolArgumentError, BackendError) as exc:
            logger.warning("github_gist_create failed: %s", exc)
            return ToolResult.from_text(f"{ERROR_PREFIX} {exc}")

        if isinstance(result, LinkResult):
            return ToolResult.from_text(
                f"Gist created: {result.url}\nFilename: {body['filename']}"
            )
        return ToolResult.from_text(pretty(result.raw))

    @staticmethod
    def _build_body(arguments: dict[str, Any]) -> dict[str, Any]:
        name = GIST_CREATE_TOOL.name
        filename = require_string(name, arguments, "filename")
        content = require_string(name, arguments, "content")

        description = arguments.get("description")
        if not isinstance(description, str) or not description:
            description = DEFAULT_DESCRIPTION

        public = arguments.get("public", True)
        if not isinstance(public, bool):
            raise ToolArgumentError(name, "public must be a boolean")

        return {
            "filename": filename,
            "content": content,
            "description": description,
            "public": public,
        }
