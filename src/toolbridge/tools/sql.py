"""sql_query — runs caller-supplied SQL on the SQL backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from toolbridge.backend_client import RowsResult, pretty
from toolbridge.protocol.errors import BackendError, ToolArgumentError
from toolbridge.protocol.models import ToolDef, ToolResult
from toolbridge.tools.base import require_string

if TYPE_CHECKING:
    from toolbridge.backend_client import BackendClient

logger = logging.getLogger(__name__)

SQL_QUERY_PATH = "/tools/sql.query"
ERROR_PREFIX = "SQL Error:"

SQL_QUERY_TOOL = ToolDef(
    name="sql_query",
    description="Execute SQL queries against the corporate database",
    input_schema={
        "type": "object",
        "properties": {
            "sql": {
                "type": "string",
                "description": "SQL query to execute",
            },
        },
        "required": ["sql"],
    },
)


class SqlQueryTool:
    """Forwards ``sql`` to the backend and renders the rows as text.

    Failures never raise: a missing query, an unreachable backend, or a
    database error all come back as a ``SQL Error:`` text block.
    """

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    @property
    def definition(self) -> ToolDef:
        return SQL_QUERY_TOOL

    async def call(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            sql = require_string(SQL_QUERY_TOOL.name, arguments, "sql")
            result = await self._client.post(SQL_QUERY_PATH, {"sql": sql})
        except (ToolArgumentError, BackendError) as exc:
            logger.warning("sql_query failed: %s", exc)
            return ToolResult.from_text(f"{ERROR_PREFIX} {exc}")

        if isinstance(result, RowsResult):
            return ToolResult.from_text(f"Found {len(result.rows)} rows:\n{pretty(result.rows)}")
        return ToolResult.from_text(pretty(result.raw))
