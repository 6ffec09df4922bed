"""Tests for the sql_query tool."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from toolbridge.backend_client import BackendClient, OpaqueResult, RowsResult
from toolbridge.protocol.errors import BackendError
from toolbridge.tools.sql import SQL_QUERY_PATH, SqlQueryTool


def _tool(result: object = None, error: Exception | None = None) -> tuple[SqlQueryTool, AsyncMock]:
    client = BackendClient("http://sql")
    post = AsyncMock(return_value=result, side_effect=error)
    client.post = post  # type: ignore[method-assign]
    return SqlQueryTool(client), post


class TestSqlQueryTool:
    async def test_rows_are_counted_and_pretty_printed(self) -> None:
        tool, post = _tool(RowsResult(rows=[{"?": 1}], raw={"ok": True, "rows": [{"?": 1}]}))
        result = await tool.call({"sql": "SELECT 1"})
        post.assert_awaited_once_with(SQL_QUERY_PATH, {"sql": "SELECT 1"})
        assert result.text == 'Found 1 rows:\n[\n  {\n    "?": 1\n  }\n]'

    async def test_non_row_result_is_pretty_printed_whole(self) -> None:
        tool, _ = _tool(OpaqueResult(raw={"ok": True, "note": "no rows key"}))
        result = await tool.call({"sql": "VACUUM"})
        assert result.text == '{\n  "ok": true,\n  "note": "no rows key"\n}'

    @pytest.mark.parametrize("arguments", [{}, {"sql": ""}, {"sql": 42}])
    async def test_missing_query_never_reaches_backend(self, arguments: dict[str, object]) -> None:
        tool, post = _tool()
        result = await tool.call(arguments)
        post.assert_not_awaited()
        assert result.text == "SQL Error: missing sql parameter"

    async def test_backend_failure_is_text(self) -> None:
        tool, _ = _tool(
            error=BackendError('relation "nope" does not exist', status_code=400, reason="Bad Request")
        )
        result = await tool.call({"sql": "SELECT * FROM nope"})
        assert result.text.startswith("SQL Error:")
        assert 'relation "nope" does not exist' in result.text
        assert len(result.content) == 1
        assert result.content[0].type == "text"

    def test_definition(self) -> None:
        tool, _ = _tool()
        assert tool.definition.name == "sql_query"
        assert tool.definition.input_schema["required"] == ["sql"]
