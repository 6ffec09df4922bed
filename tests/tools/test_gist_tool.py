"""Tests for the github_gist_create tool."""

from __future__ import annotations

import httpx
import pytest

from toolbridge.backend_client import BackendClient
from toolbridge.tools.gist import DEFAULT_DESCRIPTION, GistCreateTool


def _tool(handler: object) -> tuple[GistCreateTool, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)  # type: ignore[operator]

    client = BackendClient("http://gist", transport=httpx.MockTransport(record))
    return GistCreateTool(client), seen


class TestGistCreateTool:
    async def test_created_gist_reports_url_and_filename(self) -> None:
        tool, seen = _tool(
            lambda r: httpx.Response(200, json={"ok": True, "url": "https://gist.github.com/1", "id": "1"})
        )
        result = await tool.call({"filename": "a.md", "content": "# hi"})
        assert result.text == "Gist created: https://gist.github.com/1\nFilename: a.md"
        assert str(seen[0].url) == "http://gist/tools/gist.create"

    async def test_defaults_are_sent(self) -> None:
        import json

        tool, seen = _tool(lambda r: httpx.Response(200, json={"ok": True, "url": "u"}))
        await tool.call({"filename": "a.md", "content": "x"})
        assert json.loads(seen[0].content) == {
            "filename": "a.md",
            "content": "x",
            "description": DEFAULT_DESCRIPTION,
            "public": True,
        }

    async def test_explicit_description_and_visibility(self) -> None:
        import json

        tool, seen = _tool(lambda r: httpx.Response(200, json={"ok": True, "url": "u"}))
        await tool.call({"filename": "a", "content": "x", "description": "mine", "public": False})
        body = json.loads(seen[0].content)
        assert body["description"] == "mine"
        assert body["public"] is False

    async def test_reply_without_url_is_pretty_printed(self) -> None:
        tool, _ = _tool(lambda r: httpx.Response(200, json={"ok": True}))
        result = await tool.call({"filename": "a", "content": "x"})
        assert result.text == '{\n  "ok": true\n}'

    async def test_backend_400_is_failure_text(self) -> None:
        tool, _ = _tool(lambda r: httpx.Response(400, json={"ok": False, "error": "bad token"}))
        result = await tool.call({"filename": "a", "content": "x"})
        assert result.text.startswith("Failed to create gist:")
        assert "bad token" in result.text

    @pytest.mark.parametrize(
        "arguments",
        [{}, {"filename": "a"}, {"content": "x"}, {"filename": "", "content": "x"}],
    )
    async def test_missing_required_never_reaches_backend(self, arguments: dict[str, str]) -> None:
        tool, seen = _tool(lambda r: httpx.Response(200, json={}))
        result = await tool.call(arguments)
        assert seen == []
        assert result.text.startswith("Failed to create gist: missing")

    async def test_non_boolean_public_rejected(self) -> None:
        tool, seen = _tool(lambda r: httpx.Response(200, json={}))
        result = await tool.call({"filename": "a", "content": "x", "public": "yes"})
        assert seen == []
        assert result.text == "Failed to create gist: public must be a boolean"

    async def test_unreachable_backend_is_failure_text(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        tool, _ = _tool(refuse)
        result = await tool.call({"filename": "a", "content": "x"})
        assert result.text.startswith("Failed to create gist:")
        assert "connection refused" in result.text
