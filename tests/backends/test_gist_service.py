"""Tests for the gist backend service and its GitHub client."""

from __future__ import annotations

import json
import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from toolbridge.backends.gist import GistCreateRequest, GistError, GitHubGists, create_app
from toolbridge.config import GistServerSettings


def _github(status: int, payload: object, seen: list[httpx.Request] | None = None) -> GitHubGists:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload)

    return GitHubGists(
        "tok",
        api_url="https://github.test/api/",
        transport=httpx.MockTransport(handler),
    )


class TestGitHubGists:
    async def test_create_sends_expected_request(self) -> None:
        seen: list[httpx.Request] = []
        gists = _github(201, {"html_url": "https://gist.github.com/abc", "id": "abc"}, seen)

        created = await gists.create(GistCreateRequest(filename="a.md", content="# a"))

        assert created.url == "https://gist.github.com/abc"
        assert created.id == "abc"
        request = seen[0]
        assert str(request.url) == "https://github.test/api/gists"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.headers["User-Agent"] == "AI-Demo-Script"
        assert json.loads(request.content) == {
            "description": "AI Demo - Customer Data Export",
            "public": True,
            "files": {"a.md": {"content": "# a"}},
        }

    async def test_github_error_raises(self) -> None:
        gists = _github(401, {"message": "Bad credentials"})
        with pytest.raises(GistError, match="GitHub API error: .*Bad credentials"):
            await gists.create(GistCreateRequest())

    async def test_no_token_sends_no_authorization(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"html_url": "u", "id": 1})

        gists = GitHubGists(None, transport=httpx.MockTransport(handler))
        created = await gists.create(GistCreateRequest())
        assert "Authorization" not in seen[0].headers
        assert created.id == "1"


class TestGistService:
    def test_health(self) -> None:
        app = create_app(GistServerSettings(github_token="t"), gists=_github(201, {}))
        with TestClient(app) as client:
            assert client.get("/").json() == {"service": "mcp-github", "status": "ok"}

    def test_create_success(self) -> None:
        gists = _github(201, {"html_url": "https://gist.github.com/x", "id": "x"})
        app = create_app(GistServerSettings(github_token="t"), gists=gists)
        with TestClient(app) as client:
            response = client.post(
                "/tools/gist.create", json={"filename": "a.md", "content": "hi", "public": False}
            )
        assert response.status_code == 200
        assert response.json() == {"ok": True, "url": "https://gist.github.com/x", "id": "x"}

    def test_empty_body_uses_defaults(self) -> None:
        seen: list[httpx.Request] = []
        gists = _github(201, {"html_url": "u", "id": "1"}, seen)
        app = create_app(GistServerSettings(github_token="t"), gists=gists)
        with TestClient(app) as client:
            client.post("/tools/gist.create", json={})
        assert json.loads(seen[0].content)["files"] == {"customer_summary.md": {"content": "# empty"}}

    def test_bodyless_request_uses_defaults(self) -> None:
        seen: list[httpx.Request] = []
        gists = _github(201, {"html_url": "u", "id": "1"}, seen)
        app = create_app(GistServerSettings(github_token="t"), gists=gists)
        with TestClient(app) as client:
            response = client.post("/tools/gist.create")
        assert response.status_code == 200
        assert len(seen) == 1

    @pytest.mark.parametrize(
        "content",
        [b"{not json", b'{"filename": "\xff.md"}'],
        ids=["malformed", "not-utf8"],
    )
    def test_undecodable_body_is_400_without_calling_github(self, content: bytes) -> None:
        seen: list[httpx.Request] = []
        app = create_app(GistServerSettings(github_token="t"), gists=_github(201, {}, seen))
        with TestClient(app) as client:
            response = client.post(
                "/tools/gist.create",
                content=content,
                headers={"Content-Type": "application/json"},
            )
        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "request body must be JSON"}
        assert seen == []

    def test_github_failure_is_400(self) -> None:
        gists = _github(401, {"message": "bad token"})
        app = create_app(GistServerSettings(github_token="t"), gists=gists)
        with TestClient(app) as client:
            response = client.post("/tools/gist.create", json={"filename": "a", "content": "b"})
        assert response.status_code == 400
        body = response.json()
        assert body["ok"] is False
        assert "bad token" in body["error"]

    def test_invalid_field_type_is_400(self) -> None:
        app = create_app(GistServerSettings(github_token="t"), gists=_github(201, {}))
        with TestClient(app) as client:
            response = client.post("/tools/gist.create", json={"filename": ["a"]})
        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_missing_token_warns_on_startup(self, caplog: pytest.LogCaptureFixture) -> None:
        app = create_app(GistServerSettings(), gists=_github(201, {}))
        with caplog.at_level(logging.WARNING, logger="toolbridge.backends.gist"):
            with TestClient(app):
                pass
        assert "GITHUB_TOKEN not set" in caplog.text
