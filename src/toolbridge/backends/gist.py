"""Gist backend — creates GitHub gists on behalf of the proxy.

``POST /tools/gist.create`` with ``{filename, content, public?, description?}``
answers ``{"ok": true, "url": ..., "id": ...}``, or ``{"ok": false, "error": ...}``
with status 400.  One GitHub call per request, no retry.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import httpx
from fastapi import FastAPI, Request
from pydantic import BaseModel, ValidationError
from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from toolbridge.config import GistServerSettings

logger = logging.getLogger(__name__)

USER_AGENT = "AI-Demo-Script"


class GistError(Exception):
    """GitHub refused the gist or could not be reached."""


class GistCreateRequest(BaseModel):
    """Body of ``POST /tools/gist.create``; every field has a demo default."""

    filename: str = "customer_summary.md"
    content: str = "# empty"
    public: bool = True
    description: str = "AI Demo - Customer Data Export"


class CreatedGist(BaseModel):
    url: str
    id: str


class GitHubGists:
    """Thin client for ``POST /gists`` on the GitHub REST API."""

    def __init__(
        self,
        token: str | None,
        *,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def create(self, request: GistCreateRequest) -> CreatedGist:
        """Create one gist holding a single file.

        Raises:
            GistError: On network failure or a non-2xx reply from GitHub.
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        payload = {
            "description": request.description,
            "public": request.public,
            "files": {request.filename: {"content": request.content}},
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(f"{self._api_url}/gists", headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise GistError(f"GitHub request failed: {exc}") from exc

        try:
            result: Any = response.json()
        except ValueError:
            result = response.text
        if not response.is_success:
            raise GistError(f"GitHub API error: {json.dumps(result)}")
        if not isinstance(result, dict) or "html_url" not in result:
            raise GistError(f"Unexpected GitHub reply: {json.dumps(result)}")
        return CreatedGist(url=result["html_url"], id=str(result.get("id", "")))


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"ok": False, "error": message})


def create_app(settings: GistServerSettings, gists: GitHubGists | None = None) -> FastAPI:
    """Build the gist service.  *gists* defaults to a client using ``settings``."""
    client = gists or GitHubGists(
        settings.github_token, api_url=settings.github_api_url, timeout=settings.timeout
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not settings.github_token:
            logger.warning("GITHUB_TOKEN not set. Gist creation will fail.")
        yield

    app = FastAPI(title="toolbridge-gist", lifespan=lifespan)

    @app.get("/")
    async def health() -> dict[str, str]:
        return {"service": "mcp-github", "status": "ok"}

    @app.post("/tools/gist.create")
    async def gist_create(request: Request) -> JSONResponse:
        raw = await request.body()
        try:
            body: Any = json.loads(raw) if raw.strip() else {}
        except ValueError:
            # Covers malformed JSON and bytes that are not valid UTF-8.
            return _error("request body must be JSON")
        try:
            gist_request = GistCreateRequest.model_validate(body or {})
        except ValidationError as exc:
            return _error(str(exc))

        visibility = "public" if gist_request.public else "private"
        logger.info("Creating %s gist: %s", visibility, gist_request.filename)
        try:
            created = await client.create(gist_request)
        except GistError as exc:
            logger.error("GitHub Error: %s", exc)
            return _error(str(exc))

        logger.info("Gist created: %s", created.url)
        return JSONResponse(content={"ok": True, "url": created.url, "id": created.id})

    return app


def run(settings: GistServerSettings) -> None:
    """Serve the gist backend with uvicorn until interrupted."""
    import uvicorn

    logger.info("Gist backend listening on %s:%s", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)
