"""Server profiles — which tools a proxy exposes and how it names itself."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

from toolbridge.backend_client import BackendClient
from toolbridge.tools.echo import EchoTool
from toolbridge.tools.gist import GistCreateTool
from toolbridge.tools.registry import ToolRegistry
from toolbridge.tools.sql import SqlQueryTool

if TYPE_CHECKING:
    import httpx

    from toolbridge.config import ProxySettings

Profile = Literal["demo", "echo"]


class ServerInfo(BaseModel):
    """The ``serverInfo`` block of the ``initialize`` reply."""

    model_config = {"frozen": True}

    name: str
    version: str = "1.0.0"


PROFILES: dict[str, ServerInfo] = {
    "demo": ServerInfo(name="ai-demo"),
    "echo": ServerInfo(name="test_mcp"),
}


def build_registry(
    profile: Profile,
    settings: ProxySettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ToolRegistry:
    """Create the tool registry for *profile*.

    ``demo`` exposes ``sql_query`` then ``github_gist_create``; ``echo``
    exposes only ``simple_echo``.
    """
    if profile == "echo":
        return ToolRegistry([EchoTool()])
    if profile != "demo":
        msg = f"Unknown profile: {profile}"
        raise ValueError(msg)

    sql_client = BackendClient(
        settings.sql_backend_url, timeout=settings.timeout, transport=transport
    )
    gist_client = BackendClient(
        settings.gist_backend_url, timeout=settings.timeout, transport=transport
    )
    return ToolRegistry([SqlQueryTool(sql_client), GistCreateTool(gist_client)])
