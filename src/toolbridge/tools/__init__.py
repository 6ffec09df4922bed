"""Tool layer — the tools the proxy exposes and the registry that routes to them."""

from toolbridge.tools.base import Tool, require_string
from toolbridge.tools.echo import EchoTool
from toolbridge.tools.gist import GistCreateTool
from toolbridge.tools.profiles import PROFILES, ServerInfo, build_registry
from toolbridge.tools.registry import ToolRegistry
from toolbridge.tools.sql import SqlQueryTool

__all__ = [
    "PROFILES",
    "EchoTool",
    "GistCreateTool",
    "ServerInfo",
    "SqlQueryTool",
    "Tool",
    "ToolRegistry",
    "build_registry",
    "require_string",
]
