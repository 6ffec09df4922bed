"""Tool protocol — the common interface for every tool the proxy exposes.

Each tool carries its static :class:`~toolbridge.protocol.models.ToolDef`
and an async ``call`` that turns an argument object into a
:class:`~toolbridge.protocol.models.ToolResult`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from toolbridge.protocol.errors import ToolArgumentError

if TYPE_CHECKING:
    from toolbridge.protocol.models import ToolDef, ToolResult


@runtime_checkable
class Tool(Protocol):
    """A named, schema-described operation."""

    @property
    def definition(self) -> ToolDef:
        """The descriptor advertised by ``tools/list``."""
        ...

    async def call(self, arguments: dict[str, Any]) -> ToolResult:
        """Run the tool and return its result."""
        ...


def require_string(tool: str, arguments: dict[str, Any], key: str) -> str:
    """Return ``arguments[key]`` if it is a non-empty string.

    Raises:
        ToolArgumentError: If the argument is absent, empty, or not a string.
    """
    value = arguments.get(key)
    if not isinstance(value, str) or not value:
        raise ToolArgumentError(tool, f"missing {key} parameter")
    return value
