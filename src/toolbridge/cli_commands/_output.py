"""Shared CLI helpers and output formatters.

Everything goes to stderr: when the proxy runs, stdout carries protocol frames.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from toolbridge.config import ConfigError, Settings, load_settings

if TYPE_CHECKING:
    from toolbridge.protocol.models import ToolDef

console = Console(stderr=True)


def load_or_exit(config: str | None) -> Settings:
    """Load settings, printing the error and exiting with status 1 on failure."""
    try:
        return load_settings(Path(config) if config else None)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


def print_tools_table(tools: list[ToolDef]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = tool.input_schema.get("required", [])
        table.add_row(
            tool.name,
            _truncate(tool.description),
            ", ".join(required) or "-",
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
