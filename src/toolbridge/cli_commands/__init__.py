"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from toolbridge.cli_commands.backends import gist_server, sql_server
    from toolbridge.cli_commands.proxy import proxy
    from toolbridge.cli_commands.tools import tools

    cli.add_command(proxy)
    cli.add_command(sql_server)
    cli.add_command(gist_server)
    cli.add_command(tools)
