"""``toolbridge tools`` — show the tools a proxy profile exposes."""

from __future__ import annotations

import json

import click

from toolbridge.cli_commands._output import print_tools_table


@click.command()
@click.option(
    "--profile",
    type=click.Choice(["demo", "echo"]),
    default="demo",
    help="Profile whose tools to list.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON on stdout.")
def tools(profile: str, as_json: bool) -> None:
    """List the tool descriptors of a profile."""
    from toolbridge.config import ProxySettings
    from toolbridge.tools.profiles import build_registry

    definitions = build_registry(profile, ProxySettings()).definitions()  # type: ignore[arg-type]

    if as_json:
        click.echo(json.dumps({"tools": [d.to_wire() for d in definitions]}, indent=2))
        return

    print_tools_table(definitions)
