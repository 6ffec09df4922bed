"""``toolbridge sql-server`` / ``toolbridge gist-server`` — run the HTTP backends."""

from __future__ import annotations

import click

from toolbridge.cli_commands._output import load_or_exit
from toolbridge.utils.log import configure_logging


@click.command("sql-server")
@click.option("--host", default=None, help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to listen on (default 3001).")
@click.option("--database-url", default=None, help="PostgreSQL connection string.")
@click.option("--config", "config", type=click.Path(exists=True), default=None, help="YAML config file.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def sql_server(
    host: str | None,
    port: int | None,
    database_url: str | None,
    config: str | None,
    verbose: bool,
) -> None:
    """Run the SQL query backend."""
    from toolbridge.backends import sql

    configure_logging(verbose=verbose)
    settings = load_or_exit(config).sql
    if host:
        settings.host = host
    if port is not None:
        settings.port = port
    if database_url:
        settings.database_url = database_url
    sql.run(settings)


@click.command("gist-server")
@click.option("--host", default=None, help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to listen on (default 3002).")
@click.option("--config", "config", type=click.Path(exists=True), default=None, help="YAML config file.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def gist_server(host: str | None, port: int | None, config: str | None, verbose: bool) -> None:
    """Run the GitHub gist backend (reads GITHUB_TOKEN)."""
    from toolbridge.backends import gist

    configure_logging(verbose=verbose)
    settings = load_or_exit(config).gist
    if host:
        settings.host = host
    if port is not None:
        settings.port = port
    gist.run(settings)
