"""``toolbridge proxy`` — serve the tool proxy on stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from toolbridge.cli_commands._output import console, load_or_exit
from toolbridge.utils.log import configure_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--profile",
    type=click.Choice(["demo", "echo"]),
    default="demo",
    help="Tool set to expose: demo (sql + gist) or echo (test tool).",
)
@click.option("--strict", is_flag=True, help="Answer unknown methods with a -32601 error.")
@click.option("--sql-url", default=None, help="SQL backend base URL.")
@click.option("--gist-url", default=None, help="Gist backend base URL.")
@click.option("--timeout", type=float, default=None, help="Backend request timeout in seconds.")
@click.option("--config", "config", type=click.Path(exists=True), default=None, help="YAML config file.")
@click.option("--telemetry", is_flag=True, help="Export trace spans to stderr.")
@click.option("--otlp-endpoint", default=None, help="Also export spans via OTLP/gRPC.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def proxy(
    profile: str,
    strict: bool,
    sql_url: str | None,
    gist_url: str | None,
    timeout: float | None,
    config: str | None,
    telemetry: bool,
    otlp_endpoint: str | None,
    verbose: bool,
) -> None:
    """Serve newline-delimited JSON-RPC on stdin/stdout."""
    from toolbridge.protocol.dispatcher import MethodDispatcher
    from toolbridge.protocol.server import serve_stdio
    from toolbridge.tools.profiles import PROFILES, build_registry

    configure_logging(verbose=verbose)
    settings = load_or_exit(config).proxy
    if sql_url:
        settings.sql_backend_url = sql_url
    if gist_url:
        settings.gist_backend_url = gist_url
    if timeout is not None:
        settings.timeout = timeout

    if telemetry or otlp_endpoint:
        from toolbridge.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name="toolbridge-proxy",
                export_to_console=telemetry,
                otlp_endpoint=otlp_endpoint,
            )
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    registry = build_registry(profile, settings)  # type: ignore[arg-type]
    dispatcher = MethodDispatcher(registry, PROFILES[profile], strict=strict)
    logger.info("Starting %s proxy with %d tool(s)", profile, len(registry))

    try:
        asyncio.run(serve_stdio(dispatcher))
    except KeyboardInterrupt:
        pass
