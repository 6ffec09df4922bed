"""Logging setup for the command line.

Log records go to stderr through rich.  Stdout belongs to the protocol
stream when the proxy is running.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Install a single rich stderr handler on the root logger."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=_LOG_FORMAT,
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
