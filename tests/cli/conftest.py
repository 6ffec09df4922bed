"""Shared fixtures for CLI tests."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def _keep_test_logging() -> Iterator[None]:
    """Commands install a rich root handler; keep pytest's handlers in place."""
    with (
        patch("toolbridge.cli_commands.proxy.configure_logging"),
        patch("toolbridge.cli_commands.backends.configure_logging"),
    ):
        yield
