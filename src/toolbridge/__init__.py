"""toolbridge — a JSON-RPC tool proxy in front of SQL and GitHub gist backends."""

from __future__ import annotations

__version__ = "0.1.0"
