"""Backend HTTP services the proxy forwards tool calls to."""
