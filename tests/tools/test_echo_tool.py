"""Tests for the simple_echo tool."""

from toolbridge.tools.echo import EchoTool


class TestEchoTool:
    async def test_echoes_message(self) -> None:
        result = await EchoTool().call({"message": "hello"})
        assert result.text == "Echo: hello"

    async def test_missing_message(self) -> None:
        result = await EchoTool().call({})
        assert result.text == "Echo: No message received"

    async def test_empty_message(self) -> None:
        result = await EchoTool().call({"message": ""})
        assert result.text == "Echo: No message received"
