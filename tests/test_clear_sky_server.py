"""Tests for the MCP handlers wrapping the dispatcher."""
from unittest.mock import patch

import pytest
from mcp import types as mcp_types

from clear_sky_mcp.clear_sky_tool import clear_sky_server
from clear_sky_mcp.clear_sky_tool.config import Settings
from clear_sky_mcp.clear_sky_tool.dispatcher import ToolDispatcher


@pytest.fixture
def patched_dispatcher(client_factory):
    dispatcher = ToolDispatcher(settings=Settings(), client_factory=client_factory)
    with patch.object(clear_sky_server, "dispatcher", dispatcher):
        yield dispatcher


class TestClearSkyServer:

    @pytest.mark.asyncio
    async def test_list_tools(self):
        tools = await clear_sky_server.list_mcp_tools()

        assert [tool.name for tool in tools] == [
            "resolve_point_metadata",
            "get_daily_forecast",
            "get_hourly_forecast",
            "get_clear_sky_window",
        ]
        hourly = tools[2]
        assert hourly.inputSchema["properties"]["hours"]["maximum"] == 24

    @pytest.mark.asyncio
    async def test_call_tool_returns_text(self, patched_dispatcher):
        content = await clear_sky_server.call_mcp_tool(
            "resolve_point_metadata", {"latitude": 40.015, "longitude": -105.2705}
        )

        assert len(content) == 1
        assert isinstance(content[0], mcp_types.TextContent)
        assert content[0].text.startswith("Resolved 40.0150, -105.2705")

    @pytest.mark.asyncio
    async def test_call_tool_failure_raises_for_flagged_result(self, patched_dispatcher):
        with pytest.raises(clear_sky_server.ToolCallError) as exc_info:
            await clear_sky_server.call_mcp_tool("get_clear_sky_window", {"latitude": 200, "longitude": 500})

        message = str(exc_info.value)
        assert message.startswith("Unable to analyze clear sky window. Invalid arguments:")
        assert "latitude" in message and "longitude" in message

    @pytest.mark.asyncio
    async def test_unknown_tool(self, patched_dispatcher):
        with pytest.raises(clear_sky_server.ToolCallError, match="Unknown tool: nope"):
            await clear_sky_server.call_mcp_tool("nope", {})

    def test_get_dispatcher_builds_lazily(self):
        with patch.object(clear_sky_server, "dispatcher", None):
            dispatcher = clear_sky_server.get_dispatcher()
            assert isinstance(dispatcher, ToolDispatcher)
            assert clear_sky_server.get_dispatcher() is dispatcher

    def test_main_exits_on_transport_failure(self):
        with patch.object(clear_sky_server, "run_mcp_stdio_server", side_effect=OSError("stdin closed")), \
                patch.object(clear_sky_server, "dispatcher", None):
            with pytest.raises(SystemExit) as exc_info:
                clear_sky_server.main()
        assert exc_info.value.code == 1
