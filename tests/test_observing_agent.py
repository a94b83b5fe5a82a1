"""Tests for the ADK agent that consumes the clear sky MCP server."""
import logging
import sys
from types import SimpleNamespace

from observing_agent import agent


class TestObservingAgent:

    def test_default_server_params(self, monkeypatch):
        monkeypatch.delenv("CLEAR_SKY_SERVER_COMMAND", raising=False)
        monkeypatch.setenv("NWS_USER_AGENT", "TestScope/2.0 (me@example.com)")

        params = agent.build_server_params()

        assert params.command == sys.executable
        assert params.args == ["-m", agent.SERVER_MODULE]
        assert params.env["NWS_USER_AGENT"] == "TestScope/2.0 (me@example.com)"

    def test_command_override(self, monkeypatch):
        monkeypatch.setenv("CLEAR_SKY_SERVER_COMMAND", "clear-sky-mcp")
        for name in agent.FORWARDED_ENV:
            monkeypatch.delenv(name, raising=False)

        params = agent.build_server_params()

        assert params.command == "clear-sky-mcp"
        assert params.args == []
        assert params.env is None

    def test_root_agent_uses_mcp_toolset(self):
        assert agent.root_agent.name == "observing_planner_agent"
        assert len(agent.root_agent.tools) == 1

    def test_query_logging(self, caplog):
        part = SimpleNamespace(text="When is it clear tonight?")
        request = SimpleNamespace(contents=[SimpleNamespace(role="user", parts=[part])])
        context = SimpleNamespace(agent_name="observing_planner_agent")

        with caplog.at_level(logging.INFO, logger=agent.__name__):
            agent.log_query_to_model(context, request)

        assert "When is it clear tonight?" in caplog.text

    def test_function_call_logging(self, caplog):
        part = SimpleNamespace(text=None, function_call=SimpleNamespace(name="get_clear_sky_window"))
        response = SimpleNamespace(content=SimpleNamespace(parts=[part]))
        context = SimpleNamespace(agent_name="observing_planner_agent")

        with caplog.at_level(logging.INFO, logger=agent.__name__):
            agent.log_model_response(context, response)

        assert "get_clear_sky_window" in caplog.text
