import logging
import os
import sys

from google.adk.agents import LlmAgent
from google.adk.agents.callback_context import CallbackContext
from google.adk.models import LlmRequest, LlmResponse
from google.adk.tools.mcp_tool.mcp_toolset import MCPToolset, \
                    StdioServerParameters, StdioConnectionParams

logger = logging.getLogger(__name__)

SERVER_MODULE = "clear_sky_mcp.clear_sky_tool.clear_sky_server"
# Settings the server reads; the MCP stdio client does not inherit the full environment
FORWARDED_ENV = (
    "NWS_API_BASE",
    "NWS_USER_AGENT",
    "CLEAR_SKY_HTTP_TIMEOUT",
    "CLEAR_SKY_LOG_LEVEL",
)
DEFAULT_MODEL = "gemini-2.0-flash"


def log_query_to_model(callback_context: CallbackContext, llm_request: LlmRequest):
    if llm_request.contents and llm_request.contents[-1].role == 'user':
        for part in llm_request.contents[-1].parts or []:
            if part.text:
                logger.info("[query to %s]: %s", callback_context.agent_name, part.text)


def log_model_response(callback_context: CallbackContext, llm_response: LlmResponse):
    if llm_response.content and llm_response.content.parts:
        for part in llm_response.content.parts:
            if part.text:
                logger.info("[response from %s]: %s", callback_context.agent_name, part.text)
            elif part.function_call:
                logger.info("[function call from %s]: %s", callback_context.agent_name, part.function_call.name)


def build_server_params() -> StdioServerParameters:
    """Launch command for the clear sky MCP server, overridable with CLEAR_SKY_SERVER_COMMAND."""
    command = os.getenv("CLEAR_SKY_SERVER_COMMAND")
    env = {name: os.environ[name] for name in FORWARDED_ENV if os.getenv(name)}
    if command:
        return StdioServerParameters(command=command, args=[], env=env or None)
    return StdioServerParameters(command=sys.executable, args=["-m", SERVER_MODULE], env=env or None)


root_agent = LlmAgent(
    model=os.getenv("MODEL") or DEFAULT_MODEL,
    name='observing_planner_agent',
    before_model_callback=log_query_to_model,
    after_model_callback=log_model_response,
    description='Plans astronomy observing sessions from National Weather Service forecasts.',
    instruction="""You help amateur astronomers decide when to observe.

## YOUR TASKS
1. If the user gives a place name instead of coordinates, ask for latitude and longitude
2. Use get_clear_sky_window to find the most promising observing window in the next hours
3. Use get_hourly_forecast or get_daily_forecast when the user asks about temperature, wind or later nights
4. Use resolve_point_metadata when the user asks which NWS office or time zone covers the location

## OUTPUT FORMAT
Answer in plain language. Name the recommended window with its local time range,
sky cover and precipitation chance. If a tool reports that a location is outside
NWS coverage, say so instead of guessing.
""",
    tools=[
        MCPToolset(
            connection_params=StdioConnectionParams(
                server_params=build_server_params(),
                timeout=15,
            ),
        )
    ],
)
