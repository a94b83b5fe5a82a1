"""
Clear Sky Observing Tools for MCP

This package turns National Weather Service gridpoint forecasts into observing
plans and exposes them as Model Context Protocol tools.

Modules:
    - sky_analysis: Interval parsing, series alignment, window scoring, visibility units
    - presentation: Text rendering of forecasts, point metadata and observing reports
    - nws_client: aiohttp access to api.weather.gov
    - tool_schema: Argument models and the tool declaration table
    - tool_implementation: The four tool operations
    - dispatcher: Validation and routing of tool calls
    - clear_sky_server: MCP stdio server wrapper
    - hourly_cli: Command-line hourly quick look
"""

from .tool_implementation import (
    analyze_clear_sky,
    get_clear_sky_window,
    get_daily_forecast,
    get_hourly_forecast,
    resolve_point_metadata,
)

__all__ = [
    "analyze_clear_sky",
    "resolve_point_metadata",
    "get_daily_forecast",
    "get_hourly_forecast",
    "get_clear_sky_window",
]
