"""
Tool Schema Definitions

Argument models and the declaration table for the four clear sky tools. The
pydantic models are both the validators used by the dispatcher and the source
of the JSON input schemas advertised over MCP.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class CoordinateArguments(BaseModel):
    """Latitude/longitude pair shared by every tool."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    latitude: float = Field(
        ...,
        ge=-90,
        le=90,
        description="Latitude of the observing location (decimal degrees).",
    )
    longitude: float = Field(
        ...,
        ge=-180,
        le=180,
        description="Longitude of the observing location (decimal degrees).",
    )


class DailyForecastArguments(CoordinateArguments):
    periods: int = Field(
        6,
        ge=1,
        le=14,
        description="How many forecast periods to return (each period ~12 hours).",
    )


class HourlyForecastArguments(CoordinateArguments):
    hours: int = Field(
        6,
        ge=1,
        le=24,
        description="How many hourly entries to include (short-term outlook).",
    )


class ClearSkyArguments(CoordinateArguments):
    horizon_hours: int = Field(
        12,
        alias="horizonHours",
        ge=3,
        le=24,
        description="Number of hours ahead to analyze for observing windows.",
    )


@dataclass(frozen=True)
class ToolDeclaration:
    name: str
    description: str
    arguments: Type[CoordinateArguments]
    failure_prefix: str

    def input_schema(self) -> Dict[str, Any]:
        return self.arguments.model_json_schema(by_alias=True)


RESOLVE_POINT_METADATA = ToolDeclaration(
    name="resolve_point_metadata",
    description="Resolve NWS metadata for a coordinate pair, including grid and time zone details.",
    arguments=CoordinateArguments,
    failure_prefix="Unable to resolve metadata.",
)

GET_DAILY_FORECAST = ToolDeclaration(
    name="get_daily_forecast",
    description="Fetch the multi-period NWS forecast for the provided coordinates.",
    arguments=DailyForecastArguments,
    failure_prefix="Unable to fetch daily forecast.",
)

GET_HOURLY_FORECAST = ToolDeclaration(
    name="get_hourly_forecast",
    description="Fetch hourly NWS forecast periods for near-term planning.",
    arguments=HourlyForecastArguments,
    failure_prefix="Unable to fetch hourly forecast.",
)

GET_CLEAR_SKY_WINDOW = ToolDeclaration(
    name="get_clear_sky_window",
    description="Analyze sky cover, precipitation, and visibility to highlight the best observing window.",
    arguments=ClearSkyArguments,
    failure_prefix="Unable to analyze clear sky window.",
)

TOOL_DECLARATIONS: List[ToolDeclaration] = [
    RESOLVE_POINT_METADATA,
    GET_DAILY_FORECAST,
    GET_HOURLY_FORECAST,
    GET_CLEAR_SKY_WINDOW,
]


def format_validation_issues(error: ValidationError) -> List[str]:
    """One ``field: reason`` entry per failed field, in the order pydantic reports them."""
    issues = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue.get("loc", ())) or "arguments"
        issues.append(f"{path}: {issue.get('msg', 'invalid value')}")
    return issues
