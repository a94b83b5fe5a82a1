"""
Clear Sky Tool Implementation

Implements the four operations exposed to MCP callers on top of the NWS API.
Each operation resolves the coordinate first, then fetches the follow-up
document named in the point metadata.

Functions:
    - resolve_point_metadata: Grid, office and time zone details for a coordinate
    - get_daily_forecast: Multi-period (day/night) forecast
    - get_hourly_forecast: Short-term hourly forecast
    - get_clear_sky_window: Best observing window from sky cover, precipitation and visibility
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import CoverageGapError
from .nws_client import GridSeries, NWSClient
from .presentation import (
    format_coordinate,
    render_clear_sky_report,
    render_forecast,
    render_point_summary,
)
from .sky_analysis import ObservingRow, Recommendation, align_series, select_recommendation
from .tool_schema import (
    ClearSkyArguments,
    CoordinateArguments,
    DailyForecastArguments,
    HourlyForecastArguments,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClearSkyAnalysis:
    rows: Tuple[ObservingRow, ...]
    recommendation: Optional[Recommendation]


def analyze_clear_sky(grid: GridSeries, horizon_hours: int) -> ClearSkyAnalysis:
    """
    Align the grid layers over the horizon and pick the best row.

    Raises:
        CoverageGapError: If the sky cover layer has no samples
    """
    if not len(grid.sky_cover):
        raise CoverageGapError("Sky cover data not available for this coordinate.")
    rows = align_series(grid.sky_cover, grid.precipitation, grid.visibility, horizon_hours)
    return ClearSkyAnalysis(rows=rows, recommendation=select_recommendation(rows))


async def resolve_point_metadata(client: NWSClient, args: CoordinateArguments) -> str:
    point = await client.get_point_metadata(args.latitude, args.longitude)
    return render_point_summary(point, args.latitude, args.longitude)


async def get_daily_forecast(client: NWSClient, args: DailyForecastArguments) -> str:
    """
    Fetch the NWS multi-period forecast.

    Args:
        client: NWS client for this invocation
        args: Validated coordinate and period count

    Returns:
        Rendered forecast text

    Raises:
        CoverageGapError: If the point has no forecast URL
    """
    point = await client.get_point_metadata(args.latitude, args.longitude)
    if not point.forecast_url:
        raise CoverageGapError("Forecast URL not available for this coordinate (outside NWS coverage).")
    periods = await client.get_forecast_periods(point.forecast_url)
    logger.info(f"Daily forecast returned {len(periods)} periods")
    heading = f"NWS forecast for {format_coordinate(args.latitude, args.longitude)}"
    return render_forecast(periods, args.periods, heading)


async def get_hourly_forecast(client: NWSClient, args: HourlyForecastArguments) -> str:
    point = await client.get_point_metadata(args.latitude, args.longitude)
    if not point.forecast_hourly_url:
        raise CoverageGapError("Hourly forecast URL not available for this coordinate.")
    periods = await client.get_forecast_periods(point.forecast_hourly_url)
    logger.info(f"Hourly forecast returned {len(periods)} periods")
    heading = f"Hourly forecast for {format_coordinate(args.latitude, args.longitude)}"
    return render_forecast(periods, args.hours, heading)


async def get_clear_sky_window(client: NWSClient, args: ClearSkyArguments) -> str:
    """
    Rank the next ``horizon_hours`` grid positions for observing.

    Rows are scored as ``sky cover + 0.5 * precipitation chance`` with unknown
    values counted as 100; the earliest lowest score is highlighted.

    Raises:
        CoverageGapError: If the point has no grid data URL or no sky cover samples
    """
    point = await client.get_point_metadata(args.latitude, args.longitude)
    if not point.forecast_grid_data_url:
        raise CoverageGapError("Grid data URL not available for this coordinate (outside NWS coverage).")
    grid = await client.get_grid_series(point.forecast_grid_data_url)
    analysis = analyze_clear_sky(grid, args.horizon_hours)
    if analysis.recommendation is not None:
        logger.info(
            f"Best window at index {analysis.recommendation.row.index} "
            f"with score {analysis.recommendation.score} of {len(analysis.rows)} rows"
        )
    return render_clear_sky_report(args.latitude, args.longitude, analysis.rows, analysis.recommendation)


__all__ = [
    "analyze_clear_sky",
    "resolve_point_metadata",
    "get_daily_forecast",
    "get_hourly_forecast",
    "get_clear_sky_window",
]
