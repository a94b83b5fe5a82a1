"""Tests for the four tool operations against a mocked NWS client."""
from dataclasses import replace
from unittest.mock import call

import pytest

from clear_sky_mcp.clear_sky_tool.errors import CoverageGapError, UpstreamUnavailableError
from clear_sky_mcp.clear_sky_tool.nws_client import ForecastPeriod, GridSeries
from clear_sky_mcp.clear_sky_tool.tool_implementation import (
    analyze_clear_sky,
    get_clear_sky_window,
    get_daily_forecast,
    get_hourly_forecast,
    resolve_point_metadata,
)
from clear_sky_mcp.clear_sky_tool.tool_schema import (
    ClearSkyArguments,
    CoordinateArguments,
    DailyForecastArguments,
    HourlyForecastArguments,
)

from .payloads import FORECAST_URL, GRID_URL, HOURLY_URL, make_grid_payload, make_period

SKY = [10, 20, 90, 15, 5, 100, 0, 0]
PRECIP = [0, 0, 80, 10, 0, 5, 0, 0]


@pytest.fixture
def grid():
    return GridSeries.from_payload(make_grid_payload(SKY, PRECIP, visibility=[16000] * 8))


class TestAnalyzeClearSky:

    def test_horizon_bounds_rows(self, grid):
        analysis = analyze_clear_sky(grid, 6)
        assert len(analysis.rows) == 6
        assert analysis.recommendation.row.index == 4
        assert analysis.recommendation.score == 5

    def test_longer_horizon_finds_later_window(self, grid):
        assert analyze_clear_sky(grid, 12).recommendation.row.index == 6

    def test_empty_sky_cover_is_coverage_gap(self):
        grid = GridSeries.from_payload(make_grid_payload([], [0, 0]))
        with pytest.raises(CoverageGapError, match="Sky cover data not available"):
            analyze_clear_sky(grid, 12)


class TestClearSkyWindow:

    @pytest.mark.asyncio
    async def test_report(self, mock_client, grid):
        mock_client.get_grid_series.return_value = grid
        args = ClearSkyArguments(latitude=40.015, longitude=-105.2705, horizonHours=6)

        text = await get_clear_sky_window(mock_client, args)

        assert text.startswith("Clear sky analysis for 40.0150, -105.2705 (next 6 hours):")
        assert (
            "Promising observing window: 2024-05-01T04:00:00.000Z → 2024-05-01T05:00:00.000Z | "
            "Sky cover: 5% | Precip chance: 0% | Visibility: 9.9 mi (score 5)"
        ) in text
        assert len(text.split("Hourly breakdown:\n")[1].splitlines()) == 6

    @pytest.mark.asyncio
    async def test_point_metadata_fetched_before_grid(self, mock_client, grid):
        mock_client.get_grid_series.return_value = grid

        await get_clear_sky_window(mock_client, ClearSkyArguments(latitude=40.015, longitude=-105.2705))

        assert mock_client.mock_calls == [
            call.get_point_metadata(40.015, -105.2705),
            call.get_grid_series(GRID_URL),
        ]

    @pytest.mark.asyncio
    async def test_missing_grid_url_is_coverage_gap(self, mock_client, point_metadata):
        mock_client.get_point_metadata.return_value = replace(point_metadata, forecast_grid_data_url=None)

        with pytest.raises(CoverageGapError, match="Grid data URL not available"):
            await get_clear_sky_window(mock_client, ClearSkyArguments(latitude=51.5, longitude=-0.12))
        mock_client.get_grid_series.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(self, mock_client):
        mock_client.get_grid_series.side_effect = UpstreamUnavailableError(GRID_URL, f"HTTP 500 when requesting {GRID_URL}")

        with pytest.raises(UpstreamUnavailableError):
            await get_clear_sky_window(mock_client, ClearSkyArguments(latitude=40, longitude=-105))


class TestForecasts:

    @pytest.mark.asyncio
    async def test_daily_forecast(self, mock_client):
        mock_client.get_forecast_periods.return_value = [
            ForecastPeriod.from_payload(make_period(name=f"Period {i}")) for i in range(10)
        ]

        text = await get_daily_forecast(mock_client, DailyForecastArguments(latitude=40.015, longitude=-105.2705, periods=3))

        mock_client.get_forecast_periods.assert_awaited_once_with(FORECAST_URL)
        assert text.startswith("NWS forecast for 40.0150, -105.2705:")
        assert text.count("---") == 2

    @pytest.mark.asyncio
    async def test_daily_forecast_outside_coverage(self, mock_client, point_metadata):
        mock_client.get_point_metadata.return_value = replace(point_metadata, forecast_url=None)

        with pytest.raises(CoverageGapError, match="outside NWS coverage"):
            await get_daily_forecast(mock_client, DailyForecastArguments(latitude=48.85, longitude=2.35))

    @pytest.mark.asyncio
    async def test_hourly_forecast(self, mock_client):
        mock_client.get_forecast_periods.return_value = [ForecastPeriod.from_payload(make_period())]

        text = await get_hourly_forecast(mock_client, HourlyForecastArguments(latitude=40, longitude=-105))

        mock_client.get_forecast_periods.assert_awaited_once_with(HOURLY_URL)
        assert text.startswith("Hourly forecast for 40.0000, -105.0000:")
        assert "Temperature: 45°F" in text

    @pytest.mark.asyncio
    async def test_hourly_forecast_outside_coverage(self, mock_client, point_metadata):
        mock_client.get_point_metadata.return_value = replace(point_metadata, forecast_hourly_url=None)

        with pytest.raises(CoverageGapError, match="Hourly forecast URL not available"):
            await get_hourly_forecast(mock_client, HourlyForecastArguments(latitude=40, longitude=-105))


class TestResolvePointMetadata:

    @pytest.mark.asyncio
    async def test_summary(self, mock_client):
        text = await resolve_point_metadata(mock_client, CoordinateArguments(latitude=40.015, longitude=-105.2705))

        assert text.startswith("Resolved 40.0150, -105.2705 to grid BOU (62, 60) in BOU")
        assert "Hourly forecast: " + HOURLY_URL in text
