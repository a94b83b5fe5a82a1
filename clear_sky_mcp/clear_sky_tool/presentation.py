"""
Text rendering for the clear sky tools.

Every tool answers with plain text; these helpers build that text from the
parsed NWS data and the observing analysis.
"""

from typing import List, Optional, Sequence

from .nws_client import ForecastPeriod, PointMetadata
from .sky_analysis import (
    METERS_UNIT,
    ObservingRow,
    Recommendation,
    format_instant,
    format_number,
    format_visibility,
    parse_instant,
    to_fixed,
)

NO_WINDOW_MESSAGE = "No promising window identified within the requested horizon."


def format_coordinate(latitude: float, longitude: float) -> str:
    return f"{to_fixed(latitude, 4)}, {to_fixed(longitude, 4)}"


def _percent(value: Optional[float]) -> str:
    return f"{format_number(value) if value is not None else '?'}%"


def format_observing_row(row: ObservingRow) -> str:
    return " | ".join(
        [
            row.interval.label,
            f"Sky cover: {_percent(row.sky_cover)}",
            f"Precip chance: {_percent(row.precipitation)}",
            f"Visibility: {format_visibility(row.visibility, row.visibility_unit)}",
        ]
    )


def render_clear_sky_report(
    latitude: float,
    longitude: float,
    rows: Sequence[ObservingRow],
    recommendation: Optional[Recommendation],
) -> str:
    """Header, highlighted window (or the no-window notice), then one line per row."""
    if recommendation is not None:
        insight = (
            f"Promising observing window: {format_observing_row(recommendation.row)}"
            f" (score {format_number(recommendation.score)})"
        )
    else:
        insight = NO_WINDOW_MESSAGE

    return "\n".join(
        [
            f"Clear sky analysis for {format_coordinate(latitude, longitude)} (next {len(rows)} hours):",
            "",
            insight,
            "",
            "Hourly breakdown:",
            *(format_observing_row(row) for row in rows),
        ]
    )


def _period_start_label(start_time: Optional[str]) -> Optional[str]:
    if not start_time:
        return None
    instant = parse_instant(start_time)
    return format_instant(instant) if instant is not None else start_time


def format_temperature(period: ForecastPeriod) -> str:
    if period.temperature is None:
        return "Temperature unavailable"
    return f"{format_number(period.temperature)}°{period.temperature_unit or ''}"


def format_wind(period: ForecastPeriod) -> str:
    parts = [p for p in (period.wind_speed, period.wind_direction) if p]
    return " ".join(parts) or "Wind data unavailable"


def render_forecast(periods: Sequence[ForecastPeriod], limit: int, heading: str) -> str:
    trimmed = list(periods)[:limit]
    if not trimmed:
        return f"{heading}: No forecast periods available."

    items = []
    for period in trimmed:
        start = _period_start_label(period.start_time)
        name = period.name or "Unknown"
        summary = period.detailed_forecast or period.short_forecast or "No forecast description provided."
        items.append(
            "\n".join(
                [
                    f"{name} ({start})" if start else name,
                    f"Temperature: {format_temperature(period)}",
                    f"Wind: {format_wind(period)}",
                    f"Forecast: {summary}",
                ]
            )
        )
    return f"{heading}:\n\n" + "\n\n---\n\n".join(items)


def render_point_summary(point: PointMetadata, latitude: float, longitude: float) -> str:
    grid_id = point.grid_id or "?"
    grid_x = point.grid_x if point.grid_x is not None else "?"
    grid_y = point.grid_y if point.grid_y is not None else "?"

    lines: List[str] = [
        f"Resolved {format_coordinate(latitude, longitude)} to grid {grid_id} ({grid_x}, {grid_y}) in {point.cwa or ''}".strip()
    ]
    if point.city or point.state:
        lines.append("Nearest location: " + ", ".join(p for p in (point.city, point.state) if p))
    if isinstance(point.distance_value, (int, float)) and point.distance_unit == METERS_UNIT:
        lines.append(f"{to_fixed(point.distance_value / 1000, 1)} km from point")
    if point.county:
        lines.append(f"County: {point.county}")
    if point.forecast_zone:
        lines.append(f"Forecast zone: {point.forecast_zone}")
    lines.append(f"Time zone: {point.time_zone or 'Unknown'}")
    if point.forecast_url:
        lines.append(f"7-day forecast: {point.forecast_url}")
    if point.forecast_hourly_url:
        lines.append(f"Hourly forecast: {point.forecast_hourly_url}")
    if point.forecast_grid_data_url:
        lines.append(f"Grid data: {point.forecast_grid_data_url}")
    return "\n".join(lines)


def format_hourly_line(period: ForecastPeriod) -> str:
    """One-line hourly summary used by the command-line quick look."""
    wind = f"Wind: {period.wind_speed or ''} {period.wind_direction or ''}".strip()
    precip = period.precipitation_probability
    return " | ".join(
        [
            period.start_time or "?",
            f"Temp: {format_temperature(period)}",
            wind,
            f"Precip: {_percent(precip) if precip is not None else '?'}",
            period.short_forecast or "No summary",
        ]
    )
