"""
NWS API Client

Async access to api.weather.gov for the clear sky tools: point metadata,
multi-period forecasts and raw gridpoint series. One client wraps one
``aiohttp.ClientSession`` and lives for a single tool invocation.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional

import aiohttp

from .config import Settings
from .errors import UpstreamUnavailableError
from .sky_analysis import Series, to_fixed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointMetadata:
    """Grid identifiers and follow-up URLs for one coordinate."""

    grid_id: Optional[str] = None
    grid_x: Optional[int] = None
    grid_y: Optional[int] = None
    cwa: Optional[str] = None
    time_zone: Optional[str] = None
    county: Optional[str] = None
    forecast_zone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    distance_value: Optional[float] = None
    distance_unit: Optional[str] = None
    forecast_url: Optional[str] = None
    forecast_hourly_url: Optional[str] = None
    forecast_grid_data_url: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PointMetadata":
        props = payload.get("properties") or {}
        location = (props.get("relativeLocation") or {}).get("properties") or {}
        distance = location.get("distance") or {}
        return cls(
            grid_id=props.get("gridId"),
            grid_x=props.get("gridX"),
            grid_y=props.get("gridY"),
            cwa=props.get("cwa"),
            time_zone=props.get("timeZone"),
            county=props.get("county"),
            forecast_zone=props.get("forecastZone"),
            city=location.get("city"),
            state=location.get("state"),
            distance_value=distance.get("value"),
            distance_unit=distance.get("unitCode"),
            forecast_url=props.get("forecast") or None,
            forecast_hourly_url=props.get("forecastHourly") or None,
            forecast_grid_data_url=props.get("forecastGridData") or None,
        )


@dataclass(frozen=True)
class ForecastPeriod:
    name: Optional[str] = None
    start_time: Optional[str] = None
    temperature: Optional[float] = None
    temperature_unit: Optional[str] = None
    wind_speed: Optional[str] = None
    wind_direction: Optional[str] = None
    short_forecast: Optional[str] = None
    detailed_forecast: Optional[str] = None
    precipitation_probability: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ForecastPeriod":
        temperature = payload.get("temperature")
        precipitation = (payload.get("probabilityOfPrecipitation") or {}).get("value")
        return cls(
            name=payload.get("name"),
            start_time=payload.get("startTime"),
            temperature=temperature if isinstance(temperature, (int, float)) else None,
            temperature_unit=payload.get("temperatureUnit"),
            wind_speed=payload.get("windSpeed"),
            wind_direction=payload.get("windDirection"),
            short_forecast=payload.get("shortForecast"),
            detailed_forecast=payload.get("detailedForecast"),
            precipitation_probability=precipitation if isinstance(precipitation, (int, float)) else None,
        )


@dataclass(frozen=True)
class GridSeries:
    """The three gridpoint layers used for observing analysis."""

    sky_cover: Series
    precipitation: Series
    visibility: Series

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GridSeries":
        props = payload.get("properties") or {}
        return cls(
            sky_cover=Series.from_payload(props.get("skyCover")),
            precipitation=Series.from_payload(props.get("probabilityOfPrecipitation")),
            visibility=Series.from_payload(props.get("visibility")),
        )


class NWSClient:
    """
    Thin wrapper around the NWS endpoints used by the tools.

    Every failure to obtain a usable JSON document surfaces as
    UpstreamUnavailableError naming the URL.
    """

    def __init__(self, session: aiohttp.ClientSession, settings: Settings):
        self.session = session
        self.settings = settings

    async def fetch_json(self, url: str) -> Dict[str, Any]:
        """
        GET a JSON document.

        Args:
            url: Absolute URL to request

        Returns:
            The decoded JSON object

        Raises:
            UpstreamUnavailableError: On error status, network failure or a body
                that is not a JSON object
        """
        logger.info(f"Fetching {url}")
        try:
            async with self.session.get(url) as response:
                response.raise_for_status()
                payload = await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            logger.error(f"Failed to fetch {url}: HTTP {e.status}")
            raise UpstreamUnavailableError(url, f"HTTP {e.status} when requesting {url}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to fetch {url}: {e!r}")
            raise UpstreamUnavailableError(url, f"Request to {url} failed: {str(e) or type(e).__name__}") from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            logger.error(f"Malformed JSON from {url}: {e}")
            raise UpstreamUnavailableError(url, f"Malformed JSON received from {url}") from e

        if not isinstance(payload, dict):
            raise UpstreamUnavailableError(url, f"Unexpected response body from {url}")
        return payload

    def point_url(self, latitude: float, longitude: float) -> str:
        return f"{self.settings.api_base}/points/{to_fixed(latitude, 4)},{to_fixed(longitude, 4)}"

    async def get_point_metadata(self, latitude: float, longitude: float) -> PointMetadata:
        url = self.point_url(latitude, longitude)
        payload = await self.fetch_json(url)
        if not isinstance(payload.get("properties"), dict):
            raise UpstreamUnavailableError(url, f"Point metadata from {url} has no properties")
        return PointMetadata.from_payload(payload)

    async def get_forecast_periods(self, url: str) -> List[ForecastPeriod]:
        payload = await self.fetch_json(url)
        periods = (payload.get("properties") or {}).get("periods") or []
        return [ForecastPeriod.from_payload(p) for p in periods if isinstance(p, dict)]

    async def get_grid_series(self, url: str) -> GridSeries:
        payload = await self.fetch_json(url)
        if not isinstance(payload.get("properties"), dict):
            raise UpstreamUnavailableError(url, f"Grid data from {url} has no properties")
        return GridSeries.from_payload(payload)


def create_session(settings: Settings) -> aiohttp.ClientSession:
    """Session carrying the required identification headers; no timeout unless configured."""
    return aiohttp.ClientSession(
        headers=settings.request_headers,
        timeout=aiohttp.ClientTimeout(total=settings.http_timeout),
    )


@asynccontextmanager
async def nws_client(settings: Settings) -> AsyncIterator[NWSClient]:
    async with create_session(settings) as session:
        yield NWSClient(session, settings)
