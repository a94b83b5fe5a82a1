"""
Command-line quick look at the next few hourly NWS forecast periods.

Usage:
    clear-sky-hourly <latitude> <longitude> [--count N]
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import Settings
from .errors import ClearSkyError, CoverageGapError
from .nws_client import nws_client
from .presentation import format_hourly_line

DEFAULT_PERIOD_COUNT = 6


async def fetch_hourly_lines(settings: Settings, latitude: float, longitude: float, count: int) -> List[str]:
    async with nws_client(settings) as client:
        point = await client.get_point_metadata(latitude, longitude)
        if not point.forecast_hourly_url:
            raise CoverageGapError("Hourly forecast URL missing from point metadata.")
        periods = await client.get_forecast_periods(point.forecast_hourly_url)
    return [format_hourly_line(period) for period in periods[:count]]


class CliArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with exit status 1 like every other CLI failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = CliArgumentParser(description="Print the next hourly NWS forecast periods for a coordinate.")
    parser.add_argument("latitude", type=float, help="Latitude in decimal degrees")
    parser.add_argument("longitude", type=float, help="Longitude in decimal degrees")
    parser.add_argument("--count", type=positive_int, default=DEFAULT_PERIOD_COUNT, help="Number of periods to print")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO), stream=sys.stderr)

    try:
        lines = asyncio.run(fetch_hourly_lines(settings, args.latitude, args.longitude, args.count))
    except ClearSkyError as e:
        print(str(e), file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
