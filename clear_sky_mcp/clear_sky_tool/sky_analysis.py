"""
Clear Sky Analysis

Pure functions that turn NWS gridpoint series into observing rows and pick the
most promising observing window.

Functions:
    - parse_valid_time: Decode an NWS ``validTime`` token into an Interval
    - align_series: Combine sky cover, precipitation and visibility positionally
    - score_row: Badness score of one aligned row (lower is better)
    - select_recommendation: Earliest row with the minimal score
    - format_visibility: Human-scaled visibility text

Alignment is positional: row ``i`` combines sample ``i`` of every series even
when the series use different cadences, so a row may pair mismatched time
ranges. Sky cover drives the row count and the time label.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Sequence, Tuple

METERS_UNIT = "wmoUnit:m"
METERS_PER_MILE = 1609.344
MISSING_VALUE_SCORE = 100.0
PRECIPITATION_WEIGHT = 0.5
FALLBACK_DURATION = timedelta(hours=1)

_DURATION_PATTERN = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$")


@dataclass(frozen=True)
class Interval:
    """Half-open ``[start, end)`` range; ``start`` is None when the instant was unreadable."""

    start: Optional[datetime]
    end: Optional[datetime]
    raw: str = ""

    @property
    def is_valid(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def duration(self) -> Optional[timedelta]:
        if not self.is_valid:
            return None
        return self.end - self.start

    @property
    def label(self) -> str:
        if not self.is_valid:
            return self.raw or "unknown time"
        return f"{format_instant(self.start)} → {format_instant(self.end)}"


@dataclass(frozen=True)
class TimedSample:
    interval: Interval
    value: Optional[float]


@dataclass(frozen=True)
class Series:
    """One measured quantity: samples in start order plus a series-level unit tag."""

    samples: Tuple[TimedSample, ...] = ()
    unit: Optional[str] = None

    def __len__(self) -> int:
        return len(self.samples)

    def value_at(self, index: int) -> Optional[float]:
        if 0 <= index < len(self.samples):
            return self.samples[index].value
        return None

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "Series":
        """Build a series from a gridpoint layer such as ``{"uom": ..., "values": [...]}``."""
        if not isinstance(payload, dict):
            return cls()
        samples = []
        for entry in payload.get("values") or []:
            if not isinstance(entry, dict):
                continue
            samples.append(
                TimedSample(
                    interval=parse_valid_time(str(entry.get("validTime") or "")),
                    value=_as_number(entry.get("value")),
                )
            )
        unit = payload.get("uom")
        return cls(samples=tuple(samples), unit=unit if isinstance(unit, str) else None)


@dataclass(frozen=True)
class ObservingRow:
    index: int
    interval: Interval
    sky_cover: Optional[float]
    precipitation: Optional[float]
    visibility: Optional[float]
    visibility_unit: Optional[str] = None

    @property
    def score(self) -> float:
        return score_row(self)


@dataclass(frozen=True)
class Recommendation:
    row: ObservingRow
    score: float


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def parse_duration(duration: str) -> timedelta:
    """
    Parse a ``P[nD][T[nH][nM][nS]]`` duration.

    Returns a zero timedelta when the text does not match the grammar or
    names a span too large for ``timedelta``.
    """
    match = _DURATION_PATTERN.match(duration)
    if not match:
        return timedelta(0)
    try:
        days, hours, minutes, seconds = (int(part or 0) for part in match.groups())
        total_ms = (((days * 24 + hours) * 60 + minutes) * 60 + seconds) * 1000
        return timedelta(milliseconds=total_ms)
    except (OverflowError, ValueError):
        return timedelta(0)


def parse_instant(text: str) -> Optional[datetime]:
    """Parse an ISO 8601 instant; naive values are taken as UTC. Returns None if unreadable."""
    candidate = text.strip()
    if not candidate:
        return None
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        instant = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


def format_instant(instant: datetime) -> str:
    """UTC with millisecond precision, e.g. ``2024-05-01T03:00:00.000Z``."""
    return instant.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_valid_time(valid_time: str) -> Interval:
    """
    Decode ``<start-instant>/<duration>`` into an Interval.

    A missing, unparseable, non-positive or unrepresentable duration falls back to one hour.
    An unreadable start instant gives an invalid Interval labelled with the raw token.

    Example:
        >>> parse_valid_time("2024-05-01T03:00:00+00:00/PT2H").duration
        datetime.timedelta(seconds=7200)
    """
    start_text, _, duration_text = valid_time.partition("/")
    start = parse_instant(start_text)
    if start is None:
        return Interval(start=None, end=None, raw=valid_time)
    duration = parse_duration(duration_text) if duration_text else timedelta(0)
    if duration <= timedelta(0):
        duration = FALLBACK_DURATION
    try:
        end = start + duration
    except OverflowError:
        end = start + FALLBACK_DURATION
    return Interval(start=start, end=end, raw=valid_time)


def align_series(
    sky_cover: Series,
    precipitation: Series,
    visibility: Series,
    horizon: int,
) -> Tuple[ObservingRow, ...]:
    """
    Combine the three series index by index over the leading ``horizon`` positions.

    Returns ``min(horizon, len(sky_cover))`` rows. Indexes past the end of the
    precipitation or visibility series read as unknown.
    """
    count = max(0, min(horizon, len(sky_cover)))
    return tuple(
        ObservingRow(
            index=i,
            interval=sky_cover.samples[i].interval,
            sky_cover=sky_cover.value_at(i),
            precipitation=precipitation.value_at(i),
            visibility=visibility.value_at(i),
            visibility_unit=visibility.unit,
        )
        for i in range(count)
    )


def score_row(row: ObservingRow) -> float:
    """``sky + 0.5 * precipitation``, with unknown values counted as 100."""
    sky = row.sky_cover if row.sky_cover is not None else MISSING_VALUE_SCORE
    precipitation = row.precipitation if row.precipitation is not None else MISSING_VALUE_SCORE
    return sky + precipitation * PRECIPITATION_WEIGHT


def select_recommendation(rows: Sequence[ObservingRow]) -> Optional[Recommendation]:
    """Pick the lowest-scoring row; on equal scores the earliest row wins."""
    best = None
    for row in rows:
        score = score_row(row)
        if best is None or score < best.score:
            best = Recommendation(row=row, score=score)
    return best


def format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_fixed(value: float, places: int) -> str:
    """Fixed-point text with exact ties rounded away from zero (0.25 -> "0.3")."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_visibility(value: Optional[float], unit: Optional[str]) -> str:
    """
    Render a visibility distance.

    Metres become whole miles from 10 mi up, tenths of a mile from 1 mi up, and
    tenths of a kilometre below that. Other units are shown as the raw number.
    """
    if value is None:
        return "unknown"
    if unit == METERS_UNIT:
        miles = value / METERS_PER_MILE
        if miles >= 10:
            return f"{to_fixed(miles, 0)} mi"
        if miles >= 1:
            return f"{to_fixed(miles, 1)} mi"
        return f"{to_fixed(value / 1000, 1)} km"
    return format_number(value)
