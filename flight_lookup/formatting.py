"""Pure display helpers for timestamps, timezones, status and duration.

Every helper is total: missing or malformed input yields a placeholder
instead of raising, so a bad field never aborts a render pass.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import Optional, Tuple

TIME_PLACEHOLDER = "--:--"
DATE_PLACEHOLDER = "---"
UNKNOWN_CITY = "Unknown City"
DURATION_PLACEHOLDER = "--"

_HOUR_MS = 3_600_000
_MINUTE_MS = 60_000


def parse_iso(value: str | None) -> Optional[dt.datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def _to_local(value: str | None, tz: dt.tzinfo | None) -> Optional[dt.datetime]:
    parsed = parse_iso(value)
    if parsed is None:
        return None
    return parsed.astimezone(tz)


def uses_12_hour_clock() -> bool:
    """True when the active ``LC_TIME`` locale writes 13:00 as a 12-hour time."""
    return "13" not in dt.time(13, 0).strftime("%X")


def format_time(
    value: str | None, tz: dt.tzinfo | None = None, hour12: bool | None = None
) -> str:
    """Render hour and minute of *value* on the viewer's clock.

    ``hour12=None`` follows the locale: ``03:45 PM`` for 12-hour locales,
    ``15:45`` otherwise.
    """
    local = _to_local(value, tz)
    if local is None:
        return TIME_PLACEHOLDER
    if hour12 is None:
        hour12 = uses_12_hour_clock()
    return local.strftime("%I:%M %p" if hour12 else "%H:%M")


def format_date(value: str | None, tz: dt.tzinfo | None = None) -> str:
    """Render *value* as abbreviated month and day, e.g. ``Mar 5``."""
    local = _to_local(value, tz)
    if local is None:
        return DATE_PLACEHOLDER
    return f"{local:%b} {local.day}"


def city_from_timezone(timezone: str | None) -> str:
    """``America/New_York`` → ``New York``."""
    if not timezone:
        return UNKNOWN_CITY
    parts = timezone.split("/")
    if len(parts) < 2 or not parts[1]:
        return UNKNOWN_CITY
    return parts[1].replace("_", " ")


def format_status(status: str | None) -> str:
    return (status or "").replace("_", " ")


def status_css_class(status: str | None) -> str:
    return f"status-{status or 'unknown'}"


def compute_duration(
    departure: str | None, arrival: str | None
) -> Optional[Tuple[int, int]]:
    """Return ``(hours, minutes)`` between two scheduled timestamps.

    Hours are floored and the remainder minutes rounded half-up. The
    remainder keeps the sign of the difference, so arrival before departure
    gives a negative duration.
    """
    start = parse_iso(departure)
    end = parse_iso(arrival)
    if start is None or end is None:
        return None
    diff_ms = (end - start) / dt.timedelta(milliseconds=1)
    hours = math.floor(diff_ms / _HOUR_MS)
    mins = math.floor(math.fmod(diff_ms, _HOUR_MS) / _MINUTE_MS + 0.5)
    return hours, mins


def format_duration(departure: str | None, arrival: str | None) -> str:
    duration = compute_duration(departure, arrival)
    if duration is None:
        return DURATION_PLACEHOLDER
    hours, mins = duration
    return f"{hours}h {mins}m"


__all__ = [
    "DATE_PLACEHOLDER",
    "DURATION_PLACEHOLDER",
    "TIME_PLACEHOLDER",
    "UNKNOWN_CITY",
    "city_from_timezone",
    "compute_duration",
    "format_date",
    "format_duration",
    "format_status",
    "format_time",
    "parse_iso",
    "status_css_class",
    "uses_12_hour_clock",
]
