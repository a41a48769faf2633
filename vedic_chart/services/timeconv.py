"""Civil birth time to Julian Day (UT) conversion."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import swisseph as swe

from .errors import InvalidTimeInput

# JD of 2000-01-01T12:00:00Z
J2000_JD = 2451545.0
J2000_UTC = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)

MAX_OFFSET = timedelta(hours=14)

_OFFSET_RE = re.compile(r"^(?:UTC|GMT)?\s*([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE)


def parse_utc_offset(tz: str) -> timezone | None:
    """Parse a fixed UTC offset such as ``+05:30``, ``UTC-3:45`` or ``5.5``.

    Returns ``None`` when ``tz`` does not look like an offset, so the caller
    can try it as an IANA zone name instead.
    """

    raw = tz.strip()
    if raw.upper() in {"UTC", "GMT", "Z"}:
        return timezone.utc

    match = _OFFSET_RE.match(raw)
    if match:
        sign, hours, minutes = match.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes or 0))
        if minutes and int(minutes) >= 60:
            raise InvalidTimeInput(f"Invalid UTC offset minutes in {tz!r}")
    else:
        try:
            hours_float = float(raw)
        except ValueError:
            return None
        if not math.isfinite(hours_float):
            raise InvalidTimeInput(f"Invalid UTC offset {tz!r}")
        # decimal hours, e.g. 5.5 or -9.5; rounded to whole minutes
        delta = timedelta(minutes=round(abs(hours_float) * 60))
        sign = "-" if hours_float < 0 else "+"

    if delta > MAX_OFFSET:
        raise InvalidTimeInput(f"UTC offset out of range: {tz!r}")
    return timezone(-delta if sign == "-" else delta)


def resolve_zone(tz: str) -> tzinfo:
    if not tz or not tz.strip():
        raise InvalidTimeInput("Timezone is required")
    fixed = parse_utc_offset(tz)
    if fixed is not None:
        return fixed
    try:
        return ZoneInfo(tz.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimeInput(f"Unknown timezone {tz!r}") from exc


def _parse_date(date_str: str) -> date:
    try:
        return date.fromisoformat(date_str.strip())
    except (AttributeError, ValueError) as exc:
        raise InvalidTimeInput(f"Invalid date {date_str!r}; expected YYYY-MM-DD") from exc


def _parse_time(time_str: str) -> time:
    try:
        parsed = time.fromisoformat(time_str.strip())
    except (AttributeError, ValueError) as exc:
        raise InvalidTimeInput(f"Invalid time {time_str!r}; expected HH:MM or HH:MM:SS") from exc
    if parsed.tzinfo is not None:
        raise InvalidTimeInput(f"Time {time_str!r} must not carry its own offset; use tz")
    return parsed


def to_utc_datetime(date_str: str, time_str: str, tz: str) -> datetime:
    """Local civil date/time in ``tz`` to an aware UTC datetime.

    The offset is looked up for that specific civil date, so historical and
    DST rules apply. Subtracting it rolls day, month and year as needed.
    """

    local = datetime.combine(_parse_date(date_str), _parse_time(time_str))
    dt_local = local.replace(tzinfo=resolve_zone(tz))
    try:
        return dt_local.astimezone(timezone.utc)
    except OverflowError as exc:
        raise InvalidTimeInput(f"{date_str} {time_str} is outside the supported range") from exc


def julian_day(dt_utc: datetime) -> float:
    if dt_utc.tzinfo is not None:
        dt_utc = dt_utc.astimezone(timezone.utc)
    hour = (
        dt_utc.hour
        + dt_utc.minute / 60
        + dt_utc.second / 3600
        + dt_utc.microsecond / 3_600_000_000
    )
    return swe.julday(dt_utc.year, dt_utc.month, dt_utc.day, hour, swe.GREG_CAL)


def to_jd_utc(date_str: str, time_str: str, tz: str) -> float:
    """Convert a local date/time to a Julian day in UTC."""

    return julian_day(to_utc_datetime(date_str, time_str, tz))


def jd_to_datetime(jd: float) -> datetime:
    return J2000_UTC + timedelta(days=jd - J2000_JD)


def jd_to_iso_date(jd: float) -> str:
    return jd_to_datetime(jd).date().isoformat()


__all__ = [
    "J2000_JD",
    "jd_to_datetime",
    "jd_to_iso_date",
    "julian_day",
    "parse_utc_offset",
    "resolve_zone",
    "to_jd_utc",
    "to_utc_datetime",
]
