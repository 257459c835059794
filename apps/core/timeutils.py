"""
Time helpers shared by the slot manager, quota ledger and reports.

All instants are timezone-aware UTC datetimes. Quota accounting uses ISO
weeks: Monday 00:00 UTC is the week boundary and Sunday is day 7 of the
previous week.
"""
import re
from datetime import datetime, date as date_type, time as time_type, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ValidationError

WEEK = timedelta(days=7)

_HHMM = re.compile(r'^(\d{1,2}):(\d{2})$')


# ── ISO week ──────────────────────────────────────────────────────────────────

def week_start_for(instant: datetime) -> datetime:
    """Monday 00:00 UTC of the ISO week containing `instant`."""
    day = instant.astimezone(dt_timezone.utc).date()
    monday = day - timedelta(days=day.weekday())
    return datetime.combine(monday, time_type(0, 0), tzinfo=dt_timezone.utc)


def week_end_for(week_start: datetime) -> datetime:
    """Last millisecond of the week starting at `week_start`."""
    return week_start + WEEK - timedelta(milliseconds=1)


def month_bounds(year: int, month: int) -> tuple:
    """[first instant, first instant of next month) in UTC."""
    start = datetime(year, month, 1, tzinfo=dt_timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=dt_timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=dt_timezone.utc)
    return start, end


def week_starts_in_month(year: int, month: int) -> list:
    """Week starts from the Monday on/before the 1st through the month's last day."""
    start, end = month_bounds(year, month)
    current = week_start_for(start)
    weeks = []
    while current < end:
        weeks.append(current)
        current += WEEK
    return weeks


# ── Intervals ─────────────────────────────────────────────────────────────────

def overlaps(a_start, a_end, b_start, b_end) -> bool:
    """True if [a_start, a_end) overlaps [b_start, b_end). Touching ends do not."""
    return a_start < b_end and b_start < a_end


# ── Gym-local wall clock ──────────────────────────────────────────────────────

def get_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ValidationError(f"Unknown timezone '{name}'")


def local_date_of(instant: datetime, zone_name: str) -> date_type:
    """Calendar date of `instant` as seen on a wall clock in `zone_name`."""
    return instant.astimezone(get_zone(zone_name)).date()


def local_wall_clock_to_instant(day: date_type, wall: time_type, zone_name: str) -> datetime:
    """
    UTC instant at which clocks in `zone_name` read `wall` on `day`.

    Wall times skipped by a DST jump resolve with the pre-transition offset
    and repeated ones to their first occurrence (zoneinfo fold=0).
    """
    local = datetime.combine(day, wall, tzinfo=get_zone(zone_name))
    return local.astimezone(dt_timezone.utc)


def parse_hhmm(raw: str):
    """Parse 'HH:mm' into a time, or None if malformed or out of range."""
    match = _HHMM.match(raw.strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return time_type(hour, minute)


def parse_working_hours(raw: str) -> list:
    """
    Parse a comma-separated list of 'HH:mm - HH:mm' ranges.

    Whitespace is ignored and malformed ranges are skipped, so
    "09:00 - 14:00, 17:00-22:00" yields [(09:00, 14:00), (17:00, 22:00)].
    """
    ranges = []
    for part in raw.split(','):
        bounds = part.split('-')
        if len(bounds) < 2 or not bounds[0].strip() or not bounds[1].strip():
            continue
        start = parse_hhmm(re.sub(r'\s+', '', bounds[0]))
        end = parse_hhmm(re.sub(r'\s+', '', bounds[1]))
        if start is None or end is None:
            continue
        ranges.append((start, end))
    return ranges
