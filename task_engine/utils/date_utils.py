"""
Centralized date/time utilities for local-calendar math
All engine code reads "now" from a Clock and converts instants with helpers from this module
"""

from datetime import datetime, date, time, timedelta, timezone, tzinfo
from typing import Iterator, Optional, Tuple
from task_engine.config.settings import settings


class Clock:
    """Source of the current instant"""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """
    Wall clock

    Uses USER_TIMEZONE_OFFSET from settings when set, otherwise the machine's local zone.
    """

    def __init__(self, offset_hours: Optional[float] = None):
        if offset_hours is None:
            offset_hours = settings.timezone_offset_hours()
        self.tz: Optional[tzinfo] = (
            timezone(timedelta(hours=offset_hours)) if offset_hours is not None else None
        )

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(self.tz)


class FixedClock(Clock):
    """Clock frozen at a given instant, moved only by advance()"""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, **kwargs) -> datetime:
        """
        Move the clock forward

        Args:
            **kwargs: timedelta arguments (seconds=..., days=...)

        Returns:
            The new current instant
        """
        self._instant = self._instant + timedelta(**kwargs)
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant


def to_local(instant: datetime, reference: datetime) -> datetime:
    """
    Express an instant in the same zone as the reference instant ("now")

    Naive values are taken to be local already. When the reference is naive,
    aware values are converted to the machine's local zone and made naive.

    Args:
        instant: Instant to convert
        reference: Instant whose zone defines "local"

    Returns:
        Datetime comparable with the reference
    """
    if reference.tzinfo is None:
        if instant.tzinfo is None:
            return instant
        return instant.astimezone().replace(tzinfo=None)

    if instant.tzinfo is None:
        return instant.replace(tzinfo=reference.tzinfo)
    return instant.astimezone(reference.tzinfo)


def local_date(instant: datetime, reference: datetime) -> date:
    """Calendar day of an instant in the reference zone"""
    return to_local(instant, reference).date()


def is_same_day(first: datetime, second: datetime) -> bool:
    """True if both instants fall on the same calendar day (in the zone of the second)"""
    return local_date(first, second) == second.date()


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """00:00:00.000000 of the given day"""
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """23:59:59.999999 of the given day"""
    return datetime.combine(day, time.max, tzinfo=tz)


def weekday_index(day: date) -> int:
    """Weekday index with Sunday = 0 ... Saturday = 6"""
    return (day.weekday() + 1) % 7


def week_bounds(day: date) -> Tuple[date, date]:
    """
    Sunday-based week containing the day

    Returns:
        (sunday, saturday)
    """
    start = day - timedelta(days=weekday_index(day))
    return start, start + timedelta(days=6)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive"""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def parse_hhmm(value: str) -> Tuple[int, int]:
    """
    Parse "HH:MM" time-of-day

    Args:
        value: Time string, e.g. "09:30"

    Returns:
        (hours, minutes)

    Raises:
        ValueError: if the value is not a valid 24h "HH:MM" time
    """
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid time of day: {value!r}")

    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid time of day: {value!r}")
    return hours, minutes


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month's length"""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    next_month = date(year + month // 12, month % 12 + 1, 1)
    last_day = (next_month - timedelta(days=1)).day
    return date(year, month, min(day.day, last_day))
