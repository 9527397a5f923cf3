"""Clock and local calendar-day helpers."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current time in the user's timezone."""

    tz: ZoneInfo

    def now(self) -> datetime:
        """Return the current timezone-aware time."""


@dataclass
class SystemClock(Clock):
    """Wall clock bound to a named timezone."""

    tz: ZoneInfo

    @classmethod
    def create(cls, timezone_name: str) -> "SystemClock":
        """Create a clock for an IANA timezone name."""
        return cls(tz=ZoneInfo(timezone_name))

    def now(self) -> datetime:
        """Return the current time in the clock's timezone."""
        return datetime.now(tz=self.tz)


def local_day(moment: datetime, tz: ZoneInfo) -> date:
    """Return the calendar day of a timestamp in the given timezone."""
    return moment.astimezone(tz).date()


def to_local_day(value: date | datetime, tz: ZoneInfo) -> date:
    """Normalize a date or timestamp to a calendar day in the timezone."""
    if isinstance(value, datetime):
        return local_day(value, tz)
    return value


def start_of_day(day: date, tz: ZoneInfo) -> datetime:
    """Return local midnight of a calendar day."""
    return datetime.combine(day, time.min, tzinfo=tz)


def today(clock: Clock) -> date:
    """Return today's calendar day for the clock."""
    return local_day(clock.now(), clock.tz)


def window_start(clock: Clock, days: int) -> datetime:
    """Return local midnight of the first day in a window ending today."""
    first_day = today(clock) - timedelta(days=days - 1)
    return start_of_day(first_day, clock.tz)
