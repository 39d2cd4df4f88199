"""
Clock collaborators

The resolver never reads the current time. Callers ask a Clock for
today's date in the operating locale and pass it in.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from finrange.config import get_settings


class Clock(ABC):
    """Source of the current calendar date."""

    @abstractmethod
    def today(self) -> date:
        pass


class SystemClock(Clock):
    """
    Reads the wall clock and converts it to a date in the operating timezone.

    Args:
        timezone: IANA timezone name. None uses the configured APP_TIMEZONE;
                  an empty name uses the host's local time.
    """

    def __init__(self, timezone: Optional[str] = None):
        if timezone is None:
            timezone = get_settings().locale.timezone
        self._tz = ZoneInfo(timezone) if timezone else None

    @property
    def timezone(self) -> Optional[ZoneInfo]:
        return self._tz

    def today(self) -> date:
        if self._tz is None:
            return date.today()
        return datetime.now(self._tz).date()


class FixedClock(Clock):
    """Always returns the same date."""

    def __init__(self, day: date):
        self._day = day

    def today(self) -> date:
        return self._day
