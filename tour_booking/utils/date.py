"""
Venue clock and time formatting utilities.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Optional
import pytz

from ..config import get_settings


class VenueClock:
    """Current time at the tour venue, independent of the server time zone."""

    def __init__(
        self,
        timezone: Optional[str] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.tz = pytz.timezone(timezone or get_settings().venue_timezone)
        self._now = now

    def now(self) -> datetime:
        """Return the current venue-local datetime."""
        if self._now is None:
            return datetime.now(self.tz)
        current = self._now()
        if current.tzinfo is None:
            return self.tz.localize(current)
        return current.astimezone(self.tz)

    def today(self) -> date:
        return self.now().date()

    def days_from_today(self, days: int) -> date:
        return self.today() + timedelta(days=days)

    def is_today(self, day: Optional[date]) -> bool:
        return day is not None and day == self.today()

    def minutes_now(self) -> int:
        """Minutes since venue-local midnight."""
        current = self.now()
        return current.hour * 60 + current.minute


class TimeFormatter:
    """Conversions between the formats used by the site and the backend."""

    @staticmethod
    def to_24_hour(time_str: str) -> str:
        """Convert "10:00 AM" / "2:00 PM" to "10:00" / "14:00"."""
        try:
            return datetime.strptime(time_str.strip(), "%I:%M %p").strftime("%H:%M")
        except ValueError:
            return time_str

    @staticmethod
    def to_12_hour(time_str: str) -> str:
        """Convert "10:00:00" / "14:00" to "10:00 AM" / "2:00 PM"."""
        try:
            parsed = datetime.strptime(":".join(time_str.split(":")[:2]), "%H:%M")
        except ValueError:
            return time_str
        hour = parsed.hour % 12 or 12
        suffix = "AM" if parsed.hour < 12 else "PM"
        return f"{hour}:{parsed.minute:02d} {suffix}"

    @staticmethod
    def format_for_api(day: date) -> str:
        """Format as "2025-11-15"."""
        return day.strftime("%Y-%m-%d")

    @staticmethod
    def is_valid_time_format(time_str: str) -> bool:
        """Check if string is a valid time format (HH:MM)."""
        try:
            datetime.strptime(time_str, "%H:%M")
            return True
        except ValueError:
            return False
