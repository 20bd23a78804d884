"""
Time-of-day value used by availability slots.

A ``TimeOfDay`` is a wall-clock ``HH:MM`` with no date attached. It is
immutable and ordered by ``(hour, minute)``. All instants are read in
UTC, the single reference frame of the scheduler.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone

from agenda.domain.exceptions import InvalidTimeFormatError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def as_utc(instant: datetime) -> datetime:
    """Return ``instant`` as an aware UTC datetime (naive means UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def day_of_week_utc(instant: datetime) -> int:
    """Weekday of ``instant`` in UTC, 0 = Sunday through 6 = Saturday."""
    return (as_utc(instant).weekday() + 1) % 7


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int
    minute: int

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise InvalidTimeFormatError(f"{self.hour}:{self.minute}")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        if not isinstance(value, str):
            raise InvalidTimeFormatError(value)
        match = TIME_PATTERN.match(value)
        if match is None:
            raise InvalidTimeFormatError(value)
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def coerce(cls, value: "TimeOfDay | str") -> "TimeOfDay":
        if isinstance(value, TimeOfDay):
            return value
        return cls.parse(value)

    @classmethod
    def from_instant_utc(cls, instant: datetime) -> "TimeOfDay":
        """Time of day of ``instant`` in UTC, seconds truncated."""
        moment = as_utc(instant)
        return cls(moment.hour, moment.minute)

    def is_before(self, other: "TimeOfDay") -> bool:
        return self < other

    def is_after(self, other: "TimeOfDay") -> bool:
        return self > other

    def is_before_or_equal(self, other: "TimeOfDay") -> bool:
        return self <= other

    def is_after_or_equal(self, other: "TimeOfDay") -> bool:
        return self >= other

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
