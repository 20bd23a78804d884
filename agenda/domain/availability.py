"""
Weekly availability slots and batch overlap validation.

This module is pure domain logic: no database, no I/O.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from agenda.domain.exceptions import InvalidDayOfWeekError, InvalidRangeError, OverlappingSlotsError
from agenda.domain.time_of_day import TimeOfDay

DAY_NAMES = ('Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday')


@dataclass(frozen=True)
class AvailabilitySlot:
    """
    A professional's recurring weekly window ``[start_time, end_time)``.

    Invariants: ``0 <= day_of_week <= 6`` (0 = Sunday) and
    ``start_time < end_time``.
    """
    id: str
    professional_id: str
    day_of_week: int
    start_time: TimeOfDay
    end_time: TimeOfDay

    def __post_init__(self):
        if isinstance(self.day_of_week, bool) or not isinstance(self.day_of_week, int):
            raise InvalidDayOfWeekError(self.day_of_week)
        if not 0 <= self.day_of_week <= 6:
            raise InvalidDayOfWeekError(self.day_of_week)

        # Accept "HH:MM" strings; frozen dataclass needs object.__setattr__.
        object.__setattr__(self, 'start_time', TimeOfDay.coerce(self.start_time))
        object.__setattr__(self, 'end_time', TimeOfDay.coerce(self.end_time))

        if not self.start_time.is_before(self.end_time):
            raise InvalidRangeError(self.start_time, self.end_time)

    def overlaps_with(self, other: "AvailabilitySlot") -> bool:
        """Half-open overlap on the same weekday; touching slots do not overlap."""
        if self.day_of_week != other.day_of_week:
            return False
        return self.start_time < other.end_time and self.end_time > other.start_time

    def contains_time(self, value: TimeOfDay | str) -> bool:
        moment = TimeOfDay.coerce(value)
        return self.start_time <= moment < self.end_time

    def contains_range(self, start: TimeOfDay, end: TimeOfDay) -> bool:
        """True when ``[start, end]`` nests entirely inside this slot."""
        return self.start_time <= start and self.end_time >= end

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    def __str__(self) -> str:
        return f"{self.day_name} {self.start_time}-{self.end_time}"


def validate_no_overlaps(slots: Iterable[AvailabilitySlot]) -> None:
    """
    Reject a batch in which two slots overlap on the same weekday.

    Slots are grouped by day and sorted by start time; once sorted only
    neighbours need comparing. Days are visited in ascending order so the
    reported pair is the same on every run.

    Raises:
        OverlappingSlotsError: for the first overlapping pair found.
    """
    slots_by_day: dict[int, list[AvailabilitySlot]] = defaultdict(list)
    for slot in slots:
        slots_by_day[slot.day_of_week].append(slot)

    for day in sorted(slots_by_day):
        ordered = sorted(slots_by_day[day], key=lambda slot: (slot.start_time, slot.end_time))
        for current, following in zip(ordered, ordered[1:]):
            if current.end_time > following.start_time:
                raise OverlappingSlotsError(day, current, following)
