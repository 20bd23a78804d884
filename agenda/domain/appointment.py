"""Appointment entity."""

from dataclasses import dataclass, field
from datetime import datetime

from agenda.domain.exceptions import InvalidDurationError
from agenda.domain.time_of_day import as_utc


@dataclass(frozen=True, eq=False)
class Appointment:
    """
    A booked ``[starts_at, ends_at)`` interval between a professional and a client.

    Instants are normalised to aware UTC. Identity is the ``id``.
    """
    id: str
    professional_id: str
    client_id: str
    starts_at: datetime
    ends_at: datetime
    created_at: datetime | None = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, 'starts_at', as_utc(self.starts_at))
        object.__setattr__(self, 'ends_at', as_utc(self.ends_at))
        if self.starts_at >= self.ends_at:
            raise InvalidDurationError()

    def overlaps(self, starts_at: datetime, ends_at: datetime) -> bool:
        return self.starts_at < as_utc(ends_at) and self.ends_at > as_utc(starts_at)

    def __eq__(self, other):
        if not isinstance(other, Appointment):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)
