"""
Interfaces (ports) the scheduling core consumes.

Concrete SQLAlchemy implementations live in ``agenda.repositories``;
tests may substitute anything that satisfies these protocols.
"""

from datetime import datetime
from typing import ContextManager, Iterable, Protocol

from agenda.domain.appointment import Appointment
from agenda.domain.availability import AvailabilitySlot
from agenda.domain.notification import Notification, NotificationStatus
from agenda.domain.people import Person, Professional


class Clock(Protocol):
    def now(self) -> datetime:
        """Current instant, timezone-aware UTC."""


class IdGenerator(Protocol):
    def next(self) -> str:
        ...


class PersonDirectory(Protocol):
    def resolve(self, person_id: str) -> Person | None:
        """Return the resolved person, or ``None`` when the id is unknown."""

    def search_professionals(
        self,
        search: str | None,
        page: int,
        limit: int,
    ) -> tuple[list[Professional], int]:
        """Return one page of professionals and the total match count."""


class AvailabilityStore(Protocol):
    def find_by_professional_and_day(self, professional_id: str, day_of_week: int) -> list[AvailabilitySlot]:
        ...

    def find_all_for_professional(self, professional_id: str) -> list[AvailabilitySlot]:
        ...

    def delete_all_for_professional(self, professional_id: str) -> None:
        ...

    def insert_many(self, slots: Iterable[AvailabilitySlot]) -> list[AvailabilitySlot]:
        ...

    def atomic(self) -> ContextManager[None]:
        """Run the enclosed writes as a single transaction."""


class AppointmentStore(Protocol):
    def find_overlapping(self, professional_id: str, starts_at: datetime, ends_at: datetime) -> list[Appointment]:
        ...

    def insert(self, appointment: Appointment) -> Appointment:
        ...

    def find_by_professional(self, professional_id: str) -> list[Appointment]:
        ...

    def find_by_client(self, client_id: str) -> list[Appointment]:
        ...

    def find_by_professional_between(
        self,
        professional_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[Appointment]:
        """Appointments whose start falls in ``[range_start, range_end)``."""


class NotificationStore(Protocol):
    def insert(self, notification: Notification) -> Notification:
        ...

    def update_status(self, notification_id: str, status: NotificationStatus) -> Notification:
        ...


class NotificationSender(Protocol):
    def send(self, notification: Notification) -> None:
        ...
