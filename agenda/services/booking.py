"""
Booking admission.

``BookingService.request_booking`` runs one request through a fixed
sequence of checks and writes nothing until every check has passed:

1. the professional resolves and is a professional
2. the client resolves
3. the two are different people
4. the request starts no earlier than now and has a positive duration
5. the request nests inside one published slot for its UTC weekday
6. no existing appointment of the professional overlaps it
7. the appointment is inserted

Steps 5-7 hold the professional's lock so two concurrent requests for
the same professional cannot both pass step 6. On PostgreSQL an
exclusion constraint backs this up at insert time.

Notifying both parties happens after admission and never fails it.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable

from agenda.domain.appointment import Appointment
from agenda.domain.exceptions import (
    ClientNotFoundError,
    InvalidDurationError,
    NoAvailabilityThatDayError,
    OutsideAvailabilityError,
    PastBookingError,
    SchedulingError,
    SelfBookingError,
    SlotTakenError,
)
from agenda.domain.notification import NotificationChannel
from agenda.domain.people import Person, Professional
from agenda.domain.ports import AppointmentStore, AvailabilityStore, Clock, IdGenerator, PersonDirectory
from agenda.domain.time_of_day import TimeOfDay, as_utc, day_of_week_utc
from agenda.services.locks import KeyedLocks, professional_locks
from agenda.services.notifications import NotificationService
from agenda.services.people import resolve_professional

logger = logging.getLogger(__name__)

UNKNOWN_PARTY_NAME = ('Unknown', '')


@dataclass(frozen=True)
class PartyName:
    first_name: str
    last_name: str


@dataclass(frozen=True)
class AppointmentWithParties:
    appointment: Appointment
    professional: PartyName
    client: PartyName


class BookingService:
    def __init__(
        self,
        directory: PersonDirectory,
        availability: AvailabilityStore,
        appointments: AppointmentStore,
        clock: Clock,
        ids: IdGenerator,
        notifications: NotificationService | None = None,
        notification_channels: Iterable[NotificationChannel] = (),
        locks: KeyedLocks = professional_locks,
    ):
        self.directory = directory
        self.availability = availability
        self.appointments = appointments
        self.clock = clock
        self.ids = ids
        self.notifications = notifications
        self.notification_channels = list(notification_channels)
        self.locks = locks

    def request_booking(
        self,
        professional_id: str,
        client_id: str,
        starts_at: datetime,
        ends_at: datetime,
    ) -> Appointment:
        try:
            appointment = self._admit(professional_id, client_id, as_utc(starts_at), as_utc(ends_at))
        except SchedulingError as exc:
            logger.info(
                'Booking rejected for professional %s by client %s: %s',
                professional_id,
                client_id,
                exc.__class__.__name__,
            )
            raise

        logger.info(
            'Appointment %s admitted for professional %s (%s - %s)',
            appointment.id,
            appointment.professional_id,
            appointment.starts_at.isoformat(),
            appointment.ends_at.isoformat(),
        )
        self._notify_parties(appointment)
        return appointment

    def _admit(self, professional_id: str, client_id: str, starts_at: datetime, ends_at: datetime) -> Appointment:
        professional = resolve_professional(self.directory, professional_id)

        client = self.directory.resolve(client_id)
        if client is None:
            raise ClientNotFoundError()

        if professional.id == client.id:
            raise SelfBookingError()

        if starts_at < self.clock.now():
            raise PastBookingError()

        if starts_at >= ends_at:
            raise InvalidDurationError()

        with self.locks.hold(professional.id):
            self._ensure_within_availability(professional.id, starts_at, ends_at)

            if self.appointments.find_overlapping(professional.id, starts_at, ends_at):
                raise SlotTakenError()

            appointment = Appointment(
                id=self.ids.next(),
                professional_id=professional.id,
                client_id=client.id,
                starts_at=starts_at,
                ends_at=ends_at,
            )
            return self.appointments.insert(appointment)

    def _ensure_within_availability(self, professional_id: str, starts_at: datetime, ends_at: datetime) -> None:
        day_of_week = day_of_week_utc(starts_at)

        slots = self.availability.find_by_professional_and_day(professional_id, day_of_week)
        if not slots:
            raise NoAvailabilityThatDayError()

        # Slots are same-day windows, so a request crossing UTC midnight never nests.
        if ends_at.date() != starts_at.date():
            raise OutsideAvailabilityError()

        # Second precision: an end even one second past the closing minute is outside.
        day = starts_at.date()
        if not any(
            _at(day, slot.start_time) <= starts_at and ends_at <= _at(day, slot.end_time)
            for slot in slots
        ):
            raise OutsideAvailabilityError()

    def _notify_parties(self, appointment: Appointment) -> None:
        if self.notifications is None or not self.notification_channels:
            return

        window = f'{appointment.starts_at.isoformat()} - {appointment.ends_at.isoformat()}'
        parties = (
            (appointment.client_id, appointment.professional_id),
            (appointment.professional_id, appointment.client_id),
        )

        for recipient_id, other_party_id in parties:
            try:
                other_party = self.directory.resolve(other_party_id)
                self.notifications.send(
                    recipient_id,
                    f'Appointment scheduled: {window} with {_display_name(other_party)}',
                    self.notification_channels,
                )
            except Exception:
                logger.exception(
                    'Notification to %s for appointment %s could not be dispatched',
                    recipient_id,
                    appointment.id,
                )

    def get_my_appointments(self, person: Person) -> list[AppointmentWithParties]:
        appointments = list(self.appointments.find_by_client(person.id))
        if isinstance(person, Professional):
            appointments.extend(self.appointments.find_by_professional(person.id))

        unique = {appointment.id: appointment for appointment in appointments}
        ordered = sorted(unique.values(), key=lambda appointment: (appointment.starts_at, appointment.id))

        names: dict[str, PartyName] = {}
        for appointment in ordered:
            for party_id in (appointment.professional_id, appointment.client_id):
                if party_id not in names:
                    names[party_id] = _party_name(self.directory.resolve(party_id))

        return [
            AppointmentWithParties(
                appointment=appointment,
                professional=names[appointment.professional_id],
                client=names[appointment.client_id],
            )
            for appointment in ordered
        ]

    def get_professional_appointments_on(self, professional_id: str, day: date) -> list[Appointment]:
        range_start = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
        return self.appointments.find_by_professional_between(
            professional_id,
            range_start,
            range_start + timedelta(days=1),
        )


def _at(day: date, moment: TimeOfDay) -> datetime:
    return datetime.combine(day, time(moment.hour, moment.minute), tzinfo=timezone.utc)


def _party_name(person: Person | None) -> PartyName:
    if person is None:
        return PartyName(*UNKNOWN_PARTY_NAME)
    return PartyName(first_name=person.first_name, last_name=person.last_name)


def _display_name(person: Person | None) -> str:
    if person is None:
        return ' '.join(UNKNOWN_PARTY_NAME).strip()
    return person.full_name
