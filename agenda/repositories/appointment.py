"""Appointment store backed by the ``appointments`` table."""

from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agenda.database import APPOINTMENT_EXCLUSION_CONSTRAINT
from agenda.domain.appointment import Appointment
from agenda.domain.exceptions import SlotTakenError
from agenda.domain.time_of_day import as_utc
from agenda.models.appointment import Appointment as AppointmentRow


def to_storage(instant: datetime) -> datetime:
    return as_utc(instant).replace(tzinfo=None)


def from_storage(instant: datetime | None) -> datetime | None:
    if instant is None:
        return None
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def to_domain(row: AppointmentRow) -> Appointment:
    return Appointment(
        id=row.id,
        professional_id=row.professional_id,
        client_id=row.client_id,
        starts_at=from_storage(row.starts_at),
        ends_at=from_storage(row.ends_at),
        created_at=from_storage(row.created_at),
    )


class SqlAppointmentStore:
    def __init__(self, db: Session):
        self.db = db

    def find_overlapping(self, professional_id: str, starts_at: datetime, ends_at: datetime) -> list[Appointment]:
        # Half-open overlap: existing.start < end AND existing.end > start
        rows = self.db.query(AppointmentRow).filter(
            AppointmentRow.professional_id == professional_id,
            AppointmentRow.starts_at < to_storage(ends_at),
            AppointmentRow.ends_at > to_storage(starts_at),
        ).order_by(AppointmentRow.starts_at.asc()).all()

        return [to_domain(row) for row in rows]

    def insert(self, appointment: Appointment) -> Appointment:
        row = AppointmentRow(
            id=appointment.id,
            professional_id=appointment.professional_id,
            client_id=appointment.client_id,
            starts_at=to_storage(appointment.starts_at),
            ends_at=to_storage(appointment.ends_at),
        )

        try:
            self.db.add(row)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if APPOINTMENT_EXCLUSION_CONSTRAINT in str(exc.orig):
                raise SlotTakenError() from exc
            raise

        self.db.refresh(row)
        return to_domain(row)

    def find_by_professional(self, professional_id: str) -> list[Appointment]:
        rows = self.db.query(AppointmentRow).filter(
            AppointmentRow.professional_id == professional_id,
        ).order_by(AppointmentRow.starts_at.asc()).all()

        return [to_domain(row) for row in rows]

    def find_by_client(self, client_id: str) -> list[Appointment]:
        rows = self.db.query(AppointmentRow).filter(
            AppointmentRow.client_id == client_id,
        ).order_by(AppointmentRow.starts_at.asc()).all()

        return [to_domain(row) for row in rows]

    def find_by_professional_between(
        self,
        professional_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[Appointment]:
        rows = self.db.query(AppointmentRow).filter(
            AppointmentRow.professional_id == professional_id,
            AppointmentRow.starts_at >= to_storage(range_start),
            AppointmentRow.starts_at < to_storage(range_end),
        ).order_by(AppointmentRow.starts_at.asc()).all()

        return [to_domain(row) for row in rows]
