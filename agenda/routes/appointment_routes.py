import logging
from datetime import date, datetime, time, timezone

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agenda.auth.dependencies import get_current_user
from agenda.database import get_db
from agenda.domain.appointment import Appointment
from agenda.domain.exceptions import SchedulingError
from agenda.domain.people import Person
from agenda.domain.time_of_day import TIME_PATTERN, TimeOfDay
from agenda.routes.common import (
    TIME_FORMAT_MESSAGE,
    PartyNameResponse,
    build_booking_service,
    database_unavailable,
    ensure_database_ready,
    to_http_exception,
)
from agenda.services.booking import AppointmentWithParties

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)


class CreateAppointmentRequest(BaseModel):
    professional_id: str
    date: date
    start_time: str
    end_time: str

    @field_validator('professional_id')
    @classmethod
    def validate_professional_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Professional id is required.')
        return normalized

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        normalized = value.strip()
        if not TIME_PATTERN.match(normalized):
            raise ValueError(f'Time {TIME_FORMAT_MESSAGE}.')
        return normalized

    def starts_at(self) -> datetime:
        return _combine_utc(self.date, self.start_time)

    def ends_at(self) -> datetime:
        return _combine_utc(self.date, self.end_time)


class AppointmentResponse(BaseModel):
    id: str
    professional_id: str
    client_id: str
    professional: PartyNameResponse | None = None
    client: PartyNameResponse | None = None
    date: date
    start_time: str
    end_time: str
    starts_at: datetime
    ends_at: datetime
    created_at: datetime | None = None

    @classmethod
    def from_appointment(
        cls,
        appointment: Appointment,
        professional: PartyNameResponse | None = None,
        client: PartyNameResponse | None = None,
    ) -> 'AppointmentResponse':
        return cls(
            id=appointment.id,
            professional_id=appointment.professional_id,
            client_id=appointment.client_id,
            professional=professional,
            client=client,
            date=appointment.starts_at.date(),
            start_time=str(TimeOfDay.from_instant_utc(appointment.starts_at)),
            end_time=str(TimeOfDay.from_instant_utc(appointment.ends_at)),
            starts_at=appointment.starts_at,
            ends_at=appointment.ends_at,
            created_at=appointment.created_at,
        )

    @classmethod
    def from_enriched(cls, item: AppointmentWithParties) -> 'AppointmentResponse':
        return cls.from_appointment(
            item.appointment,
            professional=PartyNameResponse(
                first_name=item.professional.first_name,
                last_name=item.professional.last_name,
            ),
            client=PartyNameResponse(first_name=item.client.first_name, last_name=item.client.last_name),
        )


def _combine_utc(day: date, value: str) -> datetime:
    moment = TimeOfDay.parse(value)
    return datetime.combine(day, time(moment.hour, moment.minute), tzinfo=timezone.utc)


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: CreateAppointmentRequest,
    current_user: Person = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointment = build_booking_service(db).request_booking(
            professional_id=data.professional_id,
            client_id=current_user.id,
            starts_at=data.starts_at(),
            ends_at=data.ends_at(),
        )
        return AppointmentResponse.from_appointment(appointment)
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Booking for professional %s failed', data.professional_id)
        raise database_unavailable() from exc


@router.get('/me', response_model=list[AppointmentResponse])
def list_my_appointments(
    current_user: Person = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointments = build_booking_service(db).get_my_appointments(current_user)
        return [AppointmentResponse.from_enriched(item) for item in appointments]
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('/professional/{professional_id}', response_model=list[AppointmentResponse])
def list_professional_appointments(
    professional_id: str,
    day: date = Query(..., alias='date'),
    current_user: Person = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointments = build_booking_service(db).get_professional_appointments_on(professional_id, day)
        return [AppointmentResponse.from_appointment(appointment) for appointment in appointments]
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
