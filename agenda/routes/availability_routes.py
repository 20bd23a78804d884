import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agenda.auth.dependencies import get_current_professional
from agenda.database import get_db
from agenda.domain.availability import AvailabilitySlot
from agenda.domain.exceptions import SchedulingError
from agenda.domain.people import Professional
from agenda.domain.time_of_day import TIME_PATTERN
from agenda.routes.common import (
    TIME_FORMAT_MESSAGE,
    PartyNameResponse,
    build_availability_service,
    database_unavailable,
    ensure_database_ready,
    to_http_exception,
)
from agenda.services.availability import SlotRequest

router = APIRouter(tags=['availability'])

logger = logging.getLogger(__name__)


class TimeSlotRequest(BaseModel):
    start_time: str
    end_time: str

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        normalized = value.strip()
        if not TIME_PATTERN.match(normalized):
            raise ValueError(f'Time {TIME_FORMAT_MESSAGE}.')
        return normalized


class DayScheduleRequest(BaseModel):
    day_of_week: int
    enabled: bool = True
    time_slots: list[TimeSlotRequest] = []

    @field_validator('day_of_week')
    @classmethod
    def validate_day_of_week(cls, value: int) -> int:
        if not 0 <= value <= 6:
            raise ValueError('day_of_week must be between 0 (Sunday) and 6 (Saturday).')
        return value


class ReplaceAvailabilityRequest(BaseModel):
    schedule: list[DayScheduleRequest]

    def to_slot_requests(self) -> list[SlotRequest]:
        return [
            SlotRequest(day_of_week=day.day_of_week, start_time=slot.start_time, end_time=slot.end_time)
            for day in self.schedule
            if day.enabled
            for slot in day.time_slots
        ]


class ReplaceAvailabilityResponse(BaseModel):
    message: str
    created_slots: int


class AvailabilitySlotResponse(BaseModel):
    id: str
    day_of_week: int
    start_time: str
    end_time: str

    @classmethod
    def from_slot(cls, slot: AvailabilitySlot) -> 'AvailabilitySlotResponse':
        return cls(
            id=slot.id,
            day_of_week=slot.day_of_week,
            start_time=str(slot.start_time),
            end_time=str(slot.end_time),
        )


class ProfessionalAvailabilityResponse(BaseModel):
    professional: PartyNameResponse
    availabilities: list[AvailabilitySlotResponse]


@router.put('/me', response_model=ReplaceAvailabilityResponse)
def replace_my_availability(
    data: ReplaceAvailabilityRequest,
    current_user: Professional = Depends(get_current_professional),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        created_slots = build_availability_service(db).replace_availability(
            current_user.id,
            data.to_slot_requests(),
        )
        return ReplaceAvailabilityResponse(
            message='Availability schedule updated successfully.',
            created_slots=created_slots,
        )
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Replacing availability for %s failed', current_user.id)
        raise database_unavailable() from exc


@router.get('/me', response_model=list[AvailabilitySlotResponse])
def get_my_availability(
    current_user: Professional = Depends(get_current_professional),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        slots = build_availability_service(db).get_my_availability(current_user.id)
        return [AvailabilitySlotResponse.from_slot(slot) for slot in slots]
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('/professionals/{professional_id}', response_model=ProfessionalAvailabilityResponse)
def get_professional_availability(professional_id: str, db: Session = Depends(get_db)):
    if not professional_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Professional id is required.',
        )

    ensure_database_ready()

    try:
        professional, slots = build_availability_service(db).get_professional_availability(professional_id)
        return ProfessionalAvailabilityResponse(
            professional=PartyNameResponse(first_name=professional.first_name, last_name=professional.last_name),
            availabilities=[AvailabilitySlotResponse.from_slot(slot) for slot in slots],
        )
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
