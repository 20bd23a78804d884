from fastapi import HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agenda.core import config
from agenda.database import ensure_appointment_schema, ensure_availability_schema
from agenda.domain.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    RoleViolationError,
    SchedulingError,
    UnavailableError,
)
from agenda.domain.notification import NotificationChannel
from agenda.notifications.senders import build_default_registry
from agenda.repositories.appointment import SqlAppointmentStore
from agenda.repositories.availability import SqlAvailabilityStore
from agenda.repositories.notification import SqlNotificationStore
from agenda.repositories.people import SqlPersonDirectory
from agenda.services.availability import AvailabilityService
from agenda.services.booking import BookingService
from agenda.services.clock import SystemClock, UuidGenerator
from agenda.services.notifications import NotificationService

TIME_FORMAT_MESSAGE = 'must be in HH:MM format (e.g., 09:00)'

STATUS_BY_ERROR_KIND = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (RoleViolationError, status.HTTP_403_FORBIDDEN),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnavailableError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)

clock = SystemClock()
ids = UuidGenerator()
senders = build_default_registry()


class PartyNameResponse(BaseModel):
    first_name: str
    last_name: str


def ensure_database_ready() -> None:
    try:
        ensure_availability_schema()
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


def database_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail='Database unavailable. Verify DATABASE_URL and database credentials.',
    )


def to_http_exception(exc: SchedulingError) -> HTTPException:
    for error_kind, status_code in STATUS_BY_ERROR_KIND:
        if isinstance(exc, error_kind):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)


def configured_channels() -> list[NotificationChannel]:
    return [NotificationChannel(channel.strip().upper()) for channel in config.NOTIFICATION_CHANNELS]


def build_availability_service(db: Session) -> AvailabilityService:
    return AvailabilityService(
        directory=SqlPersonDirectory(db),
        store=SqlAvailabilityStore(db),
        ids=ids,
    )


def build_booking_service(db: Session) -> BookingService:
    return BookingService(
        directory=SqlPersonDirectory(db),
        availability=SqlAvailabilityStore(db),
        appointments=SqlAppointmentStore(db),
        clock=clock,
        ids=ids,
        notifications=NotificationService(
            store=SqlNotificationStore(db),
            senders=senders,
            clock=clock,
            ids=ids,
        ),
        notification_channels=configured_channels(),
    )