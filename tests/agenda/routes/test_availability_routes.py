import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from agenda.auth.dependencies import get_current_professional
from agenda.domain.people import Client, Professional
from agenda.routes.availability_routes import (
    DayScheduleRequest,
    ReplaceAvailabilityRequest,
    TimeSlotRequest,
    get_my_availability,
    get_professional_availability,
    replace_my_availability,
)

PROFESSIONAL = Professional(id='pro-1', first_name='John', last_name='Doe')


@pytest.fixture(autouse=True)
def skip_schema_bootstrap(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('agenda.routes.availability_routes.ensure_database_ready', lambda: None)


@pytest.fixture
def people(add_user):
    add_user('pro-1', role='PROFESSIONAL', first_name='John', last_name='Doe')
    add_user('client-1', role='CLIENT', first_name='Jane', last_name='Smith')


def weekday_request(*slots: tuple[int, str, str], disabled_days: tuple[int, ...] = ()) -> ReplaceAvailabilityRequest:
    days: dict[int, list[TimeSlotRequest]] = {}
    for day, start, end in slots:
        days.setdefault(day, []).append(TimeSlotRequest(start_time=start, end_time=end))
    return ReplaceAvailabilityRequest(
        schedule=[
            DayScheduleRequest(day_of_week=day, enabled=day not in disabled_days, time_slots=time_slots)
            for day, time_slots in days.items()
        ]
    )


def test_time_slot_request_normalizes_whitespace() -> None:
    request = TimeSlotRequest(start_time=' 09:00 ', end_time='17:00')

    assert request.start_time == '09:00'


@pytest.mark.parametrize('value', ['9:00', '24:00', '09:5', 'noon'])
def test_time_slot_request_rejects_malformed_time(value: str) -> None:
    with pytest.raises(ValidationError):
        TimeSlotRequest(start_time=value, end_time='17:00')


@pytest.mark.parametrize('day', [-1, 7])
def test_day_schedule_request_rejects_day_out_of_range(day: int) -> None:
    with pytest.raises(ValidationError):
        DayScheduleRequest(day_of_week=day, enabled=True, time_slots=[])


def test_disabled_days_are_dropped_from_slot_requests() -> None:
    request = weekday_request((1, '09:00', '12:00'), (2, '10:00', '11:00'), disabled_days=(2,))

    slot_requests = request.to_slot_requests()

    assert [(slot.day_of_week, slot.start_time, slot.end_time) for slot in slot_requests] == [(1, '09:00', '12:00')]


def test_replace_my_availability_returns_created_count(db, people) -> None:
    response = replace_my_availability(
        data=weekday_request((1, '09:00', '12:00'), (1, '12:00', '14:00')),
        current_user=PROFESSIONAL,
        db=db,
    )

    assert response.created_slots == 2

    slots = get_my_availability(current_user=PROFESSIONAL, db=db)
    assert [(slot.day_of_week, slot.start_time, slot.end_time) for slot in slots] == [
        (1, '09:00', '12:00'),
        (1, '12:00', '14:00'),
    ]


def test_replace_my_availability_rejects_overlap_with_conflict(db, people) -> None:
    with pytest.raises(HTTPException) as exception_info:
        replace_my_availability(
            data=weekday_request((1, '09:00', '12:00'), (1, '11:00', '14:00')),
            current_user=PROFESSIONAL,
            db=db,
        )

    assert exception_info.value.status_code == 409
    assert 'Overlapping availability slots on day 1' in exception_info.value.detail


def test_replace_my_availability_rejects_inverted_range(db, people) -> None:
    with pytest.raises(HTTPException) as exception_info:
        replace_my_availability(data=weekday_request((3, '12:00', '09:00')), current_user=PROFESSIONAL, db=db)

    assert exception_info.value.status_code == 400


def test_get_current_professional_rejects_clients() -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_current_professional(current_user=Client(id='client-1', first_name='Jane', last_name='Smith'))

    assert exception_info.value.status_code == 403
    assert exception_info.value.detail == 'Only professionals can manage availability.'


def test_get_professional_availability_returns_name_and_slots(db, people) -> None:
    replace_my_availability(data=weekday_request((5, '08:00', '10:00')), current_user=PROFESSIONAL, db=db)

    response = get_professional_availability(professional_id='pro-1', db=db)

    assert response.professional.first_name == 'John'
    assert [slot.start_time for slot in response.availabilities] == ['08:00']


def test_get_professional_availability_for_unknown_id_is_not_found(db, people) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_professional_availability(professional_id='ghost', db=db)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'Professional not found.'


def test_get_professional_availability_for_client_is_forbidden(db, people) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_professional_availability(professional_id='client-1', db=db)

    assert exception_info.value.status_code == 403


def test_get_professional_availability_rejects_blank_id(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_professional_availability(professional_id='   ', db=db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Professional id is required.'
