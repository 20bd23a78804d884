import pytest

from agenda.domain.availability import AvailabilitySlot, validate_no_overlaps
from agenda.domain.exceptions import (
    ConflictError,
    InvalidDayOfWeekError,
    InvalidRangeError,
    InvalidTimeFormatError,
    OverlappingSlotsError,
)
from agenda.domain.time_of_day import TimeOfDay


def make_slot(day: int, start: str, end: str, slot_id: str = 'slot') -> AvailabilitySlot:
    return AvailabilitySlot(id=slot_id, professional_id='pro-1', day_of_week=day, start_time=start, end_time=end)


def test_slot_parses_string_times() -> None:
    slot = make_slot(1, '09:00', '17:00')

    assert slot.start_time == TimeOfDay(9, 0)
    assert slot.end_time == TimeOfDay(17, 0)
    assert str(slot) == 'Monday 09:00-17:00'


@pytest.mark.parametrize('day', [-1, 7, 10, True, '1'])
def test_slot_rejects_day_out_of_range(day) -> None:
    with pytest.raises(InvalidDayOfWeekError):
        make_slot(day, '09:00', '10:00')


def test_slot_rejects_zero_length_range() -> None:
    with pytest.raises(InvalidRangeError):
        make_slot(1, '09:00', '09:00')


def test_slot_rejects_reversed_range() -> None:
    with pytest.raises(InvalidRangeError):
        make_slot(1, '12:00', '09:00')


def test_slot_rejects_malformed_time() -> None:
    with pytest.raises(InvalidTimeFormatError):
        make_slot(1, '9:00', '10:00')


def test_touching_slots_do_not_overlap_in_either_direction() -> None:
    morning = make_slot(1, '09:00', '12:00')
    afternoon = make_slot(1, '12:00', '14:00')

    assert not morning.overlaps_with(afternoon)
    assert not afternoon.overlaps_with(morning)


def test_overlapping_slots_on_same_day() -> None:
    first = make_slot(1, '09:00', '12:00')
    second = make_slot(1, '11:00', '14:00')

    assert first.overlaps_with(second)
    assert second.overlaps_with(first)


def test_nested_slot_overlaps() -> None:
    assert make_slot(2, '08:00', '18:00').overlaps_with(make_slot(2, '10:00', '11:00'))


def test_same_hours_on_different_days_do_not_overlap() -> None:
    assert not make_slot(1, '09:00', '12:00').overlaps_with(make_slot(2, '09:00', '12:00'))


def test_contains_time_is_half_open() -> None:
    slot = make_slot(1, '09:00', '17:00')

    assert slot.contains_time('09:00')
    assert slot.contains_time('16:59')
    assert not slot.contains_time('17:00')
    assert not slot.contains_time('08:59')


def test_contains_range_requires_nesting() -> None:
    slot = make_slot(1, '09:00', '17:00')

    assert slot.contains_range(TimeOfDay(9, 0), TimeOfDay(17, 0))
    assert slot.contains_range(TimeOfDay(10, 0), TimeOfDay(11, 0))
    assert not slot.contains_range(TimeOfDay(16, 30), TimeOfDay(17, 30))
    assert not slot.contains_range(TimeOfDay(8, 30), TimeOfDay(9, 30))


def test_validate_no_overlaps_accepts_back_to_back_and_other_days() -> None:
    validate_no_overlaps([
        make_slot(1, '12:00', '14:00'),
        make_slot(1, '09:00', '12:00'),
        make_slot(2, '09:00', '12:00'),
        make_slot(3, '11:00', '11:30'),
    ])


def test_validate_no_overlaps_accepts_empty_batch() -> None:
    validate_no_overlaps([])


def test_validate_no_overlaps_reports_day_and_pair() -> None:
    first = make_slot(1, '09:00', '12:00', 'a')
    second = make_slot(1, '11:00', '14:00', 'b')

    with pytest.raises(OverlappingSlotsError) as exception_info:
        validate_no_overlaps([second, first])

    assert exception_info.value.day_of_week == 1
    assert exception_info.value.first is first
    assert exception_info.value.second is second
    assert isinstance(exception_info.value, ConflictError)
    assert '09:00-12:00 overlaps with 11:00-14:00' in str(exception_info.value)


def test_validate_no_overlaps_detects_slot_nested_in_earlier_one() -> None:
    with pytest.raises(OverlappingSlotsError):
        validate_no_overlaps([make_slot(4, '08:00', '18:00'), make_slot(4, '10:00', '11:00')])


def test_validate_no_overlaps_is_idempotent() -> None:
    batch = [
        make_slot(5, '13:00', '15:00', 'x'),
        make_slot(3, '10:00', '12:00', 'y'),
        make_slot(3, '11:00', '13:00', 'z'),
        make_slot(5, '14:00', '16:00', 'w'),
    ]

    reported = []
    for _ in range(2):
        with pytest.raises(OverlappingSlotsError) as exception_info:
            validate_no_overlaps(batch)
        reported.append((exception_info.value.day_of_week, exception_info.value.first.id, exception_info.value.second.id))

    assert reported[0] == reported[1] == (3, 'y', 'z')
