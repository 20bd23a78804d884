"""
Weekly availability replacement and lookup.

A replacement always carries the professional's whole week. The new
batch is built and validated in memory first; only then are the old
slots deleted and the new ones inserted, inside one transaction. A
rejected batch therefore leaves the previous schedule untouched.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from agenda.domain.availability import AvailabilitySlot, validate_no_overlaps
from agenda.domain.people import Professional
from agenda.domain.ports import AvailabilityStore, IdGenerator, PersonDirectory
from agenda.domain.time_of_day import TimeOfDay
from agenda.services.people import resolve_professional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotRequest:
    day_of_week: int
    start_time: TimeOfDay | str
    end_time: TimeOfDay | str


class AvailabilityService:
    def __init__(self, directory: PersonDirectory, store: AvailabilityStore, ids: IdGenerator):
        self.directory = directory
        self.store = store
        self.ids = ids

    def replace_availability(self, professional_id: str, slot_requests: Iterable[SlotRequest]) -> int:
        professional = resolve_professional(self.directory, professional_id)

        slots = [
            AvailabilitySlot(
                id=self.ids.next(),
                professional_id=professional.id,
                day_of_week=request.day_of_week,
                start_time=request.start_time,
                end_time=request.end_time,
            )
            for request in slot_requests
        ]
        validate_no_overlaps(slots)

        with self.store.atomic():
            self.store.delete_all_for_professional(professional.id)
            created = self.store.insert_many(slots)

        logger.info('Replaced weekly availability for professional %s with %d slot(s)', professional.id, len(created))
        return len(created)

    def get_my_availability(self, professional_id: str) -> list[AvailabilitySlot]:
        professional = resolve_professional(self.directory, professional_id)
        return self.store.find_all_for_professional(professional.id)

    def get_professional_availability(self, professional_id: str) -> tuple[Professional, list[AvailabilitySlot]]:
        professional = resolve_professional(self.directory, professional_id)
        return professional, self.store.find_all_for_professional(professional.id)
