"""Availability store backed by the ``availability`` table."""

from contextlib import contextmanager
from typing import Iterable, Iterator

from sqlalchemy.orm import Session

from agenda.domain.availability import AvailabilitySlot
from agenda.models.availability import Availability


def to_domain(row: Availability) -> AvailabilitySlot:
    return AvailabilitySlot(
        id=row.id,
        professional_id=row.professional_id,
        day_of_week=row.day_of_week,
        start_time=row.start_time,
        end_time=row.end_time,
    )


class SqlAvailabilityStore:
    """
    Writes are only flushed; they are committed when the outermost
    ``atomic()`` block exits, or immediately when no block is open.
    """

    def __init__(self, db: Session):
        self.db = db
        self._atomic_depth = 0

    @contextmanager
    def atomic(self) -> Iterator[None]:
        self._atomic_depth += 1
        try:
            yield
        except BaseException:
            self._atomic_depth -= 1
            self.db.rollback()
            raise
        self._atomic_depth -= 1
        if self._atomic_depth == 0:
            self.db.commit()

    def _commit_unless_atomic(self) -> None:
        if self._atomic_depth == 0:
            self.db.commit()
        else:
            self.db.flush()

    def find_by_professional_and_day(self, professional_id: str, day_of_week: int) -> list[AvailabilitySlot]:
        rows = self.db.query(Availability).filter(
            Availability.professional_id == professional_id,
            Availability.day_of_week == day_of_week,
        ).order_by(Availability.start_time.asc()).all()

        return [to_domain(row) for row in rows]

    def find_all_for_professional(self, professional_id: str) -> list[AvailabilitySlot]:
        rows = self.db.query(Availability).filter(
            Availability.professional_id == professional_id,
        ).order_by(Availability.day_of_week.asc(), Availability.start_time.asc()).all()

        return [to_domain(row) for row in rows]

    def delete_all_for_professional(self, professional_id: str) -> None:
        self.db.query(Availability).filter(
            Availability.professional_id == professional_id,
        ).delete(synchronize_session=False)
        self._commit_unless_atomic()

    def insert_many(self, slots: Iterable[AvailabilitySlot]) -> list[AvailabilitySlot]:
        slots = list(slots)
        self.db.add_all(
            Availability(
                id=slot.id,
                professional_id=slot.professional_id,
                day_of_week=slot.day_of_week,
                start_time=str(slot.start_time),
                end_time=str(slot.end_time),
            )
            for slot in slots
        )
        self._commit_unless_atomic()
        return slots
