"""User directory backed by the ``users`` table."""

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from agenda.domain.people import Person, Professional, Role, person_from_role
from agenda.models.user import User


class SqlPersonDirectory:
    """Resolves user ids into ``Professional``/``Client`` variants."""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, person_id: str) -> Person | None:
        user = self.db.query(User).filter(User.id == person_id).first()
        if user is None:
            return None
        return person_from_role(user.role, user.id, user.first_name or '', user.last_name or '')

    def search_professionals(self, search: str | None, page: int, limit: int) -> tuple[list[Professional], int]:
        query = self.db.query(User).filter(User.role == Role.PROFESSIONAL.value)

        if search:
            pattern = f'%{search.lower()}%'
            full_name = func.lower(User.first_name + ' ' + User.last_name)
            query = query.filter(
                or_(
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                    full_name.like(pattern),
                )
            )

        total = query.count()
        users = (
            query.order_by(User.last_name.asc(), User.first_name.asc(), User.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        return [
            Professional(id=user.id, first_name=user.first_name or '', last_name=user.last_name or '')
            for user in users
        ], total
