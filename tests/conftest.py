import os
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from agenda.database import Base  # noqa: E402
from agenda.models import appointment, availability, notification  # noqa: E402,F401
from agenda.models.user import User  # noqa: E402

# Sunday 2026-03-01 08:00 UTC; 2026-03-02 is a Monday.
DEFAULT_NOW = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current


class SequentialIds:
    def __init__(self, prefix: str = 'id'):
        self.prefix = prefix
        self.counter = 0

    def next(self) -> str:
        self.counter += 1
        return f'{self.prefix}-{self.counter}'


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(DEFAULT_NOW)


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def add_user(db):
    def _add_user(user_id: str, role: str = 'CLIENT', first_name: str = '', last_name: str = '') -> User:
        user = User(
            id=user_id,
            email=f'{user_id}@example.com',
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _add_user
