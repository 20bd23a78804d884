from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from agenda.core import config


def _connect_args(url: str) -> dict:
    if url.startswith('sqlite'):
        return {'check_same_thread': False}
    return {}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.DATABASE_ECHO,
    connect_args=_connect_args(config.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

APPOINTMENT_EXCLUSION_CONSTRAINT = 'appointments_professional_no_overlap'

_schema_lock = Lock()
_availability_schema_checked = False
_appointment_schema_checked = False


def ensure_availability_schema(bind: Engine | None = None) -> None:
    global _availability_schema_checked

    if _availability_schema_checked and bind is None:
        return

    target = bind or engine

    with _schema_lock:
        if _availability_schema_checked and bind is None:
            return

        inspector = inspect(target)

        if 'availability' not in inspector.get_table_names():
            _availability_schema_checked = True
            return

        with target.begin() as connection:
            connection.execute(
                text(
                    'CREATE INDEX IF NOT EXISTS idx_availability_professional_day '
                    'ON availability(professional_id, day_of_week, start_time)'
                )
            )

        _availability_schema_checked = True


def ensure_appointment_schema(bind: Engine | None = None) -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked and bind is None:
        return

    target = bind or engine

    with _schema_lock:
        if _appointment_schema_checked and bind is None:
            return

        inspector = inspect(target)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        with target.begin() as connection:
            connection.execute(
                text(
                    'CREATE INDEX IF NOT EXISTS idx_appointments_professional_range '
                    'ON appointments(professional_id, starts_at, ends_at)'
                )
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_client_start ON appointments(client_id, starts_at)')
            )

            # Storage-level guard against double booking; SQLite relies on the in-process lock.
            if target.dialect.name == 'postgresql':
                connection.execute(text('CREATE EXTENSION IF NOT EXISTS btree_gist'))
                existing = connection.execute(
                    text('SELECT 1 FROM pg_constraint WHERE conname = :name'),
                    {'name': APPOINTMENT_EXCLUSION_CONSTRAINT},
                ).first()
                if existing is None:
                    connection.execute(
                        text(
                            f'ALTER TABLE appointments ADD CONSTRAINT {APPOINTMENT_EXCLUSION_CONSTRAINT} '
                            "EXCLUDE USING gist (professional_id WITH =, tsrange(starts_at, ends_at, '[)') WITH &&)"
                        )
                    )

        _appointment_schema_checked = True


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
