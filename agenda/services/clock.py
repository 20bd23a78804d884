"""Default clock and id generator."""

import uuid
from datetime import datetime, timezone


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class UuidGenerator:
    def next(self) -> str:
        return str(uuid.uuid4())
