from contextlib import contextmanager
from threading import Lock
from typing import Iterator


class KeyedLocks:
    """One mutex per key, created on first use and kept for the process lifetime."""

    def __init__(self):
        self._guard = Lock()
        self._locks: dict[str, Lock] = {}

    def lock_for(self, key: str) -> Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self.lock_for(key):
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Serialises the check-then-insert section of booking per professional.
professional_locks = KeyedLocks()
