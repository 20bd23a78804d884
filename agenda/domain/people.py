"""
Resolved identities.

A person is decided once, when the directory resolves an id, into either
a ``Professional`` or a ``Client``. Downstream code takes the resolved
variant instead of re-reading a role string.
"""

import enum
from dataclasses import dataclass


class Role(str, enum.Enum):
    PROFESSIONAL = 'PROFESSIONAL'
    CLIENT = 'CLIENT'


@dataclass(frozen=True)
class Professional:
    id: str
    first_name: str
    last_name: str

    role = Role.PROFESSIONAL

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()


@dataclass(frozen=True)
class Client:
    id: str
    first_name: str
    last_name: str

    role = Role.CLIENT

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()


Person = Professional | Client


def person_from_role(role: str | None, id: str, first_name: str, last_name: str) -> Person:
    """Anything other than a professional role, including unknown roles, resolves to a client."""
    if (role or '').strip().upper() == Role.PROFESSIONAL.value:
        return Professional(id=id, first_name=first_name, last_name=last_name)
    return Client(id=id, first_name=first_name, last_name=last_name)
