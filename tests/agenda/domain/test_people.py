import pytest

from agenda.domain.people import Client, Professional, Role, person_from_role


@pytest.mark.parametrize('role', ['PROFESSIONAL', 'professional', ' Professional '])
def test_professional_roles_resolve_to_professional(role: str) -> None:
    person = person_from_role(role, 'pro-1', 'John', 'Doe')

    assert person == Professional(id='pro-1', first_name='John', last_name='Doe')
    assert person.role is Role.PROFESSIONAL


@pytest.mark.parametrize('role', ['CLIENT', 'client', 'ADMIN', 'student', '', None])
def test_other_roles_resolve_to_client(role) -> None:
    person = person_from_role(role, 'user-1', 'Jane', 'Smith')

    assert person == Client(id='user-1', first_name='Jane', last_name='Smith')


def test_full_name_skips_missing_parts() -> None:
    assert Client(id='user-1', first_name='Jane', last_name='').full_name == 'Jane'
