# /tests/test_role_gate.py

import pytest

from app.core.errors import Forbidden
from app.core.principal import ALL_ROLES, Principal, Role
from app.services.access_helpers.role_gate import authorize


@pytest.mark.parametrize("role", list(Role))
def test_empty_allowed_set_admits_any_authenticated_role(role):
    authorize(Principal(id=1, role=role), frozenset())


def test_role_in_allowed_set_passes():
    authorize(Principal(id=7, role=Role.TEACHER), {Role.ADMIN, Role.TEACHER})


def test_role_outside_allowed_set_is_forbidden():
    with pytest.raises(Forbidden) as exc_info:
        authorize(Principal(id=7, role=Role.STUDENT), {Role.ADMIN, Role.TEACHER})
    assert exc_info.value.status_code == 403
    assert exc_info.value.to_body() == {"error": "Forbidden"}


def test_all_roles_set_admits_everyone():
    for role in Role:
        authorize(Principal(id=1, role=role), ALL_ROLES)
