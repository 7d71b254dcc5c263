# /tests/test_identity_service.py

from types import SimpleNamespace
from unittest.mock import MagicMock

import jwt
import pytest

from app.core.config import settings
from app.core.errors import Unauthenticated
from app.core.principal import Principal, Role
from app.core.security import create_access_token
from app.services import identity_service


@pytest.fixture
def users():
    """A user store holding one teacher (id 3); anything else is missing."""
    store = MagicMock()
    store.get_user_by_id.side_effect = lambda user_id: (
        SimpleNamespace(id=3, role="TEACHER") if user_id == 3 else None
    )
    return store


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer", "Bearer    ", "bearer token"])
def test_missing_or_malformed_header_never_queries_the_store(users, header):
    with pytest.raises(Unauthenticated):
        identity_service.resolve(header, users)
    users.get_user_by_id.assert_not_called()


def test_valid_token_resolves_principal(users):
    token = create_access_token(3, "TEACHER")
    assert identity_service.resolve(f"Bearer {token}", users) == Principal(id=3, role=Role.TEACHER)


def test_role_comes_from_stored_user_not_token(users):
    token = create_access_token(3, "ADMIN")
    principal = identity_service.resolve(f"Bearer {token}", users)
    assert principal.role is Role.TEACHER


def test_expired_token_is_rejected_before_lookup(users):
    token = create_access_token(3, "TEACHER", expires_minutes=-5)
    with pytest.raises(Unauthenticated):
        identity_service.resolve(f"Bearer {token}", users)
    users.get_user_by_id.assert_not_called()


def test_token_signed_with_other_secret_is_rejected(users):
    token = jwt.encode({"id": 3}, settings.jwt_secret + "-other", algorithm=settings.jwt_algorithm)
    with pytest.raises(Unauthenticated):
        identity_service.resolve(f"Bearer {token}", users)
    users.get_user_by_id.assert_not_called()


def test_deleted_user_is_unauthenticated(users):
    token = create_access_token(99, "ADMIN")
    with pytest.raises(Unauthenticated) as exc_info:
        identity_service.resolve(f"Bearer {token}", users)
    # Same generic message as every other failure.
    assert exc_info.value.to_body() == {"error": "Unauthorized"}


def test_legacy_user_id_claim_is_accepted(users):
    token = jwt.encode({"userId": "3"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    assert identity_service.resolve(f"Bearer {token}", users).id == 3


@pytest.mark.parametrize("claims", [{}, {"id": True}, {"id": "abc"}, {"id": 3.5}])
def test_unusable_user_id_claim_is_rejected(users, claims):
    token = jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(Unauthenticated):
        identity_service.resolve(f"Bearer {token}", users)
    users.get_user_by_id.assert_not_called()


def test_unknown_stored_role_is_unauthenticated():
    store = MagicMock()
    store.get_user_by_id.return_value = SimpleNamespace(id=3, role="JANITOR")
    token = create_access_token(3, "JANITOR")
    with pytest.raises(Unauthenticated):
        identity_service.resolve(f"Bearer {token}", store)
