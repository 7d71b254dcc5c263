# /app/services/identity_service.py

"""
The identity resolver: turns the `Authorization` header of a request into a
verified `Principal`, or fails with `Unauthenticated`.

The order of checks matters. The header is parsed and the token verified
before the user store is consulted, so a request with a missing or bad
credential never issues a single query. The role is always read from the
stored user record; the role claim inside the token is ignored, so a token
minted before a role change cannot keep the old privileges.
"""

import logging
from typing import Any, Optional

from app.core.errors import Unauthenticated
from app.core.principal import Principal, Role
from app.core.security import AuthError, decode_access_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def parse_bearer(authorization: Optional[str]) -> str:
    """Extracts the token from a `Bearer <token>` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        logger.debug("Rejected credential: missing or non-bearer Authorization header")
        raise Unauthenticated()
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        logger.debug("Rejected credential: empty bearer token")
        raise Unauthenticated()
    return token


def _user_id_from_claims(claims: dict) -> Optional[int]:
    raw: Any = claims.get("id", claims.get("userId"))
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.isdigit():
        return int(raw)
    return None


def resolve(authorization: Optional[str], users) -> Principal:
    """
    Resolves a principal from an `Authorization` header value.

    Args:
        authorization: The raw header value, or None when absent.
        users: Any object exposing `get_user_by_id(user_id)`; normally the
            request's DatabaseService.

    Raises:
        Unauthenticated: for every failure, without saying which check failed.
    """
    token = parse_bearer(authorization)
    try:
        claims = decode_access_token(token)
    except AuthError as exc:
        logger.debug("Rejected credential: %s", exc)
        raise Unauthenticated() from exc

    user_id = _user_id_from_claims(claims)
    if user_id is None:
        logger.debug("Rejected credential: token carries no usable user id")
        raise Unauthenticated()

    user = users.get_user_by_id(user_id)
    if user is None:
        logger.debug("Rejected credential: user %s no longer exists", user_id)
        raise Unauthenticated()

    try:
        role = Role(user.role)
    except ValueError:
        logger.warning("User %s has unknown role %r", user.id, user.role)
        raise Unauthenticated()

    return Principal(id=user.id, role=role)
