# /app/core/deps.py

"""
FastAPI dependencies that put the access-control layer in front of every
protected endpoint.

`require_roles(...)` is what routers declare: it resolves the principal from
the bearer credential, applies the role gate and hands the `Principal` to the
endpoint, which then passes it explicitly to every service call.
"""

from typing import Callable, Optional

from fastapi import Depends, Header, Request

from app.core.principal import Principal, Role
from app.services import identity_service
from app.services.access_helpers.role_gate import authorize
from app.services.access_helpers.scope_resolver import ScopeResolver
from app.services.database_service import DatabaseService, get_db_service

PRINCIPAL_STATE_KEY = "principal"


def get_current_principal(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    db: DatabaseService = Depends(get_db_service),
) -> Principal:
    principal = identity_service.resolve(authorization, db)
    # The audit middleware reads the acting user from here once the response
    # has been sent. Nothing else reads request state.
    setattr(request.state, PRINCIPAL_STATE_KEY, principal)
    return principal


def require_roles(*allowed_roles: Role) -> Callable:
    """Dependency factory; no roles means any authenticated principal."""
    allowed = frozenset(allowed_roles)

    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        authorize(principal, allowed)
        return principal

    return dependency


def get_scope_resolver(db: DatabaseService = Depends(get_db_service)) -> ScopeResolver:
    return ScopeResolver(db)
