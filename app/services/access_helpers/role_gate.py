# /app/services/access_helpers/role_gate.py

from typing import AbstractSet

from app.core.errors import Forbidden
from app.core.principal import Principal, Role


def authorize(principal: Principal, allowed_roles: AbstractSet[Role]) -> None:
    """
    Static role check against an endpoint's declared role set.

    An empty set admits any authenticated principal. Passing this gate says
    nothing about ownership; resource endpoints still ask the scope resolver.
    """
    if allowed_roles and principal.role not in allowed_roles:
        raise Forbidden()
