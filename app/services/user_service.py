# /app/services/user_service.py

"""
User accounts: self-registration, login, admin-side creation and listing, and
the optional bootstrap admin created at startup.
"""

import logging
from typing import List, Optional

from app.core import security
from app.core.config import Settings
from app.core.errors import BadRequest, Conflict, Forbidden, Unauthenticated
from app.core.principal import Role
from app.models import auth_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

SELF_REGISTRATION_ROLES = frozenset({Role.STUDENT, Role.PARENT})


def _create_account(db: DatabaseService, payload: auth_model.RegisterRequest):
    existing = db.find_user_by_username_or_email(payload.username, payload.email)
    if existing is not None:
        field = "username" if existing.username == payload.username else "email"
        raise Conflict(field=field, message="Username or email already registered")
    return db.add_user({
        "username": payload.username,
        "email": payload.email,
        "password_hash": security.hash_password(payload.password),
        "role": payload.role.value,
    })


def register_user(db: DatabaseService, payload: auth_model.RegisterRequest):
    """Public registration. Privileged roles can only be granted by an admin."""
    if payload.role not in SELF_REGISTRATION_ROLES:
        raise Forbidden()
    return _create_account(db, payload)


def create_user(db: DatabaseService, payload: auth_model.UserCreate):
    return _create_account(db, payload)


def login(db: DatabaseService, payload: auth_model.LoginRequest) -> auth_model.LoginResponse:
    user = db.get_user_by_username(payload.username)
    if user is None or not security.verify_password(payload.password, user.password_hash):
        raise Unauthenticated("Incorrect username or password")
    token = security.create_access_token(user_id=user.id, role=user.role)
    return auth_model.LoginResponse(token=token, user=auth_model.UserPublic.model_validate(user))


def list_users(db: DatabaseService, role: Optional[str] = None) -> List:
    role_filter = None
    if role:
        try:
            role_filter = Role(role.upper()).value
        except ValueError:
            raise BadRequest("Invalid role")
    return db.get_users(role_filter)


def ensure_bootstrap_admin(db: DatabaseService, settings: Settings) -> None:
    """Creates the configured admin account once; a no-op when not configured."""
    username = settings.bootstrap_admin_username
    if not (username and settings.bootstrap_admin_email and settings.bootstrap_admin_password):
        return
    if db.get_user_by_username(username) is not None:
        return
    db.add_user({
        "username": username,
        "email": settings.bootstrap_admin_email,
        "password_hash": security.hash_password(settings.bootstrap_admin_password),
        "role": Role.ADMIN.value,
    })
    logger.info("Created bootstrap admin account %r", username)
