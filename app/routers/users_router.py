# /app/routers/users_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models import auth_model
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[auth_model.UserPublic], summary="List Users, Optionally by Role")
def list_users(
    role: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    principal: Principal = Depends(require_roles(Role.ADMIN)),
):
    return user_service.list_users(db=db, role=role)


@router.post("", response_model=auth_model.UserPublic, status_code=status.HTTP_201_CREATED, summary="Create a User with Any Role")
def create_user(
    payload: auth_model.UserCreate,
    db: DatabaseService = Depends(get_db_service),
    principal: Principal = Depends(require_roles(Role.ADMIN)),
):
    return user_service.create_user(db=db, payload=payload)
