# /app/routers/auth_router.py

"""
Public authentication endpoints: registration and login.

Neither endpoint requires a credential, and neither is audited.
"""

from fastapi import APIRouter, Depends, status

from ..models import auth_model
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post("/register", response_model=auth_model.UserPublic, status_code=status.HTTP_201_CREATED, summary="Register a Student or Parent Account")
def register_user(payload: auth_model.RegisterRequest, db: DatabaseService = Depends(get_db_service)):
    return user_service.register_user(db=db, payload=payload)


@router.post("/login", response_model=auth_model.LoginResponse, summary="Log In and Receive a Bearer Token")
def login(payload: auth_model.LoginRequest, db: DatabaseService = Depends(get_db_service)):
    return user_service.login(db=db, payload=payload)
