# /app/routers/students_router.py

"""
Student records. Any authenticated principal may read, but only the students
inside its scope; writes are admin-only.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import get_scope_resolver, require_roles
from ..core.principal import Principal, Role
from ..models import people_model
from ..services import roster_service
from ..services.access_helpers.scope_resolver import ScopeResolver
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[people_model.Student], summary="List the Students Visible to the Caller")
def list_students(
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles()),
):
    return roster_service.list_students(db=db, scope=scope, principal=principal)


@router.get("/{student_id}", response_model=people_model.Student, summary="Get a Single Student")
def get_student(
    student_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles()),
):
    return roster_service.get_student(db=db, scope=scope, principal=principal, student_id=student_id)


@router.post("", response_model=people_model.Student, status_code=status.HTTP_201_CREATED, summary="Create a Student")
def create_student(
    payload: people_model.StudentCreate,
    db: DatabaseService = Depends(get_db_service),
    principal: Principal = Depends(require_roles(Role.ADMIN)),
):
    return roster_service.create_student(db=db, payload=payload)


@router.put("/{student_id}", response_model=people_model.Student, summary="Update a Student")
def update_student(
    student_id: int,
    payload: people_model.StudentUpdate,
    db: DatabaseService = Depends(get_db_service),
    principal: Principal = Depends(require_roles(Role.ADMIN)),
):
    return roster_service.update_student(db=db, student_id=student_id, payload=payload)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
def delete_student(
    student_id: int,
    db: DatabaseService = Depends(get_db_service),
    principal: Principal = Depends(require_roles(Role.ADMIN)),
):
    roster_service.delete_student(db=db, student_id=student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
