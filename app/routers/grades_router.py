# /app/routers/grades_router.py

"""
Grade endpoints. The role gate admits staff for writes; the scope resolver
then decides whether the caller may touch the specific student or grade.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import get_scope_resolver, require_roles
from ..core.principal import Principal, Role
from ..models import record_model
from ..services import record_service
from ..services.access_helpers.scope_resolver import ScopeResolver
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

STAFF = (Role.ADMIN, Role.TEACHER)

# --- READ ENDPOINTS ---

@router.get("", response_model=List[record_model.Grade], summary="List Grades in the Caller's Scope")
def list_grades(
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.list_grades(db=db, scope=scope, principal=principal)


@router.get("/subject/{subject_id}", response_model=List[record_model.Grade], summary="List Grades for a Subject")
def list_grades_for_subject(
    subject_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.list_grades_for_subject(db=db, scope=scope, principal=principal, subject_id=subject_id)


@router.get("/student/{student_id}", response_model=List[record_model.Grade], summary="List Grades for a Student")
def list_grades_for_student(
    student_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles()),
):
    return record_service.list_grades_for_student(db=db, scope=scope, principal=principal, student_id=student_id)

# --- WRITE ENDPOINTS ---

@router.post("", response_model=record_model.Grade, status_code=status.HTTP_201_CREATED, summary="Record a Grade")
def create_grade(
    payload: record_model.GradeCreate,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.create_grade(db=db, scope=scope, principal=principal, payload=payload)


@router.put("/{grade_id}", response_model=record_model.Grade, summary="Change a Grade's Score")
def update_grade(
    grade_id: int,
    payload: record_model.GradeUpdate,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.update_grade(db=db, scope=scope, principal=principal, grade_id=grade_id, payload=payload)


@router.delete("/{grade_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Grade")
def delete_grade(
    grade_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    record_service.delete_grade(db=db, scope=scope, principal=principal, grade_id=grade_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
