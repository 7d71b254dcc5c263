# /app/routers/attendance_router.py

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


@router.get("", response_model=List[record_model.Attendance], summary="List Attendance in the Caller's Scope")
def list_attendances(
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.list_attendances(db=db, scope=scope, principal=principal)


@router.get("/student/{student_id}", response_model=List[record_model.Attendance], summary="List Attendance for a Student")
def list_attendances_for_student(
    student_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles()),
):
    return record_service.list_attendances_for_student(db=db, scope=scope, principal=principal, student_id=student_id)


@router.post("", response_model=record_model.Attendance, status_code=status.HTTP_201_CREATED, summary="Record Attendance")
def create_attendance(
    payload: record_model.AttendanceCreate,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.create_attendance(db=db, scope=scope, principal=principal, payload=payload)


@router.put("/{attendance_id}", response_model=record_model.Attendance, summary="Update an Attendance Entry")
def update_attendance(
    attendance_id: int,
    payload: record_model.AttendanceUpdate,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.update_attendance(db=db, scope=scope, principal=principal, attendance_id=attendance_id, payload=payload)


@router.delete("/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Attendance Entry")
def delete_attendance(
    attendance_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    record_service.delete_attendance(db=db, scope=scope, principal=principal, attendance_id=attendance_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
