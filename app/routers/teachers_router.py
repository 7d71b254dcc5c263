# /app/routers/teachers_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models import people_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

STAFF = (Role.ADMIN, Role.TEACHER)


@router.get("", response_model=List[people_model.Teacher], summary="List Teachers")
def list_teachers(db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(*STAFF))):
    return db.get_all_teachers()


@router.get("/{teacher_id}", response_model=people_model.Teacher, summary="Get a Single Teacher")
def get_teacher(teacher_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(*STAFF))):
    return roster_service.get_or_404(db.get_teacher_by_id, teacher_id, "Teacher")


@router.post("", response_model=people_model.Teacher, status_code=status.HTTP_201_CREATED, summary="Create a Teacher Profile")
def create_teacher(payload: people_model.TeacherCreate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.create_teacher(db=db, payload=payload)


@router.put("/{teacher_id}", response_model=people_model.Teacher, summary="Update a Teacher Profile")
def update_teacher(teacher_id: int, payload: people_model.TeacherUpdate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.update_teacher(db=db, teacher_id=teacher_id, payload=payload)


@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Teacher Profile")
def delete_teacher(teacher_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    roster_service.delete_teacher(db=db, teacher_id=teacher_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
