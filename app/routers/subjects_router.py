# /app/routers/subjects_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models import school_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

STAFF = (Role.ADMIN, Role.TEACHER)


@router.get("", response_model=List[school_model.Subject], summary="List Subjects")
def list_subjects(db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(*STAFF))):
    return db.get_all_subjects()


@router.get("/{subject_id}", response_model=school_model.Subject, summary="Get a Single Subject")
def get_subject(subject_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(*STAFF))):
    return roster_service.get_or_404(db.get_subject_by_id, subject_id, "Subject")


@router.post("", response_model=school_model.Subject, status_code=status.HTTP_201_CREATED, summary="Create a Subject")
def create_subject(payload: school_model.SubjectCreate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.create_subject(db=db, payload=payload)


@router.put("/{subject_id}", response_model=school_model.Subject, summary="Update a Subject")
def update_subject(subject_id: int, payload: school_model.SubjectUpdate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.update_subject(db=db, subject_id=subject_id, payload=payload)


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Subject")
def delete_subject(subject_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    roster_service.delete_subject(db=db, subject_id=subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
