# /app/routers/schedules_router.py

"""
Schedule entries assign a teacher to teach a subject in a class. They are the
facts behind every teacher scope decision, so only admins can change them.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models import school_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[school_model.Schedule], summary="List Schedule Entries")
def list_schedules(db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN, Role.TEACHER))):
    return db.get_all_schedules()


@router.post("", response_model=school_model.Schedule, status_code=status.HTTP_201_CREATED, summary="Assign a Teacher to a Class")
def create_schedule(payload: school_model.ScheduleCreate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.create_schedule(db=db, payload=payload)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Schedule Entry")
def delete_schedule(schedule_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    roster_service.delete_schedule(db=db, schedule_id=schedule_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
