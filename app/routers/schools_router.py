# /app/routers/schools_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models import school_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service

# Every school endpoint is admin-only.
router = APIRouter()


@router.get("", response_model=List[school_model.School], summary="List Schools")
def list_schools(db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return db.get_all_schools()


@router.get("/{school_id}", response_model=school_model.School, summary="Get a Single School")
def get_school(school_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.get_or_404(db.get_school_by_id, school_id, "School")


@router.post("", response_model=school_model.School, status_code=status.HTTP_201_CREATED, summary="Create a School")
def create_school(payload: school_model.SchoolCreate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.create_school(db=db, payload=payload)


@router.put("/{school_id}", response_model=school_model.School, summary="Update a School")
def update_school(school_id: int, payload: school_model.SchoolUpdate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.update_school(db=db, school_id=school_id, payload=payload)


@router.delete("/{school_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a School")
def delete_school(school_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    roster_service.delete_school(db=db, school_id=school_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
