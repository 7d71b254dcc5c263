# /app/routers/classes_router.py

"""
Class management. Staff may read; creating, renaming and deleting classes is
admin-only and needs no ownership check.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models import school_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

STAFF = (Role.ADMIN, Role.TEACHER)

# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[school_model.SchoolClass], summary="List Classes")
def list_classes(db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(*STAFF))):
    return db.get_all_classes()


@router.post("", response_model=school_model.SchoolClass, status_code=status.HTTP_201_CREATED, summary="Create a Class")
def create_class(payload: school_model.ClassCreate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.create_class(db=db, payload=payload)

# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=school_model.SchoolClass, summary="Get a Single Class")
def get_class(class_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(*STAFF))):
    return roster_service.get_or_404(db.get_class_by_id, class_id, "Class")


@router.put("/{class_id}", response_model=school_model.SchoolClass, summary="Update a Class")
def update_class(class_id: int, payload: school_model.ClassUpdate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.update_class(db=db, class_id=class_id, payload=payload)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class")
def delete_class(class_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    roster_service.delete_class(db=db, class_id=class_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
