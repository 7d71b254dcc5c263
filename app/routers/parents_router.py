# /app/routers/parents_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models import people_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[people_model.Parent], summary="List Parents and Their Linked Students")
def list_parents(db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return db.get_all_parents()


@router.post("", response_model=people_model.Parent, status_code=status.HTTP_201_CREATED, summary="Create a Parent Linked to Students")
def create_parent(payload: people_model.ParentCreate, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    return roster_service.create_parent(db=db, payload=payload)


@router.delete("/{parent_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Parent")
def delete_parent(parent_id: int, db: DatabaseService = Depends(get_db_service), principal: Principal = Depends(require_roles(Role.ADMIN))):
    roster_service.delete_parent(db=db, parent_id=parent_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
