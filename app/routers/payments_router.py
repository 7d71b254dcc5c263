# /app/routers/payments_router.py

"""
Tuition payments. Staff create and settle payments for students in scope;
deleting a payment is reserved for admins.
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


@router.get("", response_model=List[record_model.Payment], summary="List Payments in the Caller's Scope")
def list_payments(
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.list_payments(db=db, scope=scope, principal=principal)


@router.get("/student/{student_id}", response_model=List[record_model.Payment], summary="List Payments for a Student")
def list_payments_for_student(
    student_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles()),
):
    return record_service.list_payments_for_student(db=db, scope=scope, principal=principal, student_id=student_id)


@router.post("", response_model=record_model.Payment, status_code=status.HTTP_201_CREATED, summary="Create a Payment")
def create_payment(
    payload: record_model.PaymentCreate,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.create_payment(db=db, scope=scope, principal=principal, payload=payload)


@router.put("/{payment_id}", response_model=record_model.Payment, summary="Update a Payment's Status")
def update_payment(
    payment_id: int,
    payload: record_model.PaymentUpdate,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(*STAFF)),
):
    return record_service.update_payment(db=db, scope=scope, principal=principal, payment_id=payment_id, payload=payload)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Payment")
def delete_payment(
    payment_id: int,
    db: DatabaseService = Depends(get_db_service),
    scope: ScopeResolver = Depends(get_scope_resolver),
    principal: Principal = Depends(require_roles(Role.ADMIN)),
):
    record_service.delete_payment(db=db, scope=scope, principal=principal, payment_id=payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
