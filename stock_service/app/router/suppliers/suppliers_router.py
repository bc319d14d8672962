# app/routers/suppliers/suppliers_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import Lookup, UserToken
from shared.utils.enums import UserRole
from ...crud.suppliers import suppliers_crud as crud
from ...schemas.suppliers.suppliers_schemas import (
    SupplierCreate, SupplierListResponse, SupplierOut, SupplierRequest, SupplierUpdate)

router = APIRouter(prefix="/api/suppliers",
                   tags=["suppliers"], dependencies=[Depends(validate_current_token)])

# ---------------- List all suppliers ----------------


@router.get("", response_model=SupplierListResponse)
def get_suppliers(
    params: SupplierRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_suppliers(db, params)


@router.get("/supplier-lookup", response_model=List[Lookup])
def supplier_lookup(db: Session = Depends(get_db)):
    return crud.supplier_lookup(db)

# ----------payment terms lookup-------------


@router.get("/payment-terms-lookup", response_model=List[Lookup])
def payment_terms_lookup():
    return crud.payment_terms_lookup()


@router.get("/{supplier_id}", response_model=SupplierOut)
def get_supplier(supplier_id: UUID, db: Session = Depends(get_db)):
    return crud.get_supplier(db, supplier_id)

# -------create-------------------------------


@router.post("", response_model=SupplierOut, status_code=status.HTTP_201_CREATED)
def create_supplier(
    supplier: SupplierCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))
):
    return crud.create_supplier(db, supplier, current_user)

# ---------------- Update ----------------


@router.put("/{supplier_id}", response_model=SupplierOut)
def update_supplier(
    supplier_id: UUID,
    supplier: SupplierUpdate,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))
):
    return crud.update_supplier(db, supplier_id, supplier)

# ---------------- Delete ----------------


@router.delete("/{supplier_id}")
def delete_supplier(
    supplier_id: UUID,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return crud.delete_supplier(db, supplier_id)
