# app/routers/inventory/inventory_items_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import Lookup, UserToken
from shared.utils.enums import UserRole
from ...crud.inventory import inventory_items_crud as crud
from ...schemas.inventory.inventory_items_schemas import (
    InventoryItemCreate, InventoryItemOut, InventoryItemUpdate, InventoryListResponse, InventoryRequest)

router = APIRouter(prefix="/api/inventory",
                   tags=["inventory"], dependencies=[Depends(validate_current_token)])

# ---------------- List ----------------


@router.get("", response_model=InventoryListResponse)
def get_inventory(
    params: InventoryRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_inventory_items(db, params)


@router.get("/category-lookup", response_model=List[Lookup])
def category_lookup(db: Session = Depends(get_db)):
    return crud.category_lookup(db)


@router.get("/{item_id}", response_model=InventoryItemOut)
def get_inventory_item(item_id: UUID, db: Session = Depends(get_db)):
    return crud.get_inventory_item(db, item_id)

# ---------------- Create ----------------


@router.post("", response_model=InventoryItemOut, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    item: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(
        UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF))
):
    return crud.create_inventory_item(db, item, current_user)

# ---------------- Update ----------------


@router.put("/{item_id}", response_model=InventoryItemOut)
def update_inventory_item(
    item_id: UUID,
    item: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(
        UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF))
):
    return crud.update_inventory_item(db, item_id, item, current_user)

# ---------------- Delete ----------------


@router.delete("/{item_id}")
def delete_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))
):
    return crud.delete_inventory_item(db, item_id)
