# app/crud/inventory/inventory_items_crud.py
import logging
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup, Pagination, UserToken
from shared.helpers.json_response_helper import conflict_response, forbidden_response, not_found_response
from shared.helpers.user_helper import get_users_bulk
from shared.utils.enums import UserRole
from ...enum.inventory_enum import InventorySortField, SortOrder
from ...models.inventory_items import InventoryItem
from ...models.suppliers import Supplier
from ...schemas.inventory.inventory_items_schemas import (
    InventoryItemCreate, InventoryItemOut, InventoryItemUpdate, InventoryListResponse, InventoryRequest)
from .stock_alert_rules import check_and_create_alert, classify_stock_status, stock_status_filter

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    InventorySortField.name: InventoryItem.name,
    InventorySortField.sku: InventoryItem.sku,
    InventorySortField.category: InventoryItem.category,
    InventorySortField.quantity: InventoryItem.quantity,
    InventorySortField.unit_price: InventoryItem.unit_price,
    InventorySortField.created_at: InventoryItem.created_at,
    InventorySortField.updated_at: InventoryItem.updated_at,
}

STAFF_EDITABLE_FIELDS = {"quantity"}


# ----------------- Build Filters for Inventory -----------------


def build_inventory_filters(params: InventoryRequest):
    filters = []

    if params.category and params.category.lower() != "all":
        filters.append(InventoryItem.category == params.category)

    if params.stock_status:
        filters.append(stock_status_filter(params.stock_status))

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(
            or_(
                InventoryItem.name.ilike(search_term),
                InventoryItem.sku.ilike(search_term),
                InventoryItem.description.ilike(search_term)
            )
        )

    return filters


def item_to_out(item: InventoryItem, suppliers: Dict[UUID, Supplier], users: Dict) -> InventoryItemOut:
    supplier = suppliers.get(item.supplier_id)
    user = users.get(item.updated_by)
    unit_price = float(item.unit_price or 0)

    return InventoryItemOut(
        id=item.id,
        name=item.name,
        sku=item.sku,
        description=item.description,
        category=item.category,
        quantity=item.quantity,
        reorder_level=item.reorder_level,
        unit_price=unit_price,
        supplier_id=item.supplier_id,
        supplier_name=supplier.name if supplier else None,
        location=item.location,
        updated_by=item.updated_by,
        updated_by_name=user.name if user else None,
        total_value=round(item.quantity * unit_price, 2),
        stock_status=classify_stock_status(item.quantity, item.reorder_level),
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def items_to_out(db: Session, items: List[InventoryItem]) -> List[InventoryItemOut]:
    supplier_ids = {i.supplier_id for i in items if i.supplier_id}
    suppliers = {}
    if supplier_ids:
        suppliers = {
            s.id: s for s in db.query(Supplier).filter(Supplier.id.in_(supplier_ids)).all()
        }
    users = get_users_bulk(db, [i.updated_by for i in items])
    return [item_to_out(i, suppliers, users) for i in items]


# ----------------- Get All Items -----------------


def get_inventory_items(db: Session, params: InventoryRequest) -> InventoryListResponse:
    filters = build_inventory_filters(params)
    base_query = db.query(InventoryItem).filter(*filters)

    total = base_query.with_entities(func.count(InventoryItem.id)).scalar() or 0

    sort_column = SORT_COLUMNS[params.sort_by]
    ordering = sort_column.asc() if params.sort_order == SortOrder.asc else sort_column.desc()

    items = (
        base_query
        .order_by(ordering, InventoryItem.id.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return InventoryListResponse(
        inventory=items_to_out(db, items),
        pagination=Pagination.build(params, total)
    )


def get_inventory_item_by_id(db: Session, item_id: UUID) -> Optional[InventoryItem]:
    return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()


def get_inventory_item(db: Session, item_id: UUID) -> InventoryItemOut:
    db_item = get_inventory_item_by_id(db, item_id)
    if not db_item:
        return not_found_response("Inventory item not found")
    return items_to_out(db, [db_item])[0]


def category_lookup(db: Session) -> List[Lookup]:
    rows = (
        db.query(InventoryItem.category)
        .distinct()
        .order_by(InventoryItem.category.asc())
        .all()
    )
    return [Lookup(id=r.category, name=r.category) for r in rows]


def sku_exists(db: Session, sku: str, exclude_id: Optional[UUID] = None) -> bool:
    query = db.query(InventoryItem.id).filter(InventoryItem.sku == sku)
    if exclude_id:
        query = query.filter(InventoryItem.id != exclude_id)
    return query.first() is not None


def run_alert_check(db: Session, item: InventoryItem):
    """The item is already committed; a failing alert write must not undo it."""
    try:
        check_and_create_alert(db, item)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Stock alert check failed for item %s", item.id)


# ----------------- Create -----------------


def create_inventory_item(db: Session, item: InventoryItemCreate, current_user: UserToken) -> InventoryItemOut:
    if sku_exists(db, item.sku):
        return conflict_response("SKU already exists")

    db_item = InventoryItem(**item.model_dump(), updated_by=UUID(current_user.user_id))
    db.add(db_item)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return conflict_response("SKU already exists")
    db.refresh(db_item)

    logger.info("Inventory item %s (%s) created by %s",
                db_item.id, db_item.sku, current_user.user_id)

    run_alert_check(db, db_item)
    return items_to_out(db, [db_item])[0]


# ----------------- Update -----------------


def update_inventory_item(db: Session, item_id: UUID, item: InventoryItemUpdate, current_user: UserToken) -> InventoryItemOut:
    if current_user.role == UserRole.STAFF.value and item.sent_fields - STAFF_EDITABLE_FIELDS:
        return forbidden_response("Staff can only update quantity")

    db_item = get_inventory_item_by_id(db, item_id)
    if not db_item:
        return not_found_response("Inventory item not found")

    update_data = item.changes()

    if "sku" in update_data and sku_exists(db, update_data["sku"], exclude_id=db_item.id):
        return conflict_response("SKU already exists")

    for key, value in update_data.items():
        setattr(db_item, key, value)
    db_item.updated_by = UUID(current_user.user_id)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return conflict_response("SKU already exists")
    db.refresh(db_item)

    run_alert_check(db, db_item)
    return items_to_out(db, [db_item])[0]


# ----------------- Delete -----------------


def delete_inventory_item(db: Session, item_id: UUID):
    db_item = get_inventory_item_by_id(db, item_id)
    if not db_item:
        return not_found_response("Inventory item not found")

    # alerts pointing at the item are left in place
    db.delete(db_item)
    db.commit()
    logger.info("Inventory item %s deleted", item_id)
    return {"message": "Inventory item deleted successfully"}
