# app/crud/suppliers/suppliers_crud.py
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup, Pagination, UserToken
from shared.helpers.json_response_helper import not_found_response
from shared.helpers.user_helper import get_users_bulk
from ...enum.supplier_enum import PaymentTerms
from ...models.suppliers import Supplier
from ...schemas.suppliers.suppliers_schemas import (
    SupplierCreate, SupplierListResponse, SupplierOut, SupplierRequest, SupplierUpdate)

logger = logging.getLogger(__name__)


# ----------------- Build Filters for Suppliers -----------------


def build_supplier_filters(params: SupplierRequest):
    filters = []

    if params.category and params.category.lower() != "all":
        filters.append(Supplier.category == params.category)

    if params.active is not None:
        filters.append(Supplier.is_active == params.active)

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(
            or_(
                Supplier.name.ilike(search_term),
                Supplier.contact_person.ilike(search_term),
                Supplier.email.ilike(search_term),
                Supplier.category.ilike(search_term)
            )
        )

    return filters


def suppliers_to_out(db: Session, suppliers: List[Supplier]) -> List[SupplierOut]:
    users = get_users_bulk(db, [s.created_by for s in suppliers])
    results = []
    for s in suppliers:
        out = SupplierOut.model_validate(s)
        creator = users.get(s.created_by)
        out.created_by_name = creator.name if creator else None
        results.append(out)
    return results


# ----------------- Get All Suppliers -----------------


def get_suppliers(db: Session, params: SupplierRequest) -> SupplierListResponse:
    filters = build_supplier_filters(params)
    base_query = db.query(Supplier).filter(*filters)

    total = base_query.with_entities(func.count(Supplier.id)).scalar() or 0

    suppliers = (
        base_query
        .order_by(Supplier.created_at.desc(), Supplier.id.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return SupplierListResponse(
        total_suppliers=total,
        suppliers=suppliers_to_out(db, suppliers),
        pagination=Pagination.build(params, total)
    )


def get_supplier_by_id(db: Session, supplier_id: UUID) -> Optional[Supplier]:
    return db.query(Supplier).filter(Supplier.id == supplier_id).first()


def get_supplier(db: Session, supplier_id: UUID) -> SupplierOut:
    db_supplier = get_supplier_by_id(db, supplier_id)
    if not db_supplier:
        return not_found_response("Supplier not found")
    return suppliers_to_out(db, [db_supplier])[0]


def supplier_lookup(db: Session) -> List[Lookup]:
    rows = (
        db.query(Supplier.id, Supplier.name)
        .filter(Supplier.is_active == True)
        .order_by(Supplier.name.asc())
        .all()
    )
    return [Lookup(id=r.id, name=r.name) for r in rows]


def payment_terms_lookup() -> List[Lookup]:
    return [
        Lookup(id=term.value, name=term.name)
        for term in PaymentTerms
    ]


def _supplier_values(supplier, data: dict) -> dict:
    if "address" in data:
        # stored the way it is served: camelCase keys
        data["address"] = supplier.address.model_dump(
            by_alias=True, exclude_none=True) if supplier.address else None
    if data.get("payment_terms") is not None:
        data["payment_terms"] = PaymentTerms(data["payment_terms"]).value
    if data.get("email"):
        data["email"] = str(data["email"]).lower()
    return data


# ----------------- Create -----------------


def create_supplier(db: Session, supplier: SupplierCreate, current_user: UserToken) -> SupplierOut:
    values = _supplier_values(supplier, supplier.model_dump())

    db_supplier = Supplier(**values, created_by=UUID(current_user.user_id))
    db.add(db_supplier)
    db.commit()
    db.refresh(db_supplier)

    logger.info("Supplier %s created by %s", db_supplier.id, current_user.user_id)
    return suppliers_to_out(db, [db_supplier])[0]


# ----------------- Update -----------------


def update_supplier(db: Session, supplier_id: UUID, supplier: SupplierUpdate) -> SupplierOut:
    db_supplier = get_supplier_by_id(db, supplier_id)
    if not db_supplier:
        return not_found_response("Supplier not found")

    update_data = _supplier_values(
        supplier, supplier.model_dump(exclude_unset=True))

    for key, value in update_data.items():
        setattr(db_supplier, key, value)

    db.commit()
    db.refresh(db_supplier)
    return suppliers_to_out(db, [db_supplier])[0]


# ----------------- Delete -----------------


def delete_supplier(db: Session, supplier_id: UUID):
    db_supplier = get_supplier_by_id(db, supplier_id)
    if not db_supplier:
        return not_found_response("Supplier not found")

    # items keep their supplier_id; no cascade
    db.delete(db_supplier)
    db.commit()
    logger.info("Supplier %s deleted", supplier_id)
    return {"message": "Supplier deleted successfully"}
