from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import EmailStr, Field, field_validator

from shared.core.schemas import CamelModel, CommonQueryParams, Pagination, reject_null
from ...enum.supplier_enum import PaymentTerms


class SupplierAddress(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


# ---------------- Base Supplier ----------------
class SupplierBase(CamelModel):
    name: str
    contact_person: str
    email: EmailStr
    phone: str
    address: Optional[SupplierAddress] = None
    category: str
    rating: int = Field(3, ge=1, le=5)
    payment_terms: PaymentTerms = PaymentTerms.NET30
    is_active: bool = True
    notes: Optional[str] = None


# ---------------- Supplier Create/Update ----------------
class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(CamelModel):
    name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[SupplierAddress] = None
    category: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    payment_terms: Optional[PaymentTerms] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("name", "contact_person", "email", "phone",
                     "category", "rating", "payment_terms", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


# ---------------- Supplier Output ----------------
class SupplierOut(SupplierBase):
    id: UUID
    # stored values are echoed back as-is
    email: str
    created_by: Optional[UUID] = None
    created_by_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------- Supplier Request ----------------
class SupplierRequest(CommonQueryParams):
    category: Optional[str] = None
    active: Optional[bool] = None


class SupplierListResponse(CamelModel):
    total_suppliers: int
    suppliers: List[SupplierOut]
    pagination: Pagination
