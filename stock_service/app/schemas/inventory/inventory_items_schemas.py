from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import AliasChoices, ConfigDict, Field, field_validator

from shared.core.schemas import CamelModel, CommonQueryParams, Pagination, reject_null
from ...enum.inventory_enum import InventorySortField, SortOrder, StockStatus

# unitPrice is canonical, the web client still posts "price"
UNIT_PRICE_ALIASES = AliasChoices("unitPrice", "unit_price", "price")


def _normalize_sku(value: Optional[str]) -> Optional[str]:
    return value.strip().upper() if isinstance(value, str) else value


# ---------------- Item Create ----------------
class InventoryItemCreate(CamelModel):
    name: str
    sku: str
    description: Optional[str] = None
    category: str
    quantity: int = Field(0, ge=0, strict=True)
    reorder_level: int = Field(10, ge=0, strict=True)
    unit_price: float = Field(ge=0, validation_alias=UNIT_PRICE_ALIASES)
    supplier_id: UUID = Field(validation_alias=AliasChoices(
        "supplierId", "supplier_id", "supplier"))
    location: Optional[str] = None

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, value):
        return _normalize_sku(value)


# ---------------- Item Update ----------------
class InventoryItemUpdate(CamelModel):
    # unknown keys are kept so the staff check sees everything that was sent
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    sku: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0, strict=True)
    reorder_level: Optional[int] = Field(None, ge=0, strict=True)
    unit_price: Optional[float] = Field(
        None, ge=0, validation_alias=UNIT_PRICE_ALIASES)
    supplier_id: Optional[UUID] = Field(None, validation_alias=AliasChoices(
        "supplierId", "supplier_id", "supplier"))
    location: Optional[str] = None

    @field_validator("name", "sku", "category", "quantity",
                     "reorder_level", "unit_price", "supplier_id")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, value):
        return _normalize_sku(value)

    @property
    def sent_fields(self) -> set:
        return set(self.model_fields_set) | set(self.model_extra or {})

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, include=set(type(self).model_fields))


# ---------------- Item Output ----------------
class InventoryItemOut(CamelModel):
    id: UUID
    name: str
    sku: str
    description: Optional[str] = None
    category: str
    quantity: int
    reorder_level: int
    unit_price: float
    supplier_id: UUID
    supplier_name: Optional[str] = None
    location: Optional[str] = None
    updated_by: Optional[UUID] = None
    updated_by_name: Optional[str] = None
    total_value: float
    stock_status: StockStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------- Item Request ----------------
class InventoryRequest(CommonQueryParams):
    category: Optional[str] = None
    stock_status: Optional[StockStatus] = None
    sort_by: InventorySortField = InventorySortField.updated_at
    sort_order: SortOrder = SortOrder.desc


class InventoryListResponse(CamelModel):
    inventory: List[InventoryItemOut]
    pagination: Pagination
