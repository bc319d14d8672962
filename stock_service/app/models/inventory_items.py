# app/models/inventory_items.py
import uuid
from datetime import datetime
from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from shared.core.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        CheckConstraint("reorder_level >= 0", name="ck_inventory_reorder_level_non_negative"),
        CheckConstraint("unit_price >= 0", name="ck_inventory_unit_price_non_negative"),
        Index("ix_inventory_items_updated_at", "updated_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    sku = Column(String(64), unique=True, index=True, nullable=False)
    description = Column(Text)
    category = Column(String(128), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    reorder_level = Column(Integer, nullable=False, default=10)
    unit_price = Column(Numeric(12, 2), nullable=False, default=0)
    # plain reference, a deleted supplier leaves the item in place
    supplier_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    location = Column(String(200))
    updated_by = Column(UUID(as_uuid=True))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow,
                        onupdate=datetime.utcnow)
