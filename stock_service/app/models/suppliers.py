# app/models/suppliers.py
import uuid
from datetime import datetime
from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from shared.core.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_suppliers_rating_range"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    contact_person = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False)
    phone = Column(String(32), nullable=False)
    address = Column(JSON)  # {"street", "city", "state", "zipCode", "country"}
    category = Column(String(128), nullable=False, index=True)
    rating = Column(Integer, nullable=False, default=3)
    payment_terms = Column(String(8), nullable=False, default="NET30")
    is_active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text)
    created_by = Column(UUID(as_uuid=True))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow,
                        onupdate=datetime.utcnow)
