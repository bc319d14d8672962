# app/models/alerts.py
import uuid
from datetime import datetime
from sqlalchemy import JSON, Boolean, Column, DateTime, Index, String, Text, false
from sqlalchemy.dialects.postgresql import UUID
from shared.core.config import settings
from shared.core.database import Base


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String(32), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    severity = Column(String(16), nullable=False, default="medium")
    is_read = Column(Boolean, nullable=False, default=False)
    is_resolved = Column(Boolean, nullable=False, default=False)
    related_item_id = Column(UUID(as_uuid=True), index=True)
    related_supplier_id = Column(UUID(as_uuid=True))
    assigned_to = Column(JSON, default=list)  # list of user ids
    resolved_by = Column(UUID(as_uuid=True))
    resolved_at = Column(DateTime)
    expires_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow,
                        onupdate=datetime.utcnow)


Index("ix_alerts_type_severity_state", Alert.type,
      Alert.severity, Alert.is_read, Alert.is_resolved)

if settings.STRICT_ALERT_DEDUP:
    # one open alert per (type, item); losing inserts raise IntegrityError
    Index(
        "ux_alerts_open_type_item",
        Alert.type,
        Alert.related_item_id,
        unique=True,
        postgresql_where=Alert.is_resolved == false(),
        sqlite_where=Alert.is_resolved == false(),
    )
