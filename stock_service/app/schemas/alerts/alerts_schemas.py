from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import Field

from shared.core.schemas import CamelModel, CommonQueryParams, Pagination
from ...enum.alert_enum import AlertSeverity, AlertType


class AlertCreate(CamelModel):
    type: AlertType
    title: str
    message: str
    severity: AlertSeverity = AlertSeverity.medium
    related_item_id: Optional[UUID] = None
    related_supplier_id: Optional[UUID] = None
    assigned_to: List[UUID] = Field(default_factory=list)
    expires_at: Optional[datetime] = None


class AlertOut(CamelModel):
    id: UUID
    type: AlertType
    title: str
    message: str
    severity: AlertSeverity
    is_read: bool
    is_resolved: bool
    related_item_id: Optional[UUID] = None
    related_item_name: Optional[str] = None
    related_item_sku: Optional[str] = None
    related_supplier_id: Optional[UUID] = None
    related_supplier_name: Optional[str] = None
    assigned_to: List[UUID] = Field(default_factory=list)
    resolved_by: Optional[UUID] = None
    resolved_by_name: Optional[str] = None
    resolved_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AlertRequest(CommonQueryParams):
    type: Optional[AlertType] = None
    severity: Optional[AlertSeverity] = None
    read: Optional[bool] = None
    resolved: Optional[bool] = None


class AlertListResponse(CamelModel):
    alerts: List[AlertOut]
    pagination: Pagination


class AlertStats(CamelModel):
    total: int = 0
    unread: int = 0
    unresolved: int = 0
    low: int = 0
    medium: int = 0
    high: int = 0
    critical: int = 0
