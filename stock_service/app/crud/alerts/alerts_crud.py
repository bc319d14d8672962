# app/crud/alerts/alerts_crud.py
import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from shared.core.schemas import Pagination, UserToken
from shared.helpers.json_response_helper import not_found_response
from shared.helpers.user_helper import get_users_bulk
from ...enum.alert_enum import AlertSeverity
from ...models.alerts import Alert
from ...models.inventory_items import InventoryItem
from ...models.suppliers import Supplier
from ...schemas.alerts.alerts_schemas import AlertCreate, AlertListResponse, AlertOut, AlertRequest, AlertStats

logger = logging.getLogger(__name__)


def build_alert_filters(params: AlertRequest):
    filters = []

    if params.type:
        filters.append(Alert.type == params.type.value)

    if params.severity:
        filters.append(Alert.severity == params.severity.value)

    if params.read is not None:
        filters.append(Alert.is_read == params.read)

    if params.resolved is not None:
        filters.append(Alert.is_resolved == params.resolved)

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(Alert.title.ilike(search_term) | Alert.message.ilike(search_term))

    return filters


def alerts_to_out(db: Session, alerts: List[Alert]) -> List[AlertOut]:
    item_ids = {a.related_item_id for a in alerts if a.related_item_id}
    supplier_ids = {a.related_supplier_id for a in alerts if a.related_supplier_id}

    items = {}
    if item_ids:
        items = {i.id: i for i in db.query(InventoryItem).filter(InventoryItem.id.in_(item_ids)).all()}
    suppliers = {}
    if supplier_ids:
        suppliers = {s.id: s for s in db.query(Supplier).filter(Supplier.id.in_(supplier_ids)).all()}
    users = get_users_bulk(db, [a.resolved_by for a in alerts])

    results = []
    for a in alerts:
        # references may dangle once the item or supplier is deleted
        item = items.get(a.related_item_id)
        supplier = suppliers.get(a.related_supplier_id)
        resolver = users.get(a.resolved_by)
        results.append(AlertOut(
            id=a.id,
            type=a.type,
            title=a.title,
            message=a.message,
            severity=a.severity,
            is_read=a.is_read,
            is_resolved=a.is_resolved,
            related_item_id=a.related_item_id,
            related_item_name=item.name if item else None,
            related_item_sku=item.sku if item else None,
            related_supplier_id=a.related_supplier_id,
            related_supplier_name=supplier.name if supplier else None,
            assigned_to=a.assigned_to or [],
            resolved_by=a.resolved_by,
            resolved_by_name=resolver.name if resolver else None,
            resolved_at=a.resolved_at,
            expires_at=a.expires_at,
            created_at=a.created_at,
            updated_at=a.updated_at,
        ))
    return results


# ----------------- Get All Alerts -----------------


def get_alerts(db: Session, params: AlertRequest) -> AlertListResponse:
    filters = build_alert_filters(params)
    base_query = db.query(Alert).filter(*filters)

    total = base_query.with_entities(func.count(Alert.id)).scalar() or 0

    alerts = (
        base_query
        .order_by(Alert.created_at.desc(), Alert.id.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return AlertListResponse(
        alerts=alerts_to_out(db, alerts),
        pagination=Pagination.build(params, total)
    )


def get_alert_by_id(db: Session, alert_id: UUID) -> Optional[Alert]:
    return db.query(Alert).filter(Alert.id == alert_id).first()


# ----------------- Stats -----------------


def get_alert_stats(db: Session) -> AlertStats:
    severity_counts = [
        func.coalesce(func.sum(case((Alert.severity == s.value, 1), else_=0)), 0).label(s.value)
        for s in AlertSeverity
    ]
    row = db.query(
        func.count(Alert.id).label("total"),
        func.coalesce(func.sum(case((Alert.is_read == False, 1), else_=0)), 0).label("unread"),
        func.coalesce(func.sum(case((Alert.is_resolved == False, 1), else_=0)), 0).label("unresolved"),
        *severity_counts,
    ).one()

    return AlertStats(**{k: int(v or 0) for k, v in row._mapping.items()})


# ----------------- Create -----------------


def create_alert(db: Session, alert: AlertCreate) -> AlertOut:
    data = alert.model_dump()
    data["type"] = alert.type.value
    data["severity"] = alert.severity.value
    data["assigned_to"] = [str(uid) for uid in alert.assigned_to]

    db_alert = Alert(**data, is_read=False, is_resolved=False)
    db.add(db_alert)
    db.commit()
    db.refresh(db_alert)

    logger.info("Manual %s alert %s created", db_alert.type, db_alert.id)
    return alerts_to_out(db, [db_alert])[0]


# ----------------- Read / Resolve -----------------


def mark_alert_read(db: Session, alert_id: UUID) -> AlertOut:
    db_alert = get_alert_by_id(db, alert_id)
    if not db_alert:
        return not_found_response("Alert not found")

    db_alert.is_read = True
    db.commit()
    db.refresh(db_alert)
    return alerts_to_out(db, [db_alert])[0]


def mark_all_read(db: Session):
    updated = (
        db.query(Alert)
        .filter(Alert.is_read == False)
        .update({Alert.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return {"message": "All alerts marked as read", "updated": updated}


def resolve_alert(db: Session, alert_id: UUID, current_user: UserToken) -> AlertOut:
    db_alert = get_alert_by_id(db, alert_id)
    if not db_alert:
        return not_found_response("Alert not found")

    db_alert.is_resolved = True
    db_alert.resolved_by = UUID(current_user.user_id)
    db_alert.resolved_at = datetime.utcnow()
    db.commit()
    db.refresh(db_alert)

    logger.info("Alert %s resolved by %s", alert_id, current_user.user_id)
    return alerts_to_out(db, [db_alert])[0]


def delete_alert(db: Session, alert_id: UUID):
    db_alert = get_alert_by_id(db, alert_id)
    if not db_alert:
        return not_found_response("Alert not found")

    db.delete(db_alert)
    db.commit()
    return {"message": "Alert deleted successfully"}
