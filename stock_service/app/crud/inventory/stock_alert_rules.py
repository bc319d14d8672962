"""Stock status classification and the low/out-of-stock alert rule.

An inventory item is in one of three states, derived from its quantity and
reorder level and never stored. Every create or update of an item re-runs
the alert rule, which opens at most one unresolved alert per (type, item).
Alerts are only ever opened here; restocking never resolves them.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...enum.alert_enum import AlertSeverity, AlertType
from ...enum.inventory_enum import StockStatus
from ...models.alerts import Alert
from ...models.inventory_items import InventoryItem

logger = logging.getLogger(__name__)


def classify_stock_status(quantity: int, reorder_level: int) -> StockStatus:
    if quantity == 0:
        return StockStatus.out_of_stock
    if quantity <= reorder_level:
        return StockStatus.low_stock
    return StockStatus.in_stock


def stock_status_filter(status: StockStatus):
    """Same classification as classify_stock_status, as a SQL criterion."""
    if status == StockStatus.out_of_stock:
        return InventoryItem.quantity == 0
    if status == StockStatus.low_stock:
        return and_(InventoryItem.quantity > 0,
                    InventoryItem.quantity <= InventoryItem.reorder_level)
    return InventoryItem.quantity > InventoryItem.reorder_level


def alert_kind_for(quantity: int, reorder_level: int) -> Optional[Tuple[AlertType, AlertSeverity]]:
    status = classify_stock_status(quantity, reorder_level)
    if status == StockStatus.out_of_stock:
        return AlertType.out_of_stock, AlertSeverity.critical
    if status == StockStatus.low_stock:
        return AlertType.low_stock, AlertSeverity.high
    return None


def build_stock_alert(item: InventoryItem, alert_type: AlertType, severity: AlertSeverity) -> Alert:
    if alert_type == AlertType.out_of_stock:
        title = "Out of Stock Alert"
        message = f"{item.name} ({item.sku}) is out of stock"
    else:
        title = "Low Stock Alert"
        message = f"{item.name} ({item.sku}) is running low ({item.quantity} left)"

    return Alert(
        type=alert_type.value,
        title=title,
        message=message,
        severity=severity.value,
        related_item_id=item.id,
        is_read=False,
        is_resolved=False,
        assigned_to=[],
    )


def find_open_alert(db: Session, alert_type: AlertType, item_id) -> Optional[Alert]:
    return (
        db.query(Alert)
        .filter(
            Alert.type == alert_type.value,
            Alert.related_item_id == item_id,
            Alert.is_resolved == False,
        )
        .first()
    )


def check_and_create_alert(db: Session, item: InventoryItem) -> Optional[Alert]:
    """Open a stock alert for ``item`` unless one of the same type is already open.

    Returns the new alert, or None when nothing was created. Storage errors
    other than a lost unique-index race propagate to the caller.
    """
    kind = alert_kind_for(item.quantity, item.reorder_level)
    if kind is None:
        return None

    alert_type, severity = kind
    if find_open_alert(db, alert_type, item.id):
        return None

    alert = build_stock_alert(item, alert_type, severity)
    db.add(alert)
    try:
        db.commit()
    except IntegrityError:
        # only reachable with the partial unique index on open alerts
        db.rollback()
        logger.info("Open %s alert already exists for item %s",
                    alert_type.value, item.id)
        return None

    db.refresh(alert)
    logger.info("Created %s alert %s for item %s (%s)",
                alert_type.value, alert.id, item.id, item.sku)
    return alert
