# app/crud/overview/analytics_crud.py
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import SessionLocal
from ...models.alerts import Alert
from ...models.inventory_items import InventoryItem
from ...models.suppliers import Supplier
from ..alerts.alerts_crud import get_alert_stats

logger = logging.getLogger(__name__)

TREND_MONTHS = 6
TREND_DAYS = 7
TOP_SUPPLIERS = 5


def _today(today: Optional[date]) -> date:
    # timestamps are stored as naive UTC
    return today or datetime.utcnow().date()


def _item_value():
    return InventoryItem.quantity * InventoryItem.unit_price


# ---------------- Inventory Totals ----------------


def inventory_totals(db: Session, today: Optional[date] = None) -> Dict:
    start_of_today = datetime.combine(_today(today), time.min)

    row = db.query(
        func.count(InventoryItem.id).label("total_items"),
        func.coalesce(func.sum(case(
            (InventoryItem.quantity <= InventoryItem.reorder_level, 1), else_=0)), 0).label("low_stock"),
        func.coalesce(func.sum(_item_value()), 0).label("total_value"),
        func.coalesce(func.sum(case(
            (and_(InventoryItem.updated_at >= start_of_today,
                  InventoryItem.updated_at < start_of_today + timedelta(days=1)), 1), else_=0)), 0).label("updated_today"),
    ).one()

    return {
        "totalItems": int(row.total_items or 0),
        "lowStockItems": int(row.low_stock or 0),
        "totalValue": round(float(row.total_value or 0), 2),
        "itemsUpdatedToday": int(row.updated_today or 0),
    }


# ---------------- Category Breakdown ----------------


def category_counts(db: Session) -> Dict[str, int]:
    rows = (
        db.query(InventoryItem.category, func.count(InventoryItem.id).label("count"))
        .group_by(InventoryItem.category)
        .order_by(InventoryItem.category.asc())
        .all()
    )
    return {r.category: int(r.count) for r in rows}


# ---------------- Trends ----------------


def month_windows(today: Optional[date] = None, months: int = TREND_MONTHS) -> List[Dict]:
    """Calendar months ending with the current one, oldest first."""
    first_of_month = _today(today).replace(day=1)
    windows = []
    for i in range(months - 1, -1, -1):
        start = first_of_month - relativedelta(months=i)
        windows.append({
            "month": start.strftime("%b"),
            "period": start.strftime("%Y-%m"),
            "start": start,
            "end": start + relativedelta(months=1),
        })
    return windows


def day_windows(today: Optional[date] = None, days: int = TREND_DAYS) -> List[Dict]:
    """Calendar days ending with today, oldest first."""
    current = _today(today)
    windows = []
    for i in range(days - 1, -1, -1):
        day = current - timedelta(days=i)
        windows.append({
            "date": day.isoformat(),
            "start": day,
            "end": day + timedelta(days=1),
        })
    return windows


def _bucket_sums(db: Session, start: date, end: date):
    row = db.query(
        func.coalesce(func.sum(InventoryItem.quantity), 0).label("quantity"),
        func.coalesce(func.sum(_item_value()), 0).label("value"),
    ).filter(
        InventoryItem.updated_at >= datetime.combine(start, time.min),
        InventoryItem.updated_at < datetime.combine(end, time.min),
    ).one()
    return int(row.quantity or 0), round(float(row.value or 0), 2)


def _trend(db: Session, windows: List[Dict]) -> List[Dict]:
    # every window gets an entry, empty ones are zero-filled
    trend = []
    for w in windows:
        quantity, value = _bucket_sums(db, w["start"], w["end"])
        entry = {k: v for k, v in w.items() if k not in ("start", "end")}
        entry.update({"quantity": quantity, "value": value})
        trend.append(entry)
    return trend


def monthly_trends(db: Session, today: Optional[date] = None) -> List[Dict]:
    return _trend(db, month_windows(today))


def weekly_trends(db: Session, today: Optional[date] = None) -> List[Dict]:
    return _trend(db, day_windows(today))


# ---------------- Supplier Ranking ----------------


def top_suppliers(db: Session, limit: int = TOP_SUPPLIERS) -> List[Dict]:
    item_count = func.count(InventoryItem.id)
    rows = (
        db.query(
            Supplier.id,
            Supplier.name,
            item_count.label("item_count"),
            func.coalesce(func.sum(_item_value()), 0).label("total_value"),
        )
        .outerjoin(InventoryItem, InventoryItem.supplier_id == Supplier.id)
        .group_by(Supplier.id, Supplier.name, Supplier.created_at)
        .order_by(item_count.desc(), Supplier.created_at.asc(), Supplier.id.asc())
        .limit(limit)
        .all()
    )
    return [
        {
            "id": str(r.id),
            "name": r.name,
            "itemCount": int(r.item_count),
            "totalValue": round(float(r.total_value or 0), 2),
        }
        for r in rows
    ]


def supplier_stats(db: Session, limit: int = TOP_SUPPLIERS) -> Dict:
    total = db.query(func.count(Supplier.id)).scalar() or 0
    return {
        "totalSuppliers": int(total),
        "topSuppliers": top_suppliers(db, limit),
    }


# ---------------- Alerts ----------------


def alert_counts(db: Session) -> Dict:
    return get_alert_stats(db).model_dump()


def alert_activity(db: Session, today: Optional[date] = None) -> Dict:
    # last 7 calendar days including today, against the 7 before
    week_start = datetime.combine(_today(today) - timedelta(days=TREND_DAYS - 1), time.min)
    prev_start = week_start - timedelta(days=TREND_DAYS)

    active = db.query(func.count(Alert.id)).filter(Alert.is_resolved == False).scalar() or 0
    last_week = db.query(func.count(Alert.id)).filter(Alert.created_at >= week_start).scalar() or 0
    prev_week = db.query(func.count(Alert.id)).filter(
        Alert.created_at >= prev_start, Alert.created_at < week_start).scalar() or 0

    return {
        "activeAlerts": int(active),
        "alertsChange": int(last_week) - int(prev_week),
    }


def build_kpis(totals: Dict, activity: Dict) -> Dict:
    total_items = totals["totalItems"]
    turnover = totals["totalValue"] / total_items if total_items else 0
    accuracy = 0 if total_items == 0 else round(
        100 - (totals["lowStockItems"] / total_items) * 100, 1)

    return {
        "turnover": round(turnover, 2),
        "accuracy": accuracy,
        "activeAlerts": activity["activeAlerts"],
        "alertsChange": activity["alertsChange"],
    }


# ---------------- Dashboard ----------------


def _in_session(session_factory: Callable[[], Session], fn: Callable, *args):
    db = session_factory()
    try:
        return fn(db, *args)
    finally:
        db.close()


def get_dashboard(today: Optional[date] = None, session_factory: Callable[[], Session] = SessionLocal) -> Dict:
    """Runs the reporters side by side, one session each.

    The first failing reporter fails the whole payload.
    """
    today = _today(today)
    jobs = {
        "totals": (inventory_totals, today),
        "categories": (category_counts,),
        "months": (monthly_trends, today),
        "days": (weekly_trends, today),
        "suppliers": (supplier_stats,),
        "alerts": (alert_counts,),
        "activity": (alert_activity, today),
    }

    with ThreadPoolExecutor(max_workers=max(1, settings.ANALYTICS_MAX_WORKERS)) as pool:
        futures = {
            name: pool.submit(_in_session, session_factory, *job)
            for name, job in jobs.items()
        }
        results = {name: future.result() for name, future in futures.items()}

    totals = results["totals"]
    return {
        "inventoryStats": {
            **totals,
            "categoryCounts": results["categories"],
            "trends": results["months"],
            "weekTrends": results["days"],
        },
        "supplierStats": results["suppliers"],
        "alertStats": results["alerts"],
        "kpis": build_kpis(totals, results["activity"]),
    }


def get_export_summary(db: Session) -> Dict:
    """Figures behind the analytics export files."""
    totals = inventory_totals(db)
    return {
        "totalItems": totals["totalItems"],
        "lowStockItems": totals["lowStockItems"],
        "totalValue": totals["totalValue"],
        "categoryCounts": category_counts(db),
    }
