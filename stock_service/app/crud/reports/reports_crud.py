# app/crud/reports/reports_crud.py
import logging
from datetime import datetime, time, timedelta
from typing import Dict, Optional, Tuple

from fastapi.responses import Response
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from shared.helpers.exporthelper import attachment_headers, csv_response, sections_to_csv
from shared.models.users import Users
from shared.utils.report_pdf import build_pdf
from ...enum.report_enum import ReportFormat
from ...models.alerts import Alert
from ...models.inventory_items import InventoryItem
from ...models.suppliers import Supplier
from ...schemas.overview.analytics_schema import ReportRequest

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_DAYS = 30
REPORT_TITLE = "Inventory Management System Report"


def report_period(params: ReportRequest, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Inclusive period; the end date covers its whole day."""
    now = now or datetime.utcnow()
    start = datetime.combine(params.start_date, time.min) if params.start_date \
        else now - timedelta(days=DEFAULT_PERIOD_DAYS)
    end = datetime.combine(params.end_date, time.max) if params.end_date else now
    return start, end


def _value():
    return InventoryItem.quantity * InventoryItem.unit_price


def _num(value, digits: int = 2) -> float:
    return round(float(value or 0), digits)


def inventory_summary(db: Session) -> Dict:
    row = db.query(
        func.count(InventoryItem.id).label("total_items"),
        func.coalesce(func.sum(_value()), 0).label("total_value"),
        func.coalesce(func.sum(case(
            (InventoryItem.quantity <= InventoryItem.reorder_level, 1), else_=0)), 0).label("low_stock"),
        func.coalesce(func.sum(case(
            (InventoryItem.quantity == 0, 1), else_=0)), 0).label("out_of_stock"),
        func.avg(InventoryItem.unit_price).label("avg_price"),
        func.avg(InventoryItem.quantity).label("avg_quantity"),
    ).one()

    return {
        "totalItems": int(row.total_items or 0),
        "totalValue": _num(row.total_value),
        "lowStockItems": int(row.low_stock or 0),
        "outOfStockItems": int(row.out_of_stock or 0),
        "avgPrice": _num(row.avg_price),
        "avgQuantity": _num(row.avg_quantity),
    }


def category_stats(db: Session):
    total_value = func.coalesce(func.sum(_value()), 0)
    rows = (
        db.query(
            InventoryItem.category,
            func.count(InventoryItem.id).label("item_count"),
            total_value.label("total_value"),
            func.avg(InventoryItem.unit_price).label("avg_price"),
        )
        .group_by(InventoryItem.category)
        .order_by(total_value.desc(), InventoryItem.category.asc())
        .all()
    )
    return [
        {
            "category": r.category,
            "itemCount": int(r.item_count),
            "totalValue": _num(r.total_value),
            "avgPrice": _num(r.avg_price),
        }
        for r in rows
    ]


def supplier_performance(db: Session):
    total_value = func.coalesce(func.sum(_value()), 0)
    rows = (
        db.query(
            Supplier.name,
            func.count(InventoryItem.id).label("item_count"),
            total_value.label("total_value"),
        )
        .outerjoin(InventoryItem, InventoryItem.supplier_id == Supplier.id)
        .group_by(Supplier.id, Supplier.name)
        .order_by(total_value.desc(), Supplier.name.asc())
        .all()
    )
    return [
        {"name": r.name, "itemCount": int(r.item_count), "totalValue": _num(r.total_value)}
        for r in rows
    ]


def user_breakdown(db: Session):
    rows = (
        db.query(
            Users.role,
            func.count(Users.id).label("count"),
            func.coalesce(func.sum(case((Users.is_active == True, 1), else_=0)), 0).label("active_count"),
        )
        .group_by(Users.role)
        .order_by(Users.role.asc())
        .all()
    )
    return [
        {"role": r.role, "count": int(r.count), "activeCount": int(r.active_count or 0)}
        for r in rows
    ]


def alert_breakdown(db: Session, start: datetime, end: datetime):
    rows = (
        db.query(
            Alert.type,
            func.count(Alert.id).label("count"),
            func.coalesce(func.sum(case((Alert.is_resolved == True, 1), else_=0)), 0).label("resolved"),
        )
        .filter(Alert.created_at >= start, Alert.created_at <= end)
        .group_by(Alert.type)
        .order_by(Alert.type.asc())
        .all()
    )
    return [
        {"type": r.type, "count": int(r.count), "resolved": int(r.resolved or 0)}
        for r in rows
    ]


def build_report(db: Session, start: datetime, end: datetime) -> Dict:
    suppliers = supplier_performance(db)
    users = user_breakdown(db)
    alerts = alert_breakdown(db, start, end)

    return {
        "generatedAt": datetime.utcnow(),
        "period": {"start": start, "end": end},
        "summary": {
            "inventory": inventory_summary(db),
            "categories": category_stats(db),
            "suppliers": {"total": len(suppliers), "performance": suppliers},
            "users": {"total": sum(u["count"] for u in users), "breakdown": users},
            "alerts": {"total": sum(a["count"] for a in alerts), "breakdown": alerts},
        },
    }


def report_to_csv(report: Dict) -> str:
    summary = report["summary"]
    header = [
        {"Field": "Generated", "Value": report["generatedAt"].isoformat()},
        {"Field": "Period Start", "Value": report["period"]["start"].isoformat()},
        {"Field": "Period End", "Value": report["period"]["end"].isoformat()},
    ]
    sections = [
        (None, header),
        ("INVENTORY SUMMARY", [{"Metric": k, "Value": v} for k, v in summary["inventory"].items()]),
        ("CATEGORY BREAKDOWN", [
            {"Category": c["category"], "Items": c["itemCount"],
             "Total Value": f'{c["totalValue"]:.2f}', "Average Price": f'{c["avgPrice"]:.2f}'}
            for c in summary["categories"]]),
        ("SUPPLIER PERFORMANCE", [
            {"Supplier": s["name"], "Items": s["itemCount"], "Total Value": f'{s["totalValue"]:.2f}'}
            for s in summary["suppliers"]["performance"]]),
        ("USERS BY ROLE", [
            {"Role": u["role"], "Count": u["count"], "Active": u["activeCount"]}
            for u in summary["users"]["breakdown"]]),
        ("ALERTS (PERIOD)", [
            {"Type": a["type"], "Count": a["count"], "Resolved": a["resolved"]}
            for a in summary["alerts"]["breakdown"]]),
    ]
    return sections_to_csv(sections, title=REPORT_TITLE)


def report_to_pdf(report: Dict) -> bytes:
    summary = report["summary"]
    start, end = report["period"]["start"], report["period"]["end"]

    return build_pdf(
        REPORT_TITLE,
        [
            f"Generated: {report['generatedAt']:%Y-%m-%d %H:%M} UTC",
            f"Period: {start:%Y-%m-%d} to {end:%Y-%m-%d}",
        ],
        [
            {"title": "Inventory Summary",
             "lines": [f"{k}: {v}" for k, v in summary["inventory"].items()]},
            {"title": "Category Breakdown",
             "table": [["Category", "Items", "Total Value", "Avg Price"]] + [
                 [c["category"], c["itemCount"], f'{c["totalValue"]:.2f}', f'{c["avgPrice"]:.2f}']
                 for c in summary["categories"]]},
            {"title": "Top Suppliers",
             "table": [["Supplier", "Items", "Value"]] + [
                 [s["name"], s["itemCount"], f'{s["totalValue"]:.2f}']
                 for s in summary["suppliers"]["performance"]]},
            {"title": "Users by Role",
             "table": [["Role", "Count", "Active"]] + [
                 [u["role"], u["count"], u["activeCount"]] for u in summary["users"]["breakdown"]]},
            {"title": "Alerts (period)",
             "table": [["Type", "Count", "Resolved"]] + [
                 [a["type"], a["count"], a["resolved"]] for a in summary["alerts"]["breakdown"]]},
        ]
    )


def generate_report(db: Session, params: ReportRequest):
    start, end = report_period(params)
    report = build_report(db, start, end)
    logger.info("Generating %s report for %s - %s", params.format.value, start, end)

    if params.format == ReportFormat.csv:
        return csv_response(report_to_csv(report), "report.csv")

    return Response(
        content=report_to_pdf(report),
        media_type="application/pdf",
        headers=attachment_headers("report.pdf")
    )
