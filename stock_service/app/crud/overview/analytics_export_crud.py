# app/crud/overview/analytics_export_crud.py
from datetime import datetime
from fastapi.responses import Response
from sqlalchemy.orm import Session

from shared.helpers.exporthelper import (
    attachment_headers, csv_response, sections_to_csv, sections_to_xlsx, xlsx_response)
from shared.utils.report_pdf import build_pdf
from ...enum.report_enum import ExportFormat
from .analytics_crud import get_export_summary

EXPORT_BASENAME = "analytics-export"


def _sections(summary: dict):
    metrics = [
        {"Metric": "Total Items", "Value": summary["totalItems"]},
        {"Metric": "Low-Stock Items", "Value": summary["lowStockItems"]},
        {"Metric": "Total Value", "Value": summary["totalValue"]},
    ]
    categories = [
        {"Category": name, "Count": count}
        for name, count in summary["categoryCounts"].items()
    ]
    return [(None, metrics), ("Category Breakdown", categories)]


def export_analytics(db: Session, export_format: ExportFormat):
    summary = get_export_summary(db)
    sections = _sections(summary)

    if export_format == ExportFormat.pdf:
        pdf = build_pdf(
            "Analytics Export",
            [f"Generated: {datetime.utcnow():%Y-%m-%d %H:%M} UTC"],
            [
                {"title": "Summary", "table": [["Metric", "Value"]] + [
                    [m["Metric"], m["Value"]] for m in sections[0][1]]},
                {"title": "Category Breakdown", "table": [["Category", "Count"]] + [
                    [c["Category"], c["Count"]] for c in sections[1][1]]},
            ]
        )
        return Response(
            content=pdf,
            media_type="application/pdf",
            headers=attachment_headers(f"{EXPORT_BASENAME}.pdf")
        )

    if export_format == ExportFormat.xlsx:
        return xlsx_response(sections_to_xlsx(sections), f"{EXPORT_BASENAME}.xlsx")

    return csv_response(sections_to_csv(sections, title="Analytics Export"), f"{EXPORT_BASENAME}.csv")
