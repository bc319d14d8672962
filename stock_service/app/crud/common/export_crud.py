# app/crud/common/export_crud.py
from datetime import datetime
from sqlalchemy.orm import Session

from shared.core.schemas import ExportRequestParams, ExportResponse
from shared.helpers.exporthelper import export_to_excel
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from ...enum.report_enum import ExportType
from ...schemas.alerts.alerts_schemas import AlertRequest
from ...schemas.inventory.inventory_items_schemas import InventoryRequest
from ...schemas.suppliers.suppliers_schemas import SupplierRequest
from ..alerts import alerts_crud
from ..inventory import inventory_items_crud
from ..suppliers import suppliers_crud

COLUMN_MAPS = {
    ExportType.inventory: {
        "sku": "SKU",
        "name": "Name",
        "category": "Category",
        "quantity": "Quantity",
        "reorder_level": "Reorder Level",
        "unit_price": "Unit Price",
        "total_value": "Total Value",
        "stock_status": "Stock Status",
        "supplier_name": "Supplier",
        "location": "Location",
        "updated_at": "Last Updated",
    },
    ExportType.suppliers: {
        "name": "Name",
        "contact_person": "Contact Person",
        "email": "Email",
        "phone": "Phone",
        "category": "Category",
        "rating": "Rating",
        "payment_terms": "Payment Terms",
        "is_active": "Active",
    },
    ExportType.alerts: {
        "type": "Type",
        "severity": "Severity",
        "title": "Title",
        "message": "Message",
        "related_item_sku": "Item SKU",
        "is_read": "Read",
        "is_resolved": "Resolved",
        "resolved_by_name": "Resolved By",
        "created_at": "Created",
    },
}


def get_export_data(db: Session, params: ExportRequestParams) -> ExportResponse:
    try:
        export_type = ExportType(params.type)
    except ValueError:
        return error_response(
            message=f"Unknown export type: {params.type}",
            status_code=AppStatusCode.INVALID_INPUT,
            http_status=400
        )

    paging = {"search": params.search, "page": params.page, "limit": params.limit}
    if export_type == ExportType.inventory:
        rows = inventory_items_crud.get_inventory_items(db, InventoryRequest(**paging)).inventory
    elif export_type == ExportType.suppliers:
        rows = suppliers_crud.get_suppliers(db, SupplierRequest(**paging)).suppliers
    else:
        rows = alerts_crud.get_alerts(db, AlertRequest(**paging)).alerts

    data = [row.model_dump(mode="json") for row in rows]
    filename = f"{export_type.value}_export_{datetime.utcnow().strftime('%Y%m%d_%H%M%S')}.xlsx"
    return export_to_excel(data, filename, COLUMN_MAPS[export_type])
