from enum import Enum


class ExportFormat(str, Enum):
    csv = "csv"
    pdf = "pdf"
    xlsx = "xlsx"


class ReportFormat(str, Enum):
    pdf = "pdf"
    csv = "csv"


class ExportType(str, Enum):
    inventory = "inventory"
    suppliers = "suppliers"
    alerts = "alerts"
