from enum import Enum


class AlertType(str, Enum):
    low_stock = "low-stock"
    out_of_stock = "out-of-stock"
    reorder = "reorder"
    system = "system"


class AlertSeverity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"
