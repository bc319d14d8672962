from enum import Enum


class StockStatus(str, Enum):
    in_stock = "in-stock"
    low_stock = "low-stock"
    out_of_stock = "out-of-stock"


class InventorySortField(str, Enum):
    name = "name"
    sku = "sku"
    category = "category"
    quantity = "quantity"
    unit_price = "unitPrice"
    created_at = "createdAt"
    updated_at = "updatedAt"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"
