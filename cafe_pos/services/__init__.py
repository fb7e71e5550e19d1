# Services module

from cafe_pos.services.stock_ledger import StockLedger
from cafe_pos.services.recipe_resolver import MaterialConsumption, expand
from cafe_pos.services.sales_service import SalesService
from cafe_pos.services.waste_service import WasteService, most_wasted
from cafe_pos.services.purchase_advisor import (
    PurchaseSuggestion,
    get_purchase_suggestions,
    total_estimated_cost,
)
from cafe_pos.services.product_service import ProductService
from cafe_pos.services.user_service import UserService
from cafe_pos.services.attendance_service import AttendanceService
from cafe_pos.services.report_service import ReportService
from cafe_pos.services.data_admin_service import DataAdminService

__all__ = [
    "StockLedger",
    "MaterialConsumption",
    "expand",
    "SalesService",
    "WasteService",
    "most_wasted",
    "PurchaseSuggestion",
    "get_purchase_suggestions",
    "total_estimated_cost",
    "ProductService",
    "UserService",
    "AttendanceService",
    "ReportService",
    "DataAdminService",
]
