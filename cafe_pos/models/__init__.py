"""SQLAlchemy models."""

from cafe_pos.models.material import RawMaterial
from cafe_pos.models.product import Product, RecipeItem
from cafe_pos.models.sale import Sale, SaleItem
from cafe_pos.models.waste import Waste
from cafe_pos.models.attendance import Attendance, AttendanceStatus
from cafe_pos.models.stock import StockMovement, MovementReason
from cafe_pos.models.user import User, UserRole
from cafe_pos.models.store_settings import StoreSettings

__all__ = [
    "RawMaterial",
    "Product",
    "RecipeItem",
    "Sale",
    "SaleItem",
    "Waste",
    "Attendance",
    "AttendanceStatus",
    "StockMovement",
    "MovementReason",
    "User",
    "UserRole",
    "StoreSettings",
]
