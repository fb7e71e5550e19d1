"""API routes."""

from fastapi import APIRouter

from cafe_pos.api.routes import (
    admin,
    attendance,
    materials,
    products,
    purchase_suggestions,
    reports,
    sales,
    settings,
    users,
    waste,
)

api_router = APIRouter()

# Inventory core
api_router.include_router(materials.router, prefix="/materials", tags=["materials", "stock"])
api_router.include_router(products.router, prefix="/products", tags=["products", "recipes"])
api_router.include_router(sales.router, prefix="/sales", tags=["sales"])
api_router.include_router(waste.router, prefix="/waste", tags=["waste"])
api_router.include_router(purchase_suggestions.router, prefix="/purchase-suggestions", tags=["purchasing"])

# Staff and store
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])

# Reporting and administration
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
