"""Report schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel

from cafe_pos.schemas.material import MaterialResponse, PurchaseSuggestionResponse


class DashboardStats(BaseModel):
    date: str
    today_sales: Decimal
    today_profit: Decimal
    today_orders: int
    low_stock_items: List[MaterialResponse]
    purchase_suggestions: List[PurchaseSuggestionResponse]
    today_waste: Decimal
    present_employees: int
    total_employees: int


class TopProduct(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    revenue: Decimal
    profit: Decimal


class PeriodSummary(BaseModel):
    start: str
    end: str
    revenue: Decimal
    cost: Decimal
    profit: Decimal
    waste_loss: Decimal
    net_profit: Decimal
    orders: int
    inventory_value: Decimal
    low_stock_count: int
    work_hours: Decimal
    top_products: List[TopProduct]


class ShiftSummary(BaseModel):
    cashier_id: str
    date: str
    orders: int
    total_sales: Decimal
    total_profit: Decimal
    by_payment_method: Dict[str, Decimal]
    top_products: List[TopProduct]
