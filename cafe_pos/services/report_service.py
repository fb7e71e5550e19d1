"""Dashboard and period reports built from the sales, waste and stock ledgers."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from cafe_pos.core.timeutils import local_day
from cafe_pos.models.attendance import Attendance
from cafe_pos.models.sale import Sale
from cafe_pos.models.user import User
from cafe_pos.schemas.material import MaterialResponse, PurchaseSuggestionResponse
from cafe_pos.schemas.report import DashboardStats, PeriodSummary, ShiftSummary, TopProduct
from cafe_pos.services.attendance_service import AttendanceService
from cafe_pos.services.purchase_advisor import get_purchase_suggestions
from cafe_pos.services.sales_service import SalesService
from cafe_pos.services.stock_ledger import StockLedger
from cafe_pos.services.waste_service import WasteService

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def top_products(sales: Iterable[Sale], limit: int = 5) -> List[TopProduct]:
    """Products ranked by revenue across the given sales."""
    totals: Dict[str, TopProduct] = {}
    for sale in sales:
        for item in sale.items:
            entry = totals.get(item.product_id)
            if entry is None:
                entry = totals[item.product_id] = TopProduct(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=0,
                    revenue=ZERO,
                    profit=ZERO,
                )
            entry.quantity += item.quantity
            entry.revenue += item.total_price
            entry.profit += item.total_profit
    return sorted(totals.values(), key=lambda p: p.revenue, reverse=True)[:limit]


class ReportService:
    """Read-only aggregations for the owner dashboard and reports screens."""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = StockLedger(db)
        self.sales = SalesService(db, self.ledger)
        self.waste = WasteService(db, self.ledger)
        self.attendance = AttendanceService(db)

    def dashboard(self, today: Optional[str] = None) -> DashboardStats:
        today = today or local_day()
        sales = self.sales.list_sales(date=today)
        materials = self.ledger.snapshot()
        suggestions = get_purchase_suggestions(materials)

        return DashboardStats(
            date=today,
            today_sales=sum((s.subtotal for s in sales), ZERO),
            today_profit=sum((s.total_profit for s in sales), ZERO),
            today_orders=len(sales),
            low_stock_items=[
                MaterialResponse.model_validate(m) for m in materials if m.current_stock < m.min_stock
            ],
            purchase_suggestions=[PurchaseSuggestionResponse.model_validate(s) for s in suggestions],
            today_waste=sum((w.total_loss for w in self.waste.list_waste(date=today)), ZERO),
            present_employees=self.attendance.present_count(today),
            total_employees=self.db.query(User).filter(User.is_active.is_(True)).count(),
        )

    def period_summary(self, start: str, end: str, top: int = 5) -> PeriodSummary:
        """Profit and loss for local days ``start`` through ``end`` inclusive."""
        sales = self.sales.sales_between(start, end)
        waste_loss = sum((w.total_loss for w in self.waste.waste_between(start, end)), ZERO)
        profit = sum((s.total_profit for s in sales), ZERO)
        stock = self.ledger.summary()

        work_hours = sum(
            (
                a.work_hours
                for a in self.db.query(Attendance).filter(
                    Attendance.date >= start, Attendance.date <= end, Attendance.work_hours.isnot(None)
                )
            ),
            ZERO,
        )

        return PeriodSummary(
            start=start,
            end=end,
            revenue=sum((s.subtotal for s in sales), ZERO),
            cost=sum((s.total_cost for s in sales), ZERO),
            profit=profit,
            waste_loss=waste_loss,
            net_profit=profit - waste_loss,
            orders=len(sales),
            inventory_value=stock["inventory_value"],
            low_stock_count=stock["low_stock_count"],
            work_hours=work_hours,
            top_products=top_products(sales, top),
        )

    def shift_summary(self, cashier_id: str, day: Optional[str] = None) -> ShiftSummary:
        day = day or local_day()
        sales = self.sales.list_sales(date=day, cashier_id=cashier_id)
        by_method: Dict[str, Decimal] = defaultdict(lambda: ZERO)
        for sale in sales:
            by_method[sale.payment_method] += sale.subtotal

        return ShiftSummary(
            cashier_id=cashier_id,
            date=day,
            orders=len(sales),
            total_sales=sum((s.subtotal for s in sales), ZERO),
            total_profit=sum((s.total_profit for s in sales), ZERO),
            by_payment_method=dict(by_method),
            top_products=top_products(sales),
        )
