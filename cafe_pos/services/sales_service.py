"""Sale Poster - records a checkout and applies its stock consequences.

Flow:
1. Build cart lines from the catalog (unit cost/price/profit x quantity)
2. Append the Sale to the ledger
3. For each line, expand the product recipe and deduct every material

Steps 2 and 3 share one database transaction: if any deduction raises,
the sale and all partial deductions are rolled back together and the
error propagates to the caller. Stock is not floored, so repeated sales
without a restock can drive it negative.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from cafe_pos.core import ids
from cafe_pos.core.exceptions import ConflictError, NotFoundError, ValidationError
from cafe_pos.core.timeutils import local_day, to_utc, utcnow
from cafe_pos.models.product import Product
from cafe_pos.models.sale import Sale, SaleItem
from cafe_pos.models.stock import MovementReason
from cafe_pos.schemas.sale import SaleCreate
from cafe_pos.services import recipe_resolver
from cafe_pos.services.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class SalesService:
    """Append-only sales ledger with recipe-driven stock deduction."""

    def __init__(self, db: Session, ledger: Optional[StockLedger] = None):
        self.db = db
        self.ledger = ledger or StockLedger(db)

    def post_sale(self, data: SaleCreate) -> Sale:
        if not data.items:
            raise ValidationError("A sale needs at least one item")

        sale_id = data.id or ids.new_id(ids.SALE)
        if self.db.get(Sale, sale_id) is not None:
            raise ConflictError(f"Sale '{sale_id}' already exists")

        timestamp = to_utc(data.timestamp) if data.timestamp else utcnow()
        lines: List[tuple] = []
        for position, line in enumerate(data.items):
            if line.quantity <= 0:
                raise ValidationError(f"Quantity for product '{line.product_id}' must be positive")
            product = self.db.get(Product, line.product_id)
            if product is None:
                raise NotFoundError("Product", line.product_id)
            if not product.is_active:
                raise ValidationError(f"Product '{product.name}' is not available for sale")
            lines.append((product, self._build_item(position, product, line.quantity)))

        items = [item for _, item in lines]
        sale = Sale(
            id=sale_id,
            subtotal=sum((i.total_price for i in items), Decimal("0")),
            total_cost=sum((i.total_cost for i in items), Decimal("0")),
            total_profit=sum((i.total_profit for i in items), Decimal("0")),
            payment_method=data.payment_method,
            timestamp=timestamp,
            date=local_day(timestamp),
            cashier_id=data.cashier_id,
            cashier_name=data.cashier_name,
            items=items,
        )

        try:
            self.db.add(sale)
            self.db.flush()

            deductions = 0
            for product, item in lines:
                for consumption in recipe_resolver.expand(product, item.quantity):
                    self.ledger.deduct(
                        consumption.material_id,
                        consumption.quantity,
                        reason=MovementReason.SALE,
                        ref_type="sale",
                        ref_id=sale.id,
                    )
                    deductions += 1

            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Sale {sale_id} rolled back, stock left unchanged: {e}", exc_info=True)
            raise

        self.db.refresh(sale)
        logger.info(
            f"Recorded sale {sale.id}: {len(items)} line(s), subtotal {sale.subtotal}, "
            f"{deductions} stock deduction(s)"
        )
        return sale

    @staticmethod
    def _build_item(position: int, product: Product, quantity: int) -> SaleItem:
        return SaleItem(
            position=position,
            product_id=product.id,
            product_name=product.name,
            sku=product.sku,
            quantity=quantity,
            unit_cost=product.cost,
            unit_price=product.price,
            unit_profit=product.profit,
            total_cost=product.cost * quantity,
            total_price=product.price * quantity,
            total_profit=product.profit * quantity,
        )

    def get_sale(self, sale_id: str) -> Sale:
        sale = self.db.get(Sale, sale_id)
        if sale is None:
            raise NotFoundError("Sale", sale_id)
        return sale

    def list_sales(self, date: Optional[str] = None, cashier_id: Optional[str] = None) -> List[Sale]:
        """All sales in insertion order, optionally for one local day."""
        query = self.db.query(Sale)
        if date:
            query = query.filter(Sale.date == date)
        if cashier_id:
            query = query.filter(Sale.cashier_id == cashier_id)
        return query.order_by(Sale.timestamp, Sale.id).all()

    def sales_between(self, start: str, end: str) -> List[Sale]:
        """Sales whose local day falls in ``[start, end]`` (YYYY-MM-DD strings)."""
        return (
            self.db.query(Sale)
            .filter(Sale.date >= start, Sale.date <= end)
            .order_by(Sale.timestamp, Sale.id)
            .all()
        )
