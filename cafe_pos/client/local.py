"""Backend that runs the inventory services against a local SQLite file."""

import logging
import os
from contextlib import contextmanager
from decimal import Decimal
from typing import Callable, Iterator, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from cafe_pos.core.config import settings
from cafe_pos.core.exceptions import ValidationError
from cafe_pos.db.base import Base
from cafe_pos.db.session import make_engine
from cafe_pos.models.stock import MovementReason
from cafe_pos.schemas.attendance import AttendanceResponse
from cafe_pos.schemas.material import (
    MaterialCreate,
    MaterialResponse,
    MaterialUpdate,
    PurchaseSuggestionResponse,
)
from cafe_pos.schemas.product import ConsumptionResponse, ProductCreate, ProductResponse, ProductUpdate
from cafe_pos.schemas.sale import SaleCreate, SaleResponse
from cafe_pos.schemas.waste import WasteCreate, WasteResponse
from cafe_pos.services import recipe_resolver
from cafe_pos.services.attendance_service import AttendanceService
from cafe_pos.services.product_service import ProductService
from cafe_pos.services.purchase_advisor import get_purchase_suggestions
from cafe_pos.services.sales_service import SalesService
from cafe_pos.services.stock_ledger import StockLedger
from cafe_pos.services.waste_service import WasteService

import cafe_pos.models  # noqa: F401

logger = logging.getLogger(__name__)


class LocalBackend:
    """Serves every ``PosBackend`` call from a local database.

    Each call runs in its own session; results are converted to response
    schemas before the session closes.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: Optional[str] = None) -> "LocalBackend":
        database_url = database_url or settings.local_database_url
        if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
            directory = os.path.dirname(database_url[len("sqlite:///"):])
            if directory:
                os.makedirs(directory, exist_ok=True)
        engine = make_engine(database_url)
        Base.metadata.create_all(bind=engine)
        logger.info(f"Local store ready at {database_url}")
        return cls(sessionmaker(autocommit=False, autoflush=False, bind=engine))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    # Materials and stock

    def get_materials(self) -> List[MaterialResponse]:
        with self._session() as db:
            return [MaterialResponse.model_validate(m) for m in StockLedger(db).snapshot()]

    def add_material(self, material: MaterialCreate) -> MaterialResponse:
        with self._session() as db:
            return MaterialResponse.model_validate(StockLedger(db).create_material(material))

    def update_material(self, material_id: str, updates: MaterialUpdate) -> MaterialResponse:
        with self._session() as db:
            return MaterialResponse.model_validate(StockLedger(db).update_material(material_id, updates))

    def deduct_stock(self, material_id: str, quantity: Decimal) -> None:
        if Decimal(str(quantity)) <= 0:
            raise ValidationError("Deduction quantity must be positive")
        with self._session() as db:
            StockLedger(db).deduct(
                material_id, quantity, reason=MovementReason.ADJUSTMENT, ref_type="manual"
            )
            db.commit()

    def adjust_stock(self, material_id: str, delta: Decimal, notes: Optional[str] = None) -> MaterialResponse:
        with self._session() as db:
            return MaterialResponse.model_validate(StockLedger(db).adjust(material_id, delta, notes=notes))

    # Catalog

    def get_products(self) -> List[ProductResponse]:
        with self._session() as db:
            return [ProductResponse.model_validate(p) for p in ProductService(db).list_products()]

    def add_product(self, product: ProductCreate) -> ProductResponse:
        with self._session() as db:
            return ProductResponse.model_validate(ProductService(db).create_product(product))

    def update_product(self, product_id: str, updates: ProductUpdate) -> ProductResponse:
        with self._session() as db:
            return ProductResponse.model_validate(ProductService(db).update_product(product_id, updates))

    def resolve_recipe(self, product_id: str, units: Decimal) -> List[ConsumptionResponse]:
        with self._session() as db:
            product = ProductService(db).get_product(product_id)
            return [ConsumptionResponse.model_validate(c) for c in recipe_resolver.expand(product, units)]

    # Ledgers

    def post_sale(self, sale: SaleCreate) -> SaleResponse:
        with self._session() as db:
            return SaleResponse.model_validate(SalesService(db).post_sale(sale))

    def get_sales(self, date: Optional[str] = None) -> List[SaleResponse]:
        with self._session() as db:
            return [SaleResponse.model_validate(s) for s in SalesService(db).list_sales(date=date)]

    def post_waste(self, waste: WasteCreate) -> WasteResponse:
        with self._session() as db:
            return WasteResponse.model_validate(WasteService(db).post_waste(waste))

    def get_waste(self, date: Optional[str] = None) -> List[WasteResponse]:
        with self._session() as db:
            return [WasteResponse.model_validate(w) for w in WasteService(db).list_waste(date=date)]

    def get_purchase_suggestions(self) -> List[PurchaseSuggestionResponse]:
        with self._session() as db:
            suggestions = get_purchase_suggestions(StockLedger(db).snapshot())
            return [PurchaseSuggestionResponse.model_validate(s) for s in suggestions]

    # Attendance

    def check_in(self, user_id: str, user_name: str, notes: Optional[str] = None) -> AttendanceResponse:
        with self._session() as db:
            return AttendanceResponse.model_validate(AttendanceService(db).check_in(user_id, user_name, notes=notes))

    def check_out(self, user_id: str) -> AttendanceResponse:
        with self._session() as db:
            return AttendanceResponse.model_validate(AttendanceService(db).check_out(user_id))

    def get_attendance(self, date: Optional[str] = None, user_id: Optional[str] = None) -> List[AttendanceResponse]:
        with self._session() as db:
            records = AttendanceService(db).list_attendance(date=date, user_id=user_id)
            return [AttendanceResponse.model_validate(a) for a in records]
