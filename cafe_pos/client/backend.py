"""The operations a POS front end needs from its data store.

Both the HTTP client and the local SQLite backend implement this
protocol, so the fallback client can route any call to either one.
"""

from decimal import Decimal
from typing import List, Optional, Protocol

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


class PosBackend(Protocol):

    # Materials and stock
    def get_materials(self) -> List[MaterialResponse]: ...

    def add_material(self, material: MaterialCreate) -> MaterialResponse: ...

    def update_material(self, material_id: str, updates: MaterialUpdate) -> MaterialResponse: ...

    def deduct_stock(self, material_id: str, quantity: Decimal) -> None: ...

    def adjust_stock(self, material_id: str, delta: Decimal, notes: Optional[str] = None) -> MaterialResponse: ...

    # Catalog
    def get_products(self) -> List[ProductResponse]: ...

    def add_product(self, product: ProductCreate) -> ProductResponse: ...

    def update_product(self, product_id: str, updates: ProductUpdate) -> ProductResponse: ...

    def resolve_recipe(self, product_id: str, units: Decimal) -> List[ConsumptionResponse]: ...

    # Ledgers
    def post_sale(self, sale: SaleCreate) -> SaleResponse: ...

    def get_sales(self, date: Optional[str] = None) -> List[SaleResponse]: ...

    def post_waste(self, waste: WasteCreate) -> WasteResponse: ...

    def get_waste(self, date: Optional[str] = None) -> List[WasteResponse]: ...

    def get_purchase_suggestions(self) -> List[PurchaseSuggestionResponse]: ...

    # Attendance
    def check_in(self, user_id: str, user_name: str, notes: Optional[str] = None) -> AttendanceResponse: ...

    def check_out(self, user_id: str) -> AttendanceResponse: ...

    def get_attendance(self, date: Optional[str] = None, user_id: Optional[str] = None) -> List[AttendanceResponse]: ...
