"""API client that falls back to the local store when the server is down.

Every call goes to the remote backend while the circuit breaker allows
it. A ``RemoteUnavailableError`` counts as a breaker failure and the same
call is served by the local backend instead. Once the breaker is open,
calls go straight to the local backend until ``reset_timeout`` elapses;
the next call then probes the remote again.

Reads served by the remote are cached for the cache TTL. Any write clears
the whole cache. Local and remote state are never reconciled.
"""

import logging
from decimal import Decimal
from typing import Any, List, Optional

from cafe_pos.client.backend import PosBackend
from cafe_pos.client.local import LocalBackend
from cafe_pos.client.remote import RemoteBackend, RemoteUnavailableError
from cafe_pos.core.cache import ResponseCache
from cafe_pos.core.circuit_breaker import BreakerState, CircuitBreaker
from cafe_pos.core.config import settings
from cafe_pos.core.exceptions import PosError
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

logger = logging.getLogger(__name__)


class FallbackPosClient:
    """``PosBackend`` that prefers the remote store and degrades to local."""

    def __init__(
        self,
        remote: PosBackend,
        local: PosBackend,
        breaker: Optional[CircuitBreaker] = None,
        cache: Optional[ResponseCache] = None,
    ):
        self.remote = remote
        self.local = local
        self.breaker = breaker or CircuitBreaker(
            failure_threshold=settings.breaker_failure_threshold,
            reset_timeout=settings.breaker_reset_timeout,
        )
        self.cache = cache or ResponseCache(ttl_seconds=settings.client_cache_ttl_seconds)

    @classmethod
    def from_settings(cls) -> "FallbackPosClient":
        return cls(RemoteBackend(), LocalBackend.from_url())

    @property
    def using_fallback(self) -> bool:
        return self.breaker.state != BreakerState.CLOSED

    def _dispatch(self, method: str, *args, **kwargs):
        """Run ``method`` remotely if possible. Returns ``(result, from_remote)``."""
        if self.breaker.allow_request():
            try:
                result = getattr(self.remote, method)(*args, **kwargs)
            except RemoteUnavailableError as e:
                self.breaker.record_failure()
                logger.warning(f"Remote {method} unavailable ({e}); serving from local store")
            except PosError:
                # The server answered; the request itself was rejected
                self.breaker.record_success()
                raise
            else:
                self.breaker.record_success()
                return result, True
        return getattr(self.local, method)(*args, **kwargs), False

    def _read(self, key: str, method: str, *args, **kwargs) -> Any:
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        result, from_remote = self._dispatch(method, *args, **kwargs)
        if from_remote:
            self.cache.set(key, result)
        return result

    def _write(self, method: str, *args, **kwargs) -> Any:
        try:
            result, _ = self._dispatch(method, *args, **kwargs)
        finally:
            self.cache.clear()
        return result

    # Materials and stock

    def get_materials(self) -> List[MaterialResponse]:
        return self._read("materials", "get_materials")

    def add_material(self, material: MaterialCreate) -> MaterialResponse:
        return self._write("add_material", material)

    def update_material(self, material_id: str, updates: MaterialUpdate) -> MaterialResponse:
        return self._write("update_material", material_id, updates)

    def deduct_stock(self, material_id: str, quantity: Decimal) -> None:
        self._write("deduct_stock", material_id, quantity)

    def adjust_stock(self, material_id: str, delta: Decimal, notes: Optional[str] = None) -> MaterialResponse:
        return self._write("adjust_stock", material_id, delta, notes=notes)

    # Catalog

    def get_products(self) -> List[ProductResponse]:
        return self._read("products", "get_products")

    def add_product(self, product: ProductCreate) -> ProductResponse:
        return self._write("add_product", product)

    def update_product(self, product_id: str, updates: ProductUpdate) -> ProductResponse:
        return self._write("update_product", product_id, updates)

    def resolve_recipe(self, product_id: str, units: Decimal) -> List[ConsumptionResponse]:
        return self._read(f"resolve:{product_id}:{units}", "resolve_recipe", product_id, units)

    # Ledgers

    def post_sale(self, sale: SaleCreate) -> SaleResponse:
        return self._write("post_sale", sale)

    def get_sales(self, date: Optional[str] = None) -> List[SaleResponse]:
        return self._read(f"sales:{date or ''}", "get_sales", date=date)

    def post_waste(self, waste: WasteCreate) -> WasteResponse:
        return self._write("post_waste", waste)

    def get_waste(self, date: Optional[str] = None) -> List[WasteResponse]:
        return self._read(f"waste:{date or ''}", "get_waste", date=date)

    def get_purchase_suggestions(self) -> List[PurchaseSuggestionResponse]:
        return self._read("purchase-suggestions", "get_purchase_suggestions")

    # Attendance

    def check_in(self, user_id: str, user_name: str, notes: Optional[str] = None) -> AttendanceResponse:
        return self._write("check_in", user_id, user_name, notes=notes)

    def check_out(self, user_id: str) -> AttendanceResponse:
        return self._write("check_out", user_id)

    def get_attendance(self, date: Optional[str] = None, user_id: Optional[str] = None) -> List[AttendanceResponse]:
        key = f"attendance:{date or ''}:{user_id or ''}"
        return self._read(key, "get_attendance", date=date, user_id=user_id)
