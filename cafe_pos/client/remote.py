"""HTTP client for the cafe POS API."""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, TypeAdapter

from cafe_pos.core.config import settings
from cafe_pos.core.exceptions import ConflictError, NotFoundError, PosError, ValidationError
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


class RemoteUnavailableError(Exception):
    """The remote store could not be reached or failed on its side."""


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else body
    return detail if isinstance(detail, str) else str(detail)


def error_from_response(response: httpx.Response) -> Exception:
    """Map an error response back to the exception the server raised."""
    detail = _detail(response)
    status = response.status_code
    if status == 404:
        return NotFoundError.from_detail(detail)
    if status == 409:
        return ConflictError(detail)
    if status in (400, 422):
        return ValidationError(detail)
    if status == 429 or status >= 500:
        return RemoteUnavailableError(f"HTTP {status}: {detail}")
    err = PosError(detail)
    err.status_code = status
    return err


def _body(model: BaseModel, partial: bool = False) -> Dict[str, Any]:
    return model.model_dump(mode="json", exclude_unset=partial)


class RemoteBackend:
    """``PosBackend`` over HTTP using httpx.

    Transport errors, timeouts and 5xx responses raise
    ``RemoteUnavailableError``; 4xx responses raise the matching domain
    error.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
        health_timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.remote_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.client_request_timeout
        self.health_timeout = health_timeout if health_timeout is not None else settings.client_health_timeout
        self._client = client or httpx.Client(timeout=self.timeout)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", self.timeout)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"{method} {url} failed: {e.__class__.__name__}: {e}")
            raise RemoteUnavailableError(str(e)) from e

        if response.is_error:
            raise error_from_response(response)
        return response

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        return self._request("GET", path, params=params or None).json()

    def health(self) -> bool:
        """Probe the server's liveness endpoint."""
        root = self.base_url.rsplit("/api/", 1)[0]
        try:
            response = self._client.get(f"{root}/health", timeout=self.health_timeout)
        except httpx.TransportError:
            return False
        return response.status_code == 200

    # Materials and stock

    def get_materials(self) -> List[MaterialResponse]:
        return TypeAdapter(List[MaterialResponse]).validate_python(self._get("/materials"))

    def add_material(self, material: MaterialCreate) -> MaterialResponse:
        response = self._request("POST", "/materials", json=_body(material))
        return MaterialResponse.model_validate(response.json())

    def update_material(self, material_id: str, updates: MaterialUpdate) -> MaterialResponse:
        response = self._request("PUT", f"/materials/{material_id}", json=_body(updates, partial=True))
        return MaterialResponse.model_validate(response.json())

    def deduct_stock(self, material_id: str, quantity: Decimal) -> None:
        self._request("POST", f"/materials/{material_id}/deduct", json={"quantity": str(quantity)})

    def adjust_stock(self, material_id: str, delta: Decimal, notes: Optional[str] = None) -> MaterialResponse:
        response = self._request(
            "POST", f"/materials/{material_id}/adjust", json={"delta": str(delta), "notes": notes}
        )
        return MaterialResponse.model_validate(response.json())

    # Catalog

    def get_products(self) -> List[ProductResponse]:
        return TypeAdapter(List[ProductResponse]).validate_python(self._get("/products"))

    def add_product(self, product: ProductCreate) -> ProductResponse:
        response = self._request("POST", "/products", json=_body(product))
        return ProductResponse.model_validate(response.json())

    def update_product(self, product_id: str, updates: ProductUpdate) -> ProductResponse:
        response = self._request("PUT", f"/products/{product_id}", json=_body(updates, partial=True))
        return ProductResponse.model_validate(response.json())

    def resolve_recipe(self, product_id: str, units: Decimal) -> List[ConsumptionResponse]:
        response = self._request("POST", f"/products/{product_id}/resolve", params={"units": str(units)})
        return TypeAdapter(List[ConsumptionResponse]).validate_python(response.json())

    # Ledgers

    def post_sale(self, sale: SaleCreate) -> SaleResponse:
        response = self._request("POST", "/sales", json=_body(sale))
        return SaleResponse.model_validate(response.json())

    def get_sales(self, date: Optional[str] = None) -> List[SaleResponse]:
        return TypeAdapter(List[SaleResponse]).validate_python(self._get("/sales", {"date": date}))

    def post_waste(self, waste: WasteCreate) -> WasteResponse:
        response = self._request("POST", "/waste", json=_body(waste))
        return WasteResponse.model_validate(response.json())

    def get_waste(self, date: Optional[str] = None) -> List[WasteResponse]:
        return TypeAdapter(List[WasteResponse]).validate_python(self._get("/waste", {"date": date}))

    def get_purchase_suggestions(self) -> List[PurchaseSuggestionResponse]:
        return TypeAdapter(List[PurchaseSuggestionResponse]).validate_python(self._get("/purchase-suggestions"))

    # Attendance

    def check_in(self, user_id: str, user_name: str, notes: Optional[str] = None) -> AttendanceResponse:
        response = self._request(
            "POST", "/attendance/checkin", json={"user_id": user_id, "user_name": user_name, "notes": notes}
        )
        return AttendanceResponse.model_validate(response.json())

    def check_out(self, user_id: str) -> AttendanceResponse:
        response = self._request("POST", "/attendance/checkout", json={"user_id": user_id})
        return AttendanceResponse.model_validate(response.json())

    def get_attendance(self, date: Optional[str] = None, user_id: Optional[str] = None) -> List[AttendanceResponse]:
        data = self._get("/attendance", {"date": date, "user_id": user_id})
        return TypeAdapter(List[AttendanceResponse]).validate_python(data)
