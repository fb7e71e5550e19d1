"""Product catalog routes."""

from decimal import Decimal

from fastapi import APIRouter, Query, Request, status

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.product import ConsumptionResponse, ProductCreate, ProductResponse, ProductUpdate
from cafe_pos.services import recipe_resolver
from cafe_pos.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=list[ProductResponse])
@limiter.limit("60/minute")
def list_products(request: Request, db: DbSession, active_only: bool = Query(False)):
    return ProductService(db).list_products(active_only=active_only)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_product(request: Request, product_in: ProductCreate, db: DbSession):
    """Create a product. Cost and profit are derived from the recipe."""
    return ProductService(db).create_product(product_in)


@router.get("/{product_id}", response_model=ProductResponse)
@limiter.limit("60/minute")
def get_product(request: Request, product_id: str, db: DbSession):
    return ProductService(db).get_product(product_id)


@router.put("/{product_id}", response_model=ProductResponse)
@limiter.limit("30/minute")
def update_product(request: Request, product_id: str, product_in: ProductUpdate, db: DbSession):
    return ProductService(db).update_product(product_id, product_in)


@router.post("/{product_id}/resolve", response_model=list[ConsumptionResponse])
@limiter.limit("60/minute")
def resolve_recipe(request: Request, product_id: str, db: DbSession, units: Decimal = Query(Decimal("1"))):
    """Material consumption for selling ``units`` of a product. Read-only."""
    product = ProductService(db).get_product(product_id)
    return [ConsumptionResponse.model_validate(c) for c in recipe_resolver.expand(product, units)]
