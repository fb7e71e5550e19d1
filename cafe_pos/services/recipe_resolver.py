"""Recipe Resolver - expands sold products into material consumption.

Everything here is pure: no session, no I/O. ``expand`` accepts any
product-like object with a ``recipe`` sequence of items exposing
``material_id`` and ``quantity`` (ORM rows or response schemas).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Mapping

from cafe_pos.core.exceptions import NotFoundError, ValidationError
from cafe_pos.core.ids import round_half_up
from cafe_pos.models.product import RecipeItem
from cafe_pos.schemas.product import RecipeLineCreate


@dataclass(frozen=True)
class MaterialConsumption:
    """Amount of one material consumed by a sale line."""

    material_id: str
    quantity: Decimal


def expand(product: Any, units_sold) -> List[MaterialConsumption]:
    """Return one consumption pair per recipe item, in recipe order.

    A product with an empty recipe consumes nothing.
    """
    units = Decimal(str(units_sold))
    if units < 0:
        raise ValidationError(f"units sold cannot be negative, got {units_sold}")
    return [
        MaterialConsumption(material_id=item.material_id, quantity=Decimal(str(item.quantity)) * units)
        for item in product.recipe
    ]


def build_recipe_items(lines: Iterable[RecipeLineCreate], materials: Mapping[str, Any]) -> List[RecipeItem]:
    """Snapshot material name, unit and cost into new recipe items.

    ``materials`` maps material id to a material row. Every referenced
    material must already exist.
    """
    items = []
    for position, line in enumerate(lines):
        material = materials.get(line.material_id)
        if material is None:
            raise NotFoundError("Material", line.material_id)
        if line.quantity <= 0:
            raise ValidationError(f"Recipe quantity for '{material.name}' must be positive")
        items.append(RecipeItem(
            position=position,
            material_id=material.id,
            material_name=material.name,
            unit=material.unit,
            unit_cost=material.unit_cost,
            quantity=line.quantity,
            total_cost=line.quantity * material.unit_cost,
        ))
    return items


def recipe_cost(items: Iterable[Any]) -> Decimal:
    return sum((Decimal(str(item.total_cost)) for item in items), Decimal("0"))


def product_profit(price: Decimal, cost: Decimal) -> Decimal:
    """Profit rounded to a whole currency unit."""
    return round_half_up(Decimal(str(price)) - Decimal(str(cost)))

