"""Purchase Advisor - reorder suggestions derived from a stock snapshot.

Read-only projection: nothing here touches the session or mutates the
materials it is given.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List


@dataclass(frozen=True)
class PurchaseSuggestion:
    """Replenishment needed to bring a material back to its target."""

    material: Any
    needed_quantity: Decimal
    estimated_cost: Decimal


def get_purchase_suggestions(materials: Iterable[Any]) -> List[PurchaseSuggestion]:
    """Suggest a purchase for every material below its minimum stock.

    ``needed_quantity`` is ``target_stock - current_stock``; it is negative
    when a material is misconfigured with a target below its current
    stock. Results keep the input order.
    """
    suggestions = []
    for material in materials:
        current = Decimal(str(material.current_stock))
        if current < Decimal(str(material.min_stock)):
            needed = Decimal(str(material.target_stock)) - current
            suggestions.append(PurchaseSuggestion(
                material=material,
                needed_quantity=needed,
                estimated_cost=needed * Decimal(str(material.unit_cost)),
            ))
    return suggestions


def total_estimated_cost(suggestions: Iterable[PurchaseSuggestion]) -> Decimal:
    return sum((s.estimated_cost for s in suggestions), Decimal("0"))


def stock_status(material: Any) -> str:
    """Inventory badge: ``low`` below minimum, ``medium`` below target, else ``good``."""
    if material.current_stock < material.min_stock:
        return "low"
    if material.current_stock < material.target_stock:
        return "medium"
    return "good"
