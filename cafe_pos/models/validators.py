"""Model-level validation utilities for data integrity.

Reusable validators that enforce business rules at the ORM level, so
invalid data cannot reach the database regardless of which route or
service writes it.
"""

from decimal import Decimal

from cafe_pos.core.exceptions import ValidationError


def _as_decimal(value) -> Decimal:
    return Decimal(str(value)) if not isinstance(value, Decimal) else value


def non_negative(key: str, value):
    """Validate that a numeric value is >= 0."""
    if value is not None and _as_decimal(value) < 0:
        raise ValidationError(f"{key} cannot be negative, got {value}")
    return value


def positive(key: str, value):
    """Validate that a numeric value is > 0."""
    if value is not None and _as_decimal(value) <= 0:
        raise ValidationError(f"{key} must be positive, got {value}")
    return value
