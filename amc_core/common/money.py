# amc_core/common/money.py
"""
Decimal helpers shared by every monetary calculation.

All currency figures are carried as ``Decimal`` and persisted with two decimal
places. Floats never enter a sum: API input arrives as strings/Decimals through
DRF ``DecimalField`` and anything else is converted via ``str()`` first.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from rest_framework.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """
    Convert user/DB input into a finite Decimal.

    None maps to zero (an unset manual adjustment contributes nothing).
    NaN, Infinity and non-numeric input raise ValidationError.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValidationError({field_name: "Must be a number."})

    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError({field_name: "Must be a number."})

    if not d.is_finite():
        raise ValidationError({field_name: "Must be a finite number."})
    return d


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Any], field_name: str = "amount") -> Decimal:
    return sum((to_decimal(v, field_name) for v in values), ZERO)


def ensure_non_negative(value: Any, field_name: str) -> Decimal:
    d = to_decimal(value, field_name)
    if d < 0:
        raise ValidationError({field_name: "Must be >= 0."})
    return d


def ensure_percentage(value: Any, field_name: str = "tax_rate") -> Decimal:
    d = to_decimal(value, field_name)
    if d < 0 or d > HUNDRED:
        raise ValidationError({field_name: "Must be between 0 and 100."})
    return d


def ensure_money(value: Any, field_name: str = "amount") -> Decimal:
    """Finite, >= 0, rounded to cents."""
    return quantize_money(ensure_non_negative(value, field_name))


def ensure_positive_int(value: Any, field_name: str = "quantity") -> int:
    message = "Must be a positive integer."
    if isinstance(value, bool):
        raise ValidationError({field_name: message})
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError({field_name: message})
    # rejects 2.5 / "2.5" while accepting 2, "2" and Decimal("2.00")
    if number != value and str(number) != str(value).strip():
        raise ValidationError({field_name: message})
    if number <= 0:
        raise ValidationError({field_name: message})
    return number


# Decimal(12, 2) columns
MAX_MONEY = Decimal("9999999999.99")


def ensure_storable(value: Decimal, field_name: str) -> Decimal:
    if abs(value) > MAX_MONEY:
        raise ValidationError({field_name: f"Exceeds the largest storable amount ({MAX_MONEY})."})
    return value
