from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from ..core.constants import AMOUNT_QUANTUM
from ..core.exceptions import ValidationError

AmountInput = Union[str, int, float, Decimal, None]


def require_non_empty(value: str, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def parse_optional_id(value: Union[str, int, None], field_name: str) -> Optional[int]:
    """Blank means no id; anything else must be a positive integer."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an id")
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be an id")
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be an id")
    return parsed


def parse_amount(value: AmountInput, field_name: str, *, allow_blank: bool = False) -> Decimal:
    """Parse a money value into a non-negative Decimal with two places.

    Floats go through ``str`` so that 0.1 stays 0.1 and not its binary
    expansion.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        if allow_blank:
            return Decimal("0.00")
        raise ValidationError(f"{field_name} is required")

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")

    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    try:
        return amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"{field_name} is too large")


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
