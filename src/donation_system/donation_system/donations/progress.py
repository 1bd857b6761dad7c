from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from ..core.constants import MAX_PROGRESS

Number = Union[int, float, Decimal]


def _as_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def progress(total_amount: Number, target_amount: Number) -> int:
    """Whole-percent collection progress in [0, 100].

    No target (zero or unset) means no defined progress and yields 0.
    Halves round up, over-funded events stay at 100.
    """

    target = _as_decimal(target_amount or 0)
    if target <= 0:
        return 0

    ratio = _as_decimal(total_amount or 0) / target * 100
    percent = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return min(max(percent, 0), MAX_PROGRESS)
