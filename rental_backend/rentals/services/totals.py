"""
RENTAL TOTALS CALCULATOR

Pure reduction over order lines:
- untaxed_total = sum of line sub_total
- total_tax     = sum of line tax
- total         = untaxed_total + total_tax

No database access and no validation: negative amounts are summed as-is.
Rounding to cents happens only when the result is persisted or rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping

ZERO = Decimal("0")
CENT = Decimal("0.01")


@dataclass(frozen=True)
class RentalTotals:
    untaxed_total: Decimal = ZERO
    total_tax: Decimal = ZERO
    total: Decimal = ZERO

    def quantized(self) -> "RentalTotals":
        return RentalTotals(
            untaxed_total=self.untaxed_total.quantize(CENT),
            total_tax=self.total_tax.quantize(CENT),
            total=self.total.quantize(CENT),
        )

    def as_dict(self) -> dict[str, str]:
        q = self.quantized()
        return {
            "untaxed_total": str(q.untaxed_total),
            "total_tax": str(q.total_tax),
            "total": str(q.total),
        }


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps floats from leaking binary noise into the sum
    return Decimal(str(value))


def _amount(line: Any, name: str) -> Decimal:
    if isinstance(line, Mapping):
        return _to_decimal(line.get(name))
    return _to_decimal(getattr(line, name, None))


def compute_totals(lines: Iterable[Any]) -> RentalTotals:
    """
    Accepts OrderLine instances, dataclasses, or mappings exposing
    `sub_total` and `tax`. An empty iterable yields all zeros.
    """
    untaxed = ZERO
    tax = ZERO

    for line in lines:
        untaxed += _amount(line, "sub_total")
        tax += _amount(line, "tax")

    return RentalTotals(untaxed_total=untaxed, total_tax=tax, total=untaxed + tax)
