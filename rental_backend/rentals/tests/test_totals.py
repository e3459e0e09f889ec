from dataclasses import dataclass
from decimal import Decimal

from django.test import SimpleTestCase

from rentals.services.totals import RentalTotals, compute_totals


@dataclass
class Line:
    sub_total: Decimal
    tax: Decimal


class ComputeTotalsTests(SimpleTestCase):
    """
    Totals calculator.

    GUARANTEES:
    - untaxed_total == sum(sub_total), total_tax == sum(tax), total == both
    - empty input yields zeros
    - repeated computation over the same lines is identical
    - exact decimal arithmetic (no float drift)
    """

    def test_empty_lines_yield_zero(self):
        self.assertEqual(compute_totals([]), RentalTotals(Decimal("0"), Decimal("0"), Decimal("0")))

    def test_sums_r0001_lines(self):
        lines = [
            Line(Decimal("1000"), Decimal("0")),
            Line(Decimal("1485"), Decimal("135")),
            Line(Decimal("1056"), Decimal("96")),
        ]

        totals = compute_totals(lines)

        self.assertEqual(totals.untaxed_total, Decimal("3541"))
        self.assertEqual(totals.total_tax, Decimal("231"))
        self.assertEqual(totals.total, Decimal("3772"))

    def test_recompute_is_idempotent_and_order_independent(self):
        lines = [Line(Decimal("10.10"), Decimal("1.01")), Line(Decimal("20.20"), Decimal("2.02"))]

        first = compute_totals(lines)
        second = compute_totals(lines)
        reversed_ = compute_totals(list(reversed(lines)))

        self.assertEqual(first, second)
        self.assertEqual(first, reversed_)

    def test_accepts_mappings_and_floats_without_drift(self):
        lines = [{"sub_total": 0.1, "tax": 0.2} for _ in range(10)]

        totals = compute_totals(lines)

        self.assertEqual(totals.untaxed_total, Decimal("1.0"))
        self.assertEqual(totals.total_tax, Decimal("2.0"))
        self.assertEqual(totals.total, Decimal("3.0"))

    def test_negative_values_are_summed_as_is(self):
        totals = compute_totals([Line(Decimal("-5"), Decimal("1")), Line(Decimal("10"), Decimal("-1"))])

        self.assertEqual(totals.untaxed_total, Decimal("5"))
        self.assertEqual(totals.total_tax, Decimal("0"))
        self.assertEqual(totals.total, Decimal("5"))

    def test_quantized_payload(self):
        totals = compute_totals([Line(Decimal("1"), Decimal("0.5"))])

        self.assertEqual(
            totals.as_dict(),
            {"untaxed_total": "1.00", "total_tax": "0.50", "total": "1.50"},
        )
