"""
PATH: dashboard/services/dashboard_service.py

DASHBOARD AGGREGATES (read-only)

Revenue definition:
- Σ total of CONFIRMED rentals
- + Σ quotation amount (rate price x quantity) of every order

Top products / categories / customers ignore cancelled rentals.
Category totals only count lines linked to a catalog product.
"""

from __future__ import annotations

from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce

from orders.models import Order, Quotation
from rentals.models import OrderLine, RentalOrder, RentalStatus

ZERO = Decimal("0.00")

MONEY = DecimalField(max_digits=14, decimal_places=2)

UNCATEGORIZED = "Uncategorized"


def _order_revenue() -> Decimal:
    amount = ExpressionWrapper(
        F("quotation__rate__price") * F("quotation__quantity"),
        output_field=MONEY,
    )
    total = Order.objects.aggregate(total=Sum(amount))["total"]
    return Decimal(total or ZERO)


def _confirmed_rental_revenue() -> Decimal:
    total = RentalOrder.objects.filter(status=RentalStatus.CONFIRMED).aggregate(
        total=Sum("total")
    )["total"]
    return Decimal(total or ZERO)


def get_stats() -> dict:
    return {
        "quotations": Quotation.objects.count(),
        "rentals": RentalOrder.objects.count(),
        "revenue": _confirmed_rental_revenue() + _order_revenue(),
    }


def rentals_by_status() -> dict[str, int]:
    counts = {status.value: 0 for status in RentalStatus}
    for row in RentalOrder.objects.values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]
    return counts


def top_products(*, limit: int = 5) -> list[dict]:
    rows = (
        OrderLine.objects.exclude(rental__status=RentalStatus.CANCELLED)
        .values("product_name")
        .annotate(
            quantity=Sum("quantity"),
            revenue=Coalesce(Sum("sub_total"), ZERO, output_field=MONEY),
        )
        .order_by("-revenue", "product_name")[:limit]
    )
    return [
        {"product_name": r["product_name"], "quantity": r["quantity"] or 0, "revenue": r["revenue"]}
        for r in rows
    ]


def top_categories(*, limit: int = 5) -> list[dict]:
    rows = (
        OrderLine.objects.exclude(rental__status=RentalStatus.CANCELLED)
        .filter(product__isnull=False)
        .values("product__category")
        .annotate(
            quantity=Sum("quantity"),
            revenue=Coalesce(Sum("sub_total"), ZERO, output_field=MONEY),
        )
        .order_by("-revenue", "product__category")[:limit]
    )
    return [
        {
            "category": r["product__category"] or UNCATEGORIZED,
            "quantity": r["quantity"] or 0,
            "revenue": r["revenue"],
        }
        for r in rows
    ]


def top_customers(*, limit: int = 5) -> list[dict]:
    rows = (
        RentalOrder.objects.exclude(status=RentalStatus.CANCELLED)
        .exclude(customer="")
        .values("customer")
        .annotate(
            rentals=Count("id"),
            revenue=Coalesce(Sum("total"), ZERO, output_field=MONEY),
        )
        .order_by("-revenue", "customer")[:limit]
    )
    return [
        {"customer": r["customer"], "rentals": r["rentals"], "revenue": r["revenue"]}
        for r in rows
    ]
