"""
Repository-style lookups across the quotation / order graph.
Relations are walked by explicit filters, never by back-references.
"""

from __future__ import annotations

from typing import Optional

from orders.models import Contract, Order, Quotation, Reservation


def quotations_for_product(product) -> list[Quotation]:
    return list(Quotation.objects.filter(product=product).select_related("rate"))


def orders_for_quotation(quotation) -> list[Order]:
    return list(Order.objects.filter(quotation=quotation))


def reservations_for_order(order, *, valid_only: bool = False) -> list[Reservation]:
    qs = Reservation.objects.filter(order=order)
    if valid_only:
        qs = qs.filter(is_valid=True)
    return list(qs)


def contract_for_order(order) -> Optional[Contract]:
    return Contract.objects.filter(order=order).first()
