"""
======================================================
PATH: orders/services/order_service.py
======================================================
ORDER SERVICE

Quotation -> Order -> Reservation flow.

Rules:
- A quotation's rate must belong to its product.
- Creating an order reserves stock: the product row is locked, stock is
  checked and decremented, and a valid Reservation is written, all in ONE
  transaction.
- Releasing an order's reservations puts the stock back exactly once.
======================================================
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from orders.models import Order, Quotation, Reservation
from orders.services.exceptions import (
    InsufficientStockError,
    InvalidQuotationError,
    QuotationNotFoundError,
)
from products.services import stock as stock_service

logger = logging.getLogger(__name__)


def _resolve_quotation(quotation) -> Quotation:
    if isinstance(quotation, Quotation):
        return quotation
    try:
        return Quotation.objects.select_related("product", "rate").get(pk=quotation)
    except (Quotation.DoesNotExist, DjangoValidationError, ValueError) as exc:
        raise QuotationNotFoundError(f"Quotation {quotation} not found") from exc


@transaction.atomic
def create_quotation(*, product, rate, quantity: int = 1, rental=None) -> Quotation:
    if rate.product_id != product.pk:
        raise InvalidQuotationError("Rate does not belong to the selected product")
    if int(quantity) < 1:
        raise InvalidQuotationError("quantity must be >= 1")

    quotation = Quotation.objects.create(
        product=product,
        rate=rate,
        quantity=int(quantity),
        rental=rental,
    )

    logger.info(
        "Quotation created",
        extra={
            "quotation_id": str(quotation.pk),
            "product_id": str(product.pk),
            "quantity": quotation.quantity,
        },
    )
    return quotation


@transaction.atomic
def create_order_from_quotation(*, quotation, delivery_address: str = "") -> Order:
    """
    Turn a quotation into an order and hold the stock for it.

    Raises InsufficientStockError (nothing written) when the product
    has fewer units on hand than the quotation asks for.
    """
    quotation = _resolve_quotation(quotation)

    try:
        stock_service.reserve_stock(
            product_id=quotation.product_id,
            quantity=quotation.quantity,
        )
    except stock_service.InsufficientStockError as exc:
        raise InsufficientStockError(str(exc)) from exc

    order = Order.objects.create(
        quotation=quotation,
        product_id=quotation.product_id,
        delivery_address=(delivery_address or "").strip(),
    )

    Reservation.objects.create(
        order=order,
        product_id=quotation.product_id,
        quantity=quotation.quantity,
        is_valid=True,
    )

    logger.info(
        "Order created from quotation",
        extra={
            "order_id": str(order.pk),
            "quotation_id": str(quotation.pk),
            "quantity": quotation.quantity,
        },
    )
    return order


@transaction.atomic
def release_reservations(*, order: Order) -> int:
    """
    Invalidate every valid reservation of `order` and restore its stock.
    Returns how many reservations were released.
    """
    reservations = list(
        Reservation.objects.select_for_update().filter(order=order, is_valid=True)
    )

    now = timezone.now()
    for reservation in reservations:
        stock_service.release_stock(
            product_id=reservation.product_id,
            quantity=reservation.quantity,
        )
        reservation.is_valid = False
        reservation.released_at = now
        reservation.save(update_fields=["is_valid", "released_at"])

    if reservations:
        logger.info(
            "Reservations released",
            extra={"order_id": str(order.pk), "count": len(reservations)},
        )
    return len(reservations)


@transaction.atomic
def delete_order(*, order: Order) -> None:
    release_reservations(order=order)
    order_id = str(order.pk)
    order.delete()

    logger.info("Order deleted", extra={"order_id": order_id})
