# products/services/stock.py

"""
PRODUCT STOCK SERVICE

Rules:
- Product.quantity is mutated ONLY here
- Every mutation locks the product row (select_for_update)
- Stock can never go below zero
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F

from products.models import Product

logger = logging.getLogger(__name__)


class InsufficientStockError(Exception):
    pass


def _to_positive_qty(value) -> int:
    if isinstance(value, bool):
        raise ValueError("quantity must be an integer")

    qty = int(value)
    if qty <= 0:
        raise ValueError("quantity must be >= 1")
    return qty


@transaction.atomic
def reserve_stock(*, product_id, quantity) -> Product:
    """
    Take `quantity` units out of stock. Raises InsufficientStockError
    when fewer units are on hand.
    """
    qty = _to_positive_qty(quantity)

    product = Product.objects.select_for_update().get(pk=product_id)

    if product.quantity < qty:
        logger.warning(
            "Insufficient stock",
            extra={"product_id": str(product.pk), "on_hand": product.quantity, "requested": qty},
        )
        raise InsufficientStockError(
            f"Insufficient stock for {product.name}: {product.quantity} on hand, {qty} requested"
        )

    Product.objects.filter(pk=product.pk).update(quantity=F("quantity") - qty)
    product.refresh_from_db(fields=["quantity"])

    logger.info(
        "Stock reserved",
        extra={"product_id": str(product.pk), "quantity": qty, "on_hand": product.quantity},
    )
    return product


@transaction.atomic
def release_stock(*, product_id, quantity) -> Product:
    qty = _to_positive_qty(quantity)

    product = Product.objects.select_for_update().get(pk=product_id)
    Product.objects.filter(pk=product.pk).update(quantity=F("quantity") + qty)
    product.refresh_from_db(fields=["quantity"])

    logger.info(
        "Stock released",
        extra={"product_id": str(product.pk), "quantity": qty, "on_hand": product.quantity},
    )
    return product
