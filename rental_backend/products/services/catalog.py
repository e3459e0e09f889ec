# products/services/catalog.py

"""
CATALOG LOOKUPS

Repository-style read functions for Product and Rate.
Other apps (rentals, orders) resolve catalog references through here
instead of walking reverse relations.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError

from products.models import Product, Rate


class ProductNotFoundError(Exception):
    pass


class RateNotFoundError(Exception):
    pass


def get_product(product_id, *, active_only: bool = False) -> Product:
    qs = Product.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)

    try:
        return qs.get(pk=product_id)
    except (Product.DoesNotExist, DjangoValidationError, ValueError) as exc:
        raise ProductNotFoundError(f"Product {product_id} not found") from exc


def rates_for_product(product) -> list[Rate]:
    return list(Rate.objects.filter(product=product).order_by("duration", "is_extra"))


def rate_for_product_and_duration(product, duration: str, *, is_extra: bool = False) -> Rate:
    rate = Rate.objects.filter(
        product=product,
        duration=(duration or "").strip().upper(),
        is_extra=is_extra,
    ).first()

    if rate is None:
        raise RateNotFoundError(
            f"No {'extra ' if is_extra else ''}{duration} rate for product {product.pk}"
        )
    return rate
