# products/models/rate.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .product import Product


class Rate(models.Model):
    """
    Duration-based rental price for a product (hourly / daily / weekly / monthly).

    is_extra marks surcharge rates (e.g. extra hour) that are quoted on top of
    the base rate for the same duration.
    """

    class Duration(models.TextChoices):
        HOURLY = "HOURLY", "Hourly"
        DAILY = "DAILY", "Daily"
        WEEKLY = "WEEKLY", "Weekly"
        MONTHLY = "MONTHLY", "Monthly"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="rates",
    )

    duration = models.CharField(max_length=16, choices=Duration.choices)

    price = models.DecimalField(max_digits=12, decimal_places=2)

    is_extra = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["product__name", "duration", "is_extra"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "duration", "is_extra"],
                name="uniq_rate_per_product_duration",
            ),
        ]

    def __str__(self):
        extra = " (extra)" if self.is_extra else ""
        return f"{self.product.name} {self.duration}{extra}: {self.price}"

    def clean(self):
        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError("Rate price must be non-negative")
