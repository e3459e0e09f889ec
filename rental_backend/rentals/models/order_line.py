# rentals/models/order_line.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .rental_order import RentalOrder


class OrderLine(models.Model):
    """
    One product / quantity / price entry of a RentalOrder.

    sub_total is always quantity * unit_price (re-derived on save).
    tax is an absolute amount for the whole line.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    rental = models.ForeignKey(
        RentalOrder,
        on_delete=models.CASCADE,
        related_name="order_lines",
    )

    position = models.PositiveIntegerField(default=0)

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rental_lines",
    )
    product_name = models.CharField(max_length=255)

    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    tax = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    sub_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"), editable=False
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["position", "created_at"]

    def clean(self):
        if not (self.product_name or "").strip():
            raise ValidationError("product_name is required")
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError("quantity must be >= 1")
        if self.unit_price is None or Decimal(self.unit_price) < 0:
            raise ValidationError("unit_price must be non-negative")
        if self.tax is None or Decimal(self.tax) < 0:
            raise ValidationError("tax must be non-negative")

    def save(self, *args, **kwargs):
        # Always keep sub_total consistent
        self.sub_total = Decimal(self.unit_price) * Decimal(int(self.quantity or 0))

        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "sub_total" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "sub_total"]

        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product_name} x {self.quantity}"
