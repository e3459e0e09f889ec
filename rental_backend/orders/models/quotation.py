# orders/models/quotation.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Quotation(models.Model):
    """
    A priced offer for renting `quantity` units of a product at a given rate.

    amount = rate.price * quantity (not stored).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="quotations",
    )
    rate = models.ForeignKey(
        "products.Rate",
        on_delete=models.PROTECT,
        related_name="quotations",
    )
    rental = models.ForeignKey(
        "rentals.RentalOrder",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="quotations",
    )

    quantity = models.PositiveIntegerField(default=1)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    @property
    def amount(self) -> Decimal:
        return Decimal(self.rate.price) * Decimal(int(self.quantity or 0))

    def clean(self):
        if self.quantity is None or int(self.quantity) < 1:
            raise ValidationError("quantity must be >= 1")
        if self.rate_id and self.product_id and self.rate.product_id != self.product_id:
            raise ValidationError("Rate does not belong to the selected product")

    def __str__(self):
        return f"Quotation {self.product} x {self.quantity}"
