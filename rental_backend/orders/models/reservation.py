# orders/models/reservation.py

import uuid

from django.db import models

from .order import Order


class Reservation(models.Model):
    """
    Stock held for an order. is_valid flips to False when the hold is
    released (stock goes back to the product).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="reservations",
    )

    quantity = models.PositiveIntegerField(default=1)
    is_valid = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    released_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["product", "is_valid"], name="orders_resv_product_idx"),
        ]

    def __str__(self):
        state = "valid" if self.is_valid else "released"
        return f"Reservation {self.product} x {self.quantity} ({state})"
