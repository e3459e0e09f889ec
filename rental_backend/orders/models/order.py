# orders/models/order.py

import uuid

from django.db import models

from .quotation import Quotation


class Order(models.Model):
    """
    An accepted quotation. Created ONLY via orders.services.order_service
    (stock is reserved in the same transaction).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    quotation = models.ForeignKey(
        Quotation,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="orders",
    )

    delivery_address = models.CharField(max_length=500, blank=True, default="")

    end_user_confirmation = models.BooleanField(default=False)
    customer_confirmation = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    @property
    def is_fully_confirmed(self) -> bool:
        return self.end_user_confirmation and self.customer_confirmation

    def __str__(self):
        return f"Order {self.pk} | {self.product}"
