# orders/models/contract.py

import uuid

from django.db import models

from .order import Order


class Contract(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.OneToOneField(
        Order,
        on_delete=models.CASCADE,
        related_name="contract",
    )

    rental_period = models.CharField(max_length=100)
    start_date = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-start_date"]

    def __str__(self):
        return f"Contract {self.order_id} from {self.start_date}"
