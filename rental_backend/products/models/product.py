# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Represents a rentable catalog item.

    STOCK MODEL:
    - quantity is the number of units on hand (not reserved by an order)
    - stock is mutated ONLY via products.services.stock (row-locked)

    PRICING:
    - price is the default unit price used when a rental line is added
      without an explicit unit_price
    - duration-specific prices live in Rate
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sku = models.CharField(max_length=128, unique=True, db_index=True)
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")

    category = models.CharField(max_length=100, blank=True, default="", db_index=True)

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    quantity = models.PositiveIntegerField(
        default=0,
        help_text="Units on hand (available to rent).",
    )

    terms_and_conditions = models.TextField(blank=True, default="")
    image_url = models.URLField(max_length=500, blank=True, default="")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["sku"], name="products_pr_sku_ca0cdc_idx"),
            models.Index(fields=["name"], name="products_pr_name_9ff0a3_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError("Price must be non-negative")
