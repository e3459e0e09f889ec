# rentals/models/rental_order.py

import uuid
from decimal import Decimal

from django.db import models


class RentalStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    QUOTATION_SENT = "quotation_sent", "Quotation Sent"
    CONFIRMED = "confirmed", "Confirmed"
    CANCELLED = "cancelled", "Cancelled"


class RentalOrder(models.Model):
    """
    One customer rental transaction (aggregate root).

    GUARANTEES:
    - status only changes through rentals.services.rental_service.perform_action
    - untaxed_total / tax_total / total are derived from order lines and
      persisted by recompute_totals; they are never written from the API
    - version increments on every service write (optimistic concurrency)
    """

    # Free-text header fields the API may edit
    EDITABLE_FIELDS = (
        "customer",
        "invoice_address",
        "delivery_address",
        "schedule_date",
        "responsible",
        "rental_template",
        "price_list",
        "rental_period",
        "rental_duration",
        "expiration",
        "rental_order_date",
        "terms_and_conditions",
    )

    DERIVED_FIELDS = ("untaxed_total", "tax_total", "total")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    reference = models.CharField(
        max_length=32,
        unique=True,
        editable=False,
        help_text="Public rental reference (R0001, R0002, ...)",
    )

    status = models.CharField(
        max_length=32,
        choices=RentalStatus.choices,
        default=RentalStatus.DRAFT,
        db_index=True,
    )

    customer = models.CharField(max_length=255, blank=True, default="")
    invoice_address = models.CharField(max_length=500, blank=True, default="")
    delivery_address = models.CharField(max_length=500, blank=True, default="")
    schedule_date = models.CharField(max_length=100, blank=True, default="")
    responsible = models.CharField(max_length=255, blank=True, default="")

    rental_template = models.CharField(max_length=255, blank=True, default="")
    price_list = models.CharField(max_length=255, blank=True, default="")
    rental_period = models.CharField(max_length=255, blank=True, default="")
    rental_duration = models.CharField(max_length=100, blank=True, default="")
    expiration = models.CharField(max_length=100, blank=True, default="")
    rental_order_date = models.CharField(max_length=100, blank=True, default="")
    terms_and_conditions = models.TextField(blank=True, default="")

    untaxed_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    tax_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    version = models.PositiveIntegerField(default=1)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["reference"], name="rentals_ref_idx"),
            models.Index(fields=["customer"], name="rentals_customer_idx"),
        ]

    @property
    def lines_editable(self) -> bool:
        return self.status in (RentalStatus.DRAFT, RentalStatus.QUOTATION_SENT)

    def __str__(self):
        return f"{self.reference} | {self.customer or '-'} | {self.status}"
