# products/tests/test_products.py

from decimal import Decimal

from django.db import IntegrityError
from django.test import TestCase

from products.models import Product, Rate
from products.services.catalog import (
    ProductNotFoundError,
    RateNotFoundError,
    get_product,
    rate_for_product_and_duration,
    rates_for_product,
)


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - Products can be created safely
    - SKU uniqueness is enforced
    - Pricing is sane
    """

    def test_product_creation(self):
        """A valid product should be created successfully."""
        product = Product.objects.create(
            name="Laptop Pro",
            sku="LAP-PRO",
            price=Decimal("800.00"),
            quantity=5,
        )

        self.assertEqual(product.name, "Laptop Pro")
        self.assertEqual(product.sku, "LAP-PRO")
        self.assertTrue(product.is_active)

    def test_sku_must_be_unique(self):
        """SKU duplication must be rejected."""
        Product.objects.create(name="Projector", sku="PROJ-1", price=Decimal("200.00"))

        with self.assertRaises(IntegrityError):
            Product.objects.create(
                name="Projector Duplicate",
                sku="PROJ-1",
                price=Decimal("220.00"),
            )

    def test_product_string_representation(self):
        """__str__ should be human readable."""
        product = Product.objects.create(name="Event Chair", sku="CHAIR-1")

        self.assertIn("Event Chair", str(product))


class RateLookupTests(TestCase):
    """
    Catalog lookups.

    GUARANTEES:
    - rates_for_product returns only that product's rates
    - duration lookup is case-insensitive and honours is_extra
    - one rate per (product, duration, is_extra)
    """

    def setUp(self):
        self.product = Product.objects.create(name="Large Tent", sku="TENT-L", price=Decimal("495.00"))
        self.other = Product.objects.create(name="Projector", sku="PROJ-4K", price=Decimal("200.00"))

        self.daily = Rate.objects.create(
            product=self.product, duration=Rate.Duration.DAILY, price=Decimal("495.00")
        )
        self.daily_extra = Rate.objects.create(
            product=self.product,
            duration=Rate.Duration.DAILY,
            price=Decimal("50.00"),
            is_extra=True,
        )
        Rate.objects.create(product=self.other, duration=Rate.Duration.DAILY, price=Decimal("200.00"))

    def test_rates_for_product_scoped_to_product(self):
        rates = rates_for_product(self.product)

        self.assertEqual({r.pk for r in rates}, {self.daily.pk, self.daily_extra.pk})

    def test_rate_for_duration_is_case_insensitive(self):
        rate = rate_for_product_and_duration(self.product, "daily")
        self.assertEqual(rate.pk, self.daily.pk)

        extra = rate_for_product_and_duration(self.product, "DAILY", is_extra=True)
        self.assertEqual(extra.pk, self.daily_extra.pk)

    def test_missing_rate_raises(self):
        with self.assertRaises(RateNotFoundError):
            rate_for_product_and_duration(self.product, Rate.Duration.MONTHLY)

    def test_duplicate_rate_rejected(self):
        with self.assertRaises(IntegrityError):
            Rate.objects.create(
                product=self.product, duration=Rate.Duration.DAILY, price=Decimal("1.00")
            )

    def test_get_product_rejects_unknown_or_malformed_ids(self):
        self.assertEqual(get_product(self.product.pk), self.product)

        self.product.is_active = False
        self.product.save(update_fields=["is_active"])
        with self.assertRaises(ProductNotFoundError):
            get_product(self.product.pk, active_only=True)

        with self.assertRaises(ProductNotFoundError):
            get_product("not-a-uuid")
