# products/tests/test_stock.py

from decimal import Decimal

from django.test import TestCase

from products.models import Product
from products.services.stock import InsufficientStockError, release_stock, reserve_stock


class StockServiceTests(TestCase):
    """
    Stock service.

    GUARANTEES:
    - reserve decrements on-hand quantity
    - stock never goes negative
    - release puts units back
    """

    def setUp(self):
        self.product = Product.objects.create(
            name="Wireless Mouse", sku="MOUSE-WL", price=Decimal("50.00"), quantity=10
        )

    def test_reserve_decrements_stock(self):
        product = reserve_stock(product_id=self.product.pk, quantity=4)
        self.assertEqual(product.quantity, 6)

    def test_reserve_more_than_on_hand_fails_without_change(self):
        with self.assertRaises(InsufficientStockError):
            reserve_stock(product_id=self.product.pk, quantity=11)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)

    def test_non_positive_quantity_rejected(self):
        with self.assertRaises(ValueError):
            reserve_stock(product_id=self.product.pk, quantity=0)

    def test_release_restores_stock(self):
        reserve_stock(product_id=self.product.pk, quantity=3)
        product = release_stock(product_id=self.product.pk, quantity=3)
        self.assertEqual(product.quantity, 10)
