from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order, Reservation
from orders.services import (
    InsufficientStockError,
    InvalidQuotationError,
    contract_for_order,
    create_order_from_quotation,
    create_quotation,
    delete_order,
    orders_for_quotation,
    quotations_for_product,
    release_reservations,
    reservations_for_order,
)
from orders.models import Contract
from products.models import Product, Rate

User = get_user_model()


class OrderServiceTests(TestCase):
    """
    Quotation -> Order -> Reservation.

    GUARANTEES:
    - rate must belong to the quoted product
    - creating an order decrements stock and writes a valid reservation
    - short stock rejects the order with nothing written
    - releasing restores stock exactly once
    """

    def setUp(self):
        self.product = Product.objects.create(
            sku="LAP-PRO", name="Laptop Pro", price=Decimal("800.00"), quantity=10
        )
        self.rate = Rate.objects.create(
            product=self.product, duration=Rate.Duration.DAILY, price=Decimal("80.00")
        )
        self.other = Product.objects.create(sku="MOUSE-WL", name="Wireless Mouse", quantity=5)
        self.other_rate = Rate.objects.create(
            product=self.other, duration=Rate.Duration.DAILY, price=Decimal("5.00")
        )

    def test_quotation_amount(self):
        quotation = create_quotation(product=self.product, rate=self.rate, quantity=3)
        self.assertEqual(quotation.amount, Decimal("240.00"))
        self.assertEqual(quotations_for_product(self.product), [quotation])

    def test_rate_must_belong_to_product(self):
        with self.assertRaises(InvalidQuotationError):
            create_quotation(product=self.product, rate=self.other_rate, quantity=1)

    def test_order_reserves_stock(self):
        quotation = create_quotation(product=self.product, rate=self.rate, quantity=4)

        order = create_order_from_quotation(quotation=quotation, delivery_address="1 Main St")

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 6)
        reservations = reservations_for_order(order)
        self.assertEqual(len(reservations), 1)
        self.assertTrue(reservations[0].is_valid)
        self.assertEqual(reservations[0].quantity, 4)
        self.assertEqual(orders_for_quotation(quotation), [order])

    def test_insufficient_stock_writes_nothing(self):
        quotation = create_quotation(product=self.product, rate=self.rate, quantity=11)

        with self.assertRaises(InsufficientStockError):
            create_order_from_quotation(quotation=quotation)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)
        self.assertFalse(Order.objects.exists())
        self.assertFalse(Reservation.objects.exists())

    def test_release_restores_stock_once(self):
        quotation = create_quotation(product=self.product, rate=self.rate, quantity=4)
        order = create_order_from_quotation(quotation=quotation)

        self.assertEqual(release_reservations(order=order), 1)
        self.assertEqual(release_reservations(order=order), 0)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)
        self.assertEqual(reservations_for_order(order, valid_only=True), [])

    def test_delete_order_releases_stock(self):
        quotation = create_quotation(product=self.product, rate=self.rate, quantity=2)
        order = create_order_from_quotation(quotation=quotation)

        delete_order(order=order)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)
        self.assertFalse(Order.objects.exists())

    def test_contract_lookup(self):
        quotation = create_quotation(product=self.product, rate=self.rate, quantity=1)
        order = create_order_from_quotation(quotation=quotation)
        self.assertIsNone(contract_for_order(order))

        contract = Contract.objects.create(order=order, rental_period="Monthly", start_date="2025-08-11")
        self.assertEqual(contract_for_order(order), contract)


class OrderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.agent = User.objects.create_user(
            email="agent@example.com", password="pass", role="rental_agent"
        )
        self.client.force_authenticate(self.agent)

        self.product = Product.objects.create(
            sku="PROJ-4K", name="Projector 4K", price=Decimal("200.00"), quantity=2
        )
        self.rate = Rate.objects.create(
            product=self.product, duration=Rate.Duration.WEEKLY, price=Decimal("150.00")
        )

    def _quote(self, quantity):
        res = self.client.post(
            "/api/orders/quotations/",
            {"product": str(self.product.pk), "rate": str(self.rate.pk), "quantity": quantity},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        return res.data

    def test_quote_then_order(self):
        quotation = self._quote(2)
        self.assertEqual(quotation["amount"], "300.00")

        res = self.client.post(
            "/api/orders/orders/",
            {"quotation": quotation["id"], "delivery_address": "Hall B"},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(len(res.data["reservations"]), 1)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 0)

    def test_order_with_short_stock_is_409(self):
        quotation = self._quote(3)

        res = self.client.post("/api/orders/orders/", {"quotation": quotation["id"]}, format="json")

        self.assertEqual(res.status_code, 409)

    def test_customer_role_forbidden(self):
        customer = User.objects.create_user(email="c@example.com", password="pass", role="customer")
        self.client.force_authenticate(customer)

        res = self.client.get("/api/orders/orders/")
        self.assertEqual(res.status_code, 403)

    def test_deleting_ordered_quotation_is_409(self):
        quotation = self._quote(1)
        res = self.client.post("/api/orders/orders/", {"quotation": quotation["id"]}, format="json")
        self.assertEqual(res.status_code, 201, res.data)

        res = self.client.delete(f"/api/orders/quotations/{quotation['id']}/")

        self.assertEqual(res.status_code, 409)
        self.assertIn("detail", res.data)
        self.assertTrue(Order.objects.filter(quotation_id=quotation["id"]).exists())
