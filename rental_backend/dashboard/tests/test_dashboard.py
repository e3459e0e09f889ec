from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from dashboard.services import (
    get_stats,
    rentals_by_status,
    top_categories,
    top_customers,
    top_products,
)
from orders.services import create_order_from_quotation, create_quotation
from products.models import Product, Rate
from rentals.services import rental_service

User = get_user_model()


class DashboardServiceTests(TestCase):
    """
    GUARANTEES:
    - revenue = confirmed rental totals + order quotation amounts
    - every status appears in rentals_by_status
    - cancelled rentals are ignored by the top lists
    """

    def setUp(self):
        confirmed = rental_service.create_rental(
            customer="Tech Solutions Ltd",
            lines=[
                {"product_name": "Laptop Pro", "quantity": 10, "unit_price": "800.00", "tax": "240.00"},
                {"product_name": "Wireless Mouse", "quantity": 10, "unit_price": "50.00", "tax": "15.00"},
            ],
        )
        rental_service.perform_action(reference=confirmed.reference, action="confirm")

        rental_service.create_rental(
            customer="StartUp Ventures",
            lines=[{"product_name": "Projector 4K", "quantity": 2, "unit_price": "200.00", "tax": "40.00"}],
        )

        cancelled = rental_service.create_rental(
            customer="Small Business Co",
            lines=[{"product_name": "Event Chair", "quantity": 500, "unit_price": "15.00", "tax": "0"}],
        )
        rental_service.perform_action(reference=cancelled.reference, action="cancel")

        product = Product.objects.create(sku="TENT-L", name="Large Tent", price=Decimal("495.00"), quantity=5)
        rate = Rate.objects.create(product=product, duration=Rate.Duration.DAILY, price=Decimal("100.00"))
        quotation = create_quotation(product=product, rate=rate, quantity=2)
        create_order_from_quotation(quotation=quotation)

    def test_stats(self):
        stats = get_stats()

        self.assertEqual(stats["quotations"], 1)
        self.assertEqual(stats["rentals"], 3)
        # 8500 + 255 (confirmed rental) + 200 (order)
        self.assertEqual(stats["revenue"], Decimal("8955.00"))

    def test_rentals_by_status(self):
        self.assertEqual(
            rentals_by_status(),
            {"draft": 1, "quotation_sent": 0, "confirmed": 1, "cancelled": 1},
        )

    def test_top_products_skip_cancelled(self):
        rows = top_products(limit=5)

        self.assertEqual([r["product_name"] for r in rows], ["Laptop Pro", "Wireless Mouse", "Projector 4K"])
        self.assertEqual(rows[0]["quantity"], 10)
        self.assertEqual(rows[0]["revenue"], Decimal("8000.00"))

    def test_top_customers(self):
        rows = top_customers(limit=1)

        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["customer"], "Tech Solutions Ltd")
        self.assertEqual(rows[0]["rentals"], 1)


class TopCategoriesTests(TestCase):
    """
    GUARANTEES:
    - line quantity and revenue are grouped by the linked product's category
    - cancelled rentals and free-text lines are left out
    - blank categories are reported as "Uncategorized"
    """

    def setUp(self):
        laptop = Product.objects.create(
            sku="LAP-PRO", name="Laptop Pro", category="Electronics", price=Decimal("800.00"), quantity=5
        )
        chair = Product.objects.create(
            sku="CHAIR-EV", name="Event Chair", category="Furniture", price=Decimal("15.00"), quantity=500
        )
        tent = Product.objects.create(sku="TENT-L", name="Large Tent", price=Decimal("495.00"), quantity=2)

        rental_service.create_rental(
            customer="Tech Solutions Ltd",
            lines=[
                {"product": laptop.pk, "quantity": 2},
                {"product": chair.pk, "quantity": 10},
                {"product": tent.pk, "quantity": 1},
                {"product_name": "Delivery", "quantity": 1, "unit_price": "9999.00"},
            ],
        )

        cancelled = rental_service.create_rental(
            customer="Small Business Co",
            lines=[{"product": chair.pk, "quantity": 1000}],
        )
        rental_service.perform_action(reference=cancelled.reference, action="cancel")

    def test_grouped_by_category(self):
        rows = top_categories(limit=5)

        self.assertEqual(
            [(r["category"], r["quantity"], r["revenue"]) for r in rows],
            [
                ("Electronics", 2, Decimal("1600.00")),
                ("Uncategorized", 1, Decimal("495.00")),
                ("Furniture", 10, Decimal("150.00")),
            ],
        )

    def test_limit(self):
        self.assertEqual([r["category"] for r in top_categories(limit=1)], ["Electronics"])

    def test_endpoint(self):
        manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")
        self.client = APIClient()
        self.client.force_authenticate(manager)

        res = self.client.get("/api/dashboard/top-categories/", {"limit": 2})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual(res.data["results"][0], {"category": "Electronics", "quantity": 2, "revenue": "1600.00"})


class DashboardApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_manager_can_view_stats(self):
        manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")
        self.client.force_authenticate(manager)

        res = self.client.get("/api/dashboard/stats/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["revenue"], "0.00")
        self.assertEqual(res.data["rentals_by_status"]["draft"], 0)

    def test_agent_cannot_view_reports(self):
        agent = User.objects.create_user(email="a@example.com", password="pass", role="rental_agent")
        self.client.force_authenticate(agent)

        res = self.client.get("/api/dashboard/top-products/")
        self.assertEqual(res.status_code, 403)

    def test_bad_limit(self):
        manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")
        self.client.force_authenticate(manager)

        res = self.client.get("/api/dashboard/top-customers/", {"limit": "abc"})
        self.assertEqual(res.status_code, 400)
