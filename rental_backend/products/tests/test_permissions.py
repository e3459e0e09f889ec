from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from django.test import TestCase

from orders.models import Quotation
from products.models import Product, Rate


User = get_user_model()


class ProductPermissionTests(TestCase):
    """
    Permission & access tests.

    GUARANTEES:
    - Anonymous users have no access
    - Authenticated users can read products
    - Only catalog.edit holders can write
    - Quoted products and rates are protected from deletion
    """

    def setUp(self):
        self.client = APIClient()

        self.agent = User.objects.create_user(
            email="agent@example.com", password="password123", role="rental_agent"
        )
        self.manager = User.objects.create_user(
            email="manager@example.com", password="password123", role="manager"
        )

        self.product = Product.objects.create(
            name="Projector 4K", sku="PROJ-4K", price=Decimal("200.00"), quantity=3
        )

    def test_anonymous_user_cannot_list_products(self):
        res = self.client.get("/api/products/products/")
        self.assertEqual(res.status_code, 401)

    def test_agent_can_read_but_not_write(self):
        self.client.force_authenticate(self.agent)

        res = self.client.get("/api/products/products/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

        res = self.client.post(
            "/api/products/products/",
            {"sku": "new-1", "name": "New", "price": "10.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_manager_can_create_product(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/products/products/",
            {"sku": "chair-ev", "name": "Event Chair", "price": "15.00", "quantity": 40},
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["sku"], "CHAIR-EV")

    def test_rates_endpoint_lists_product_rates(self):
        self.product.rates.create(duration="DAILY", price=Decimal("200.00"))
        self.client.force_authenticate(self.agent)

        res = self.client.get(f"/api/products/products/{self.product.pk}/rates/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

        res = self.client.get(f"/api/products/products/{self.product.pk}/rates/weekly/")
        self.assertEqual(res.status_code, 404)

    def test_deleting_quoted_product_or_rate_is_409(self):
        rate = self.product.rates.create(duration="DAILY", price=Decimal("200.00"))
        Quotation.objects.create(product=self.product, rate=rate, quantity=1)
        self.client.force_authenticate(self.manager)

        res = self.client.delete(f"/api/products/products/{self.product.pk}/")
        self.assertEqual(res.status_code, 409)
        self.assertIn("detail", res.data)

        res = self.client.delete(f"/api/products/rates/{rate.pk}/")
        self.assertEqual(res.status_code, 409)

        self.assertTrue(Product.objects.filter(pk=self.product.pk).exists())
        self.assertTrue(Rate.objects.filter(pk=rate.pk).exists())

    def test_unreferenced_product_can_be_deleted(self):
        self.client.force_authenticate(self.manager)

        res = self.client.delete(f"/api/products/products/{self.product.pk}/")

        self.assertEqual(res.status_code, 204)
        self.assertFalse(Product.objects.exists())
