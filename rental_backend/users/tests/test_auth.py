from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

User = get_user_model()


class AuthFlowTests(TestCase):
    """
    GUARANTEES:
    - self-registration always creates a customer
    - JWT is obtained with email + password
    - /me exposes role capabilities
    """

    def setUp(self):
        self.client = APIClient()

    def test_register_creates_customer(self):
        res = self.client.post(
            "/api/auth/register/",
            {"email": "new@example.com", "password": "S3cure-pass-123", "role": "admin"},
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["role"], "customer")
        self.assertFalse(res.data["is_rental_staff"])

    def test_jwt_and_me(self):
        User.objects.create_user(email="agent@example.com", password="S3cure-pass-123", role="rental_agent")

        res = self.client.post(
            "/api/auth/jwt/create/",
            {"email": "agent@example.com", "password": "S3cure-pass-123"},
            format="json",
        )
        self.assertEqual(res.status_code, 200, res.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
        res = self.client.get("/api/auth/me/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["email"], "agent@example.com")
        self.assertIn("rentals.transition", res.data["capabilities"])
        self.assertNotIn("rentals.delete", res.data["capabilities"])

    def test_health_is_public(self):
        res = self.client.get("/api/health/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "ok")
