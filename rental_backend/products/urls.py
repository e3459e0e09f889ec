# products/urls.py

"""
PRODUCTS URLS

Purpose:
- Register catalog routes under /api/products/
    /products/products/
    /products/products/{id}/rates/
    /products/rates/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import ProductViewSet, RateViewSet

router = DefaultRouter()

router.register(r"products", ProductViewSet, basename="products")
router.register(r"rates", RateViewSet, basename="rates")

urlpatterns = [
    path("", include(router.urls)),
]
