# orders/urls.py

"""
ORDERS URLS

    /api/orders/quotations/
    /api/orders/orders/
    /api/orders/orders/{id}/release/
    /api/orders/contracts/
    /api/orders/reservations/   (read-only)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from orders.views import ContractViewSet, OrderViewSet, QuotationViewSet, ReservationViewSet

router = DefaultRouter()

router.register(r"quotations", QuotationViewSet, basename="quotations")
router.register(r"orders", OrderViewSet, basename="orders")
router.register(r"contracts", ContractViewSet, basename="contracts")
router.register(r"reservations", ReservationViewSet, basename="reservations")

urlpatterns = [
    path("", include(router.urls)),
]
