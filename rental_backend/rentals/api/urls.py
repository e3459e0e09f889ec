# rentals/api/urls.py

"""
RENTALS API URLS

Provides:
    /api/rentals/rentals/                                   list / create
    /api/rentals/rentals/<reference>/                       detail / edit / delete
    /api/rentals/rentals/<reference>/actions/               send / confirm / cancel / print
    /api/rentals/rentals/<reference>/recompute/             recompute totals
    /api/rentals/rentals/<reference>/order-lines/           list / add line
    /api/rentals/rentals/<reference>/order-lines/<line_id>/ line detail / edit / remove
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from rentals.api.viewsets.rental import RentalViewSet

router = DefaultRouter()
router.register(r"rentals", RentalViewSet, basename="rentals")

urlpatterns = [
    path("", include(router.urls)),
]
