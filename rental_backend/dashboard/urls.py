# dashboard/urls.py

from django.urls import path

from dashboard.views import (
    DashboardStatsView,
    TopCategoriesView,
    TopCustomersView,
    TopProductsView,
)

urlpatterns = [
    path("stats/", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("top-products/", TopProductsView.as_view(), name="dashboard-top-products"),
    path("top-categories/", TopCategoriesView.as_view(), name="dashboard-top-categories"),
    path("top-customers/", TopCustomersView.as_view(), name="dashboard-top-customers"),
]
