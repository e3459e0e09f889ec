# dashboard/views.py

"""
PATH: dashboard/views.py

DASHBOARD REPORTS

    GET /api/dashboard/stats/
    GET /api/dashboard/top-products/?limit=5
    GET /api/dashboard/top-categories/?limit=5
    GET /api/dashboard/top-customers/?limit=5

Requires reports.view.
"""

from __future__ import annotations

from decimal import Decimal

from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from dashboard.services import (
    get_stats,
    rentals_by_status,
    top_categories,
    top_customers,
    top_products,
)
from permissions.roles import CAP_REPORTS_VIEW, HasCapability

LIMIT_PARAM = OpenApiParameter(
    name="limit",
    type=OpenApiTypes.INT,
    location=OpenApiParameter.QUERY,
    required=False,
    description="Number of rows (1-50, default 5).",
)


def _money(x) -> str:
    """
    JSON-safe money string.
    """
    if x is None:
        return "0.00"
    if isinstance(x, Decimal):
        return f"{x:.2f}"
    return f"{Decimal(str(x)):.2f}"


def _parse_limit(raw: str | None, default: int = 5) -> int | None:
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return None
    if value < 1 or value > 50:
        return None
    return value


class _ReportView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_REPORTS_VIEW


class DashboardStatsView(_ReportView):
    @extend_schema(tags=["Dashboard"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        stats = get_stats()
        return Response(
            {
                "quotations": stats["quotations"],
                "rentals": stats["rentals"],
                "revenue": _money(stats["revenue"]),
                "rentals_by_status": rentals_by_status(),
            }
        )


class TopProductsView(_ReportView):
    @extend_schema(tags=["Dashboard"], parameters=[LIMIT_PARAM], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        limit = _parse_limit(request.query_params.get("limit"))
        if limit is None:
            return Response({"detail": "limit must be an integer between 1 and 50"}, status=400)

        rows = [{**r, "revenue": _money(r["revenue"])} for r in top_products(limit=limit)]
        return Response({"count": len(rows), "results": rows})


class TopCategoriesView(_ReportView):
    @extend_schema(tags=["Dashboard"], parameters=[LIMIT_PARAM], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        limit = _parse_limit(request.query_params.get("limit"))
        if limit is None:
            return Response({"detail": "limit must be an integer between 1 and 50"}, status=400)

        rows = [{**r, "revenue": _money(r["revenue"])} for r in top_categories(limit=limit)]
        return Response({"count": len(rows), "results": rows})


class TopCustomersView(_ReportView):
    @extend_schema(tags=["Dashboard"], parameters=[LIMIT_PARAM], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        limit = _parse_limit(request.query_params.get("limit"))
        if limit is None:
            return Response({"detail": "limit must be an integer between 1 and 50"}, status=400)

        rows = [{**r, "revenue": _money(r["revenue"])} for r in top_customers(limit=limit)]
        return Response({"count": len(rows), "results": rows})
