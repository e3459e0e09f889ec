# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Catalog management endpoints (CRUD)
- Read access for any authenticated user (rental forms need the list)
- Writes require catalog.edit
"""

from django.db.models import ProtectedError, Q
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import CAP_CATALOG_EDIT, HasCapabilityOrReadOnly
from products.models import Product
from products.serializers import ProductSerializer, RateSerializer
from products.services.catalog import (
    RateNotFoundError,
    rate_for_product_and_duration,
    rates_for_product,
)


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    - CRUD
    - GET /products/products/{id}/rates/
    - GET /products/products/{id}/rates/{duration}/
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, HasCapabilityOrReadOnly]
    required_capability = CAP_CATALOG_EDIT

    filterset_fields = ["category", "is_active"]

    def get_queryset(self):
        qs = Product.objects.all().order_by("-created_at")

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(sku__icontains=q))

        return qs

    @extend_schema(
        responses={
            204: None,
            409: OpenApiResponse(description="Product is still quoted, ordered or reserved"),
        },
    )
    def destroy(self, request, *args, **kwargs):
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {
                    "detail": "Product is referenced by quotations, orders or reservations; "
                    "deactivate it instead."
                },
                status=status.HTTP_409_CONFLICT,
            )

    @extend_schema(
        responses={200: RateSerializer(many=True)},
        description="All rates configured for this product.",
    )
    @action(detail=True, methods=["get"], url_path="rates")
    def rates(self, request, pk=None):
        product = self.get_object()
        data = RateSerializer(rates_for_product(product), many=True).data
        return Response({"count": len(data), "results": data})

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="is_extra",
                type=bool,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Return the surcharge rate instead of the base rate.",
            ),
        ],
        responses={
            200: RateSerializer,
            404: OpenApiResponse(description="No rate for this duration"),
        },
    )
    @action(detail=True, methods=["get"], url_path=r"rates/(?P<duration>[A-Za-z]+)")
    def rate_for_duration(self, request, pk=None, duration=None):
        product = self.get_object()
        is_extra = (request.query_params.get("is_extra") or "").strip().lower() in (
            "1",
            "true",
            "yes",
        )

        try:
            rate = rate_for_product_and_duration(product, duration, is_extra=is_extra)
        except RateNotFoundError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        return Response(RateSerializer(rate).data)
