# orders/views/order.py

"""
ORDER VIEWSETS

- POST /orders/orders/ {quotation, delivery_address} reserves stock (409 when short)
- DELETE /orders/orders/{id}/ releases reservations before deleting
- POST /orders/orders/{id}/release/ releases reservations, keeps the order
- Reservations are read-only
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.models import Order, Reservation
from orders.serializers import OrderSerializer, ReservationSerializer
from orders.services import (
    InsufficientStockError,
    OrderError,
    create_order_from_quotation,
    delete_order,
    release_reservations,
)
from permissions.roles import CAP_ORDERS_MANAGE, HasCapability


class OrderViewSet(viewsets.ModelViewSet):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ORDERS_MANAGE

    filterset_fields = ["quotation", "product", "end_user_confirmation", "customer_confirmation"]

    def get_queryset(self):
        return (
            Order.objects.select_related("product", "quotation")
            .prefetch_related("reservations__product")
            .order_by("-created_at")
        )

    @extend_schema(
        request=OrderSerializer,
        responses={
            201: OrderSerializer,
            409: OpenApiResponse(description="Insufficient stock"),
        },
    )
    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            order = create_order_from_quotation(
                quotation=ser.validated_data["quotation"],
                delivery_address=ser.validated_data.get("delivery_address", ""),
            )
        except InsufficientStockError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        except OrderError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        order = self.get_queryset().get(pk=order.pk)
        return Response(self.get_serializer(order).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        delete_order(order=self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: serializers.DictField()})
    @action(detail=True, methods=["post"], url_path="release")
    def release(self, request, pk=None):
        released = release_reservations(order=self.get_object())
        return Response({"released": released}, status=status.HTTP_200_OK)


class ReservationViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ReservationSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ORDERS_MANAGE

    filterset_fields = ["order", "product", "is_valid"]

    def get_queryset(self):
        return Reservation.objects.select_related("product").order_by("-created_at")
