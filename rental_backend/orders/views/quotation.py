# orders/views/quotation.py

from django.db.models import ProtectedError
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.models import Quotation
from orders.serializers import QuotationSerializer
from orders.services import InvalidQuotationError, create_quotation
from permissions.roles import CAP_ORDERS_MANAGE, HasCapability


class QuotationViewSet(viewsets.ModelViewSet):
    serializer_class = QuotationSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ORDERS_MANAGE

    filterset_fields = ["product", "rate", "rental"]

    def get_queryset(self):
        return Quotation.objects.select_related("product", "rate", "rental").order_by("-created_at")

    @extend_schema(request=QuotationSerializer, responses={201: QuotationSerializer})
    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            quotation = create_quotation(**ser.validated_data)
        except InvalidQuotationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(quotation).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {"detail": "Quotation has orders; delete those first."},
                status=status.HTTP_409_CONFLICT,
            )
