# products/views/rate.py

from django.db.models import ProtectedError
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import CAP_CATALOG_EDIT, HasCapabilityOrReadOnly
from products.models import Rate
from products.serializers import RateSerializer


class RateViewSet(viewsets.ModelViewSet):
    """
    Rate API

    Policy:
    - Any authenticated user can READ rates (quotation forms need them)
    - catalog.edit is required to create / update / delete
    - A rate that a quotation was priced from cannot be deleted (409)
    """

    queryset = Rate.objects.select_related("product").all()
    serializer_class = RateSerializer
    permission_classes = [IsAuthenticated, HasCapabilityOrReadOnly]
    required_capability = CAP_CATALOG_EDIT

    filterset_fields = ["product", "duration", "is_extra"]

    def destroy(self, request, *args, **kwargs):
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {"detail": "Rate is used by existing quotations."},
                status=status.HTTP_409_CONFLICT,
            )
