# orders/views/contract.py

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from orders.models import Contract
from orders.serializers import ContractSerializer
from permissions.roles import CAP_ORDERS_MANAGE, HasCapability


class ContractViewSet(viewsets.ModelViewSet):
    queryset = Contract.objects.select_related("order").all()
    serializer_class = ContractSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ORDERS_MANAGE

    filterset_fields = ["order"]
