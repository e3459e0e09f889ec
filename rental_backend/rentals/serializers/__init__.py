# rentals/serializers/__init__.py

from .order_line import OrderLineInputSerializer, OrderLineSerializer
from .rental import (
    RentalActionInputSerializer,
    RentalDetailSerializer,
    RentalOrderSerializer,
    RentalWriteSerializer,
    totals_payload,
)

__all__ = [
    "OrderLineSerializer",
    "OrderLineInputSerializer",
    "RentalOrderSerializer",
    "RentalDetailSerializer",
    "RentalWriteSerializer",
    "RentalActionInputSerializer",
    "totals_payload",
]
