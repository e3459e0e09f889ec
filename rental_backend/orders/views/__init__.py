# orders/views/__init__.py

from .contract import ContractViewSet
from .order import OrderViewSet, ReservationViewSet
from .quotation import QuotationViewSet

__all__ = [
    "QuotationViewSet",
    "OrderViewSet",
    "ContractViewSet",
    "ReservationViewSet",
]
