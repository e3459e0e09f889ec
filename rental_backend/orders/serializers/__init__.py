# orders/serializers/__init__.py

from .contract import ContractSerializer
from .order import OrderSerializer, ReservationSerializer
from .quotation import QuotationSerializer

__all__ = [
    "QuotationSerializer",
    "OrderSerializer",
    "ContractSerializer",
    "ReservationSerializer",
]
