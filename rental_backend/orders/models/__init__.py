"""
PATH: orders/models/__init__.py
"""

from .contract import Contract
from .order import Order
from .quotation import Quotation
from .reservation import Reservation

__all__ = [
    "Quotation",
    "Order",
    "Contract",
    "Reservation",
]
