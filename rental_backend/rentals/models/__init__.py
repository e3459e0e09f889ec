"""
PATH: rentals/models/__init__.py

Rental models export surface.
"""

from .order_line import OrderLine
from .rental_order import RentalOrder, RentalStatus

__all__ = [
    "RentalOrder",
    "RentalStatus",
    "OrderLine",
]
