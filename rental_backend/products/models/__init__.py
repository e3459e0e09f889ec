"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .product import Product
from .rate import Rate

__all__ = [
    "Product",
    "Rate",
]
