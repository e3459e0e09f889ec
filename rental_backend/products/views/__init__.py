# products/views/__init__.py

"""
Products views package exports.

Purpose:
- Central export point for router imports (ProductViewSet, RateViewSet).
"""

from .product import ProductViewSet
from .rate import RateViewSet

__all__ = [
    "ProductViewSet",
    "RateViewSet",
]
