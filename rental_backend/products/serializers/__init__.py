# products/serializers/__init__.py

from .product import ProductSerializer
from .rate import RateSerializer

__all__ = [
    "ProductSerializer",
    "RateSerializer",
]
