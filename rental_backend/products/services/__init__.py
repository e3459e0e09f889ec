from .catalog import (
    ProductNotFoundError,
    RateNotFoundError,
    get_product,
    rate_for_product_and_duration,
    rates_for_product,
)
from .stock import InsufficientStockError, release_stock, reserve_stock

__all__ = [
    "ProductNotFoundError",
    "RateNotFoundError",
    "get_product",
    "rates_for_product",
    "rate_for_product_and_duration",
    "InsufficientStockError",
    "reserve_stock",
    "release_stock",
]
