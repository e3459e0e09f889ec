from .exceptions import (
    InsufficientStockError,
    InvalidQuotationError,
    OrderError,
    QuotationNotFoundError,
)
from .lookups import (
    contract_for_order,
    orders_for_quotation,
    quotations_for_product,
    reservations_for_order,
)
from .order_service import (
    create_order_from_quotation,
    create_quotation,
    delete_order,
    release_reservations,
)

__all__ = [
    "OrderError",
    "QuotationNotFoundError",
    "InvalidQuotationError",
    "InsufficientStockError",
    "create_quotation",
    "create_order_from_quotation",
    "release_reservations",
    "delete_order",
    "quotations_for_product",
    "orders_for_quotation",
    "reservations_for_order",
    "contract_for_order",
]
