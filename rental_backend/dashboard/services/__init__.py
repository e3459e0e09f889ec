from .dashboard_service import (
    get_stats,
    rentals_by_status,
    top_categories,
    top_customers,
    top_products,
)

__all__ = [
    "get_stats",
    "rentals_by_status",
    "top_products",
    "top_categories",
    "top_customers",
]
