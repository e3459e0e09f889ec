class OrderError(Exception):
    pass


class QuotationNotFoundError(OrderError):
    pass


class InvalidQuotationError(OrderError):
    pass


class InsufficientStockError(OrderError):
    pass
