"""
Domain exceptions for orders app.

Exception Hierarchy:
    OrdersServiceError (base)
    ├── InvalidVatInputError
    └── InvalidReportPeriodError
"""


class OrdersServiceError(Exception):
    """Base exception for orders service errors."""
    pass


class InvalidVatInputError(OrdersServiceError, ValueError):
    """
    Raised when a VAT calculation receives a negative or non-numeric input.

    Example:
        raise InvalidVatInputError("rate must not be negative, got -1")
    """
    pass


class InvalidReportPeriodError(OrdersServiceError):
    """
    Raised when an unknown report grouping period is requested.

    Valid periods are: daily, weekly, monthly, yearly.
    """
    pass
