"""
Domain exceptions for groupbuy app.

Service errors are plain exceptions; errors surfaced directly over HTTP
subclass DRF's APIException.
"""
from rest_framework.exceptions import APIException


class GroupBuyServiceError(Exception):
    """Base exception for group-buy service errors."""
    pass


class InvalidSweepConfigurationError(GroupBuyServiceError):
    """Raised when a sweep is asked to run with a non-positive page size or batch limit."""
    pass


class CronSecretInvalid(APIException):
    """Scheduler credential missing, mismatched, or not configured."""
    status_code = 401
    default_detail = 'Unauthorized: Invalid cron secret'
    default_code = 'invalid_cron_secret'
