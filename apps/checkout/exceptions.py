"""
Domain exceptions for checkout app.

Exception Hierarchy:
    CheckoutServiceError (base)
    ├── PolicyLookupError
    └── ComplianceEvaluationError

The policy evaluator never lets these escape; they are logged and turned
into the default policy.
"""


class CheckoutServiceError(Exception):
    """Base exception for checkout service errors."""
    pass


class PolicyLookupError(CheckoutServiceError):
    """
    Raised when the configured policy lookup cannot be loaded or called.

    Example:
        raise PolicyLookupError("CHECKOUT_POLICY_LOOKUP is not configured")
    """
    pass


class ComplianceEvaluationError(CheckoutServiceError):
    """Raised when an influencer cannot be evaluated for MOQ compliance."""
    pass
