"""
Checkout admission policy.

Derives the minimum order quantity a buyer must reach at checkout. Every
failure path degrades to the default policy, which is never more lenient
than the platform minimum.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass

from django.conf import settings
from django.utils.module_loading import import_string

from apps.checkout.exceptions import PolicyLookupError

logger = logging.getLogger(__name__)

DEFAULT_MIN_ORDER_UNITS = 4


def _coerce_int(value, default, *, minimum):
    """Parse a numeric field; anything unusable falls back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number) or number < minimum:
        return default
    return int(number)


def standard_moq() -> int:
    """Platform-wide minimum order units."""
    return _coerce_int(
        getattr(settings, 'MIN_ORDER_UNITS', DEFAULT_MIN_ORDER_UNITS),
        DEFAULT_MIN_ORDER_UNITS,
        minimum=1,
    )


@dataclass(frozen=True)
class CheckoutPolicy:
    """Per-user checkout requirement. Computed per request, never stored."""

    required_moq: int
    is_influencer: bool = False
    influencer_moq_enabled: bool = False
    paid_orders_last_30d: int = 0

    @classmethod
    def default(cls) -> 'CheckoutPolicy':
        return cls(required_moq=standard_moq())

    @classmethod
    def from_row(cls, row) -> 'CheckoutPolicy':
        """
        Parse a raw lookup row.

        Accepts a mapping or a one-element list of mappings. Missing,
        non-numeric, non-finite or out-of-range numbers take their default.
        The relaxed MOQ applies only to influencers with relaxation enabled.
        """
        if isinstance(row, (list, tuple)):
            row = row[0] if row else None
        if not isinstance(row, Mapping):
            return cls.default()

        standard = standard_moq()
        is_influencer = bool(row.get('is_influencer'))
        influencer_moq_enabled = bool(row.get('influencer_moq_enabled'))

        required_moq = standard
        if is_influencer and influencer_moq_enabled:
            required_moq = _coerce_int(row.get('required_moq'), standard, minimum=1)

        return cls(
            required_moq=required_moq,
            is_influencer=is_influencer,
            influencer_moq_enabled=influencer_moq_enabled,
            paid_orders_last_30d=_coerce_int(row.get('paid_orders_last_30d'), 0, minimum=0),
        )

    def as_dict(self) -> dict:
        return asdict(self)


def default_policy() -> CheckoutPolicy:
    return CheckoutPolicy.default()


def get_policy_lookup():
    """Resolve ``settings.CHECKOUT_POLICY_LOOKUP`` to a callable."""
    path = getattr(settings, 'CHECKOUT_POLICY_LOOKUP', '')
    if not path:
        raise PolicyLookupError("CHECKOUT_POLICY_LOOKUP is not configured")
    try:
        return import_string(path)
    except ImportError as e:
        raise PolicyLookupError(f"Cannot load policy lookup {path!r}: {e}") from e


def evaluate_checkout_policy(user_id=None) -> CheckoutPolicy:
    """
    Return the checkout policy for ``user_id``.

    Never raises. Anonymous buyers, unknown users and lookup failures all
    get the default policy.
    """
    if user_id is None:
        return default_policy()

    try:
        lookup = get_policy_lookup()
        row = lookup(user_id)
        if row is None:
            logger.debug("No checkout policy row for user %s", user_id)
        return CheckoutPolicy.from_row(row)
    except Exception:
        logger.exception("Failed to fetch checkout policy for user %s", user_id)
        return default_policy()
