"""
Checkout policy lookups.

``fetch_checkout_policy_row`` is the default ``CHECKOUT_POLICY_LOOKUP``.
It returns one raw row (or None for an unknown user) in the shape the
policy evaluator parses.
"""

from datetime import timedelta

from django.conf import settings
from django.db.models import Count, Q
from django.utils import timezone

from apps.accounts.models import User
from apps.orders.models import Order, PaymentStatus

PAID_ORDERS_WINDOW = timedelta(days=30)


def paid_orders_since(*, user_id, since):
    """Count the user's paid orders settled at or after ``since``."""
    return Order.objects.filter(
        user_id=user_id,
        payment_status=PaymentStatus.PAID,
        paid_at__gte=since,
    ).count()


def fetch_checkout_policy_row(user_id, *, now=None):
    """
    Load the raw checkout policy row for a user in a single query.

    ``influencer_moq_enabled`` is the user's flag ANDed with the global
    ``INFLUENCER_MOQ_ENABLED`` switch. ``required_moq`` is the user's relaxed
    MOQ only while relaxation is active for an influencer.
    """
    now = now or timezone.now()
    since = now - PAID_ORDERS_WINDOW

    row = (
        User.objects
        .filter(id=user_id)
        .annotate(
            paid_orders_last_30d=Count(
                'orders',
                filter=Q(
                    orders__payment_status=PaymentStatus.PAID,
                    orders__paid_at__gte=since,
                ),
            )
        )
        .values('is_influencer', 'influencer_moq_enabled', 'influencer_moq', 'paid_orders_last_30d')
        .first()
    )
    if row is None:
        return None

    enabled = bool(settings.INFLUENCER_MOQ_ENABLED) and row['influencer_moq_enabled']
    relaxed = enabled and row['is_influencer']

    return {
        'required_moq': row['influencer_moq'] if relaxed else settings.MIN_ORDER_UNITS,
        'is_influencer': row['is_influencer'],
        'influencer_moq_enabled': enabled,
        'paid_orders_last_30d': row['paid_orders_last_30d'],
    }
