"""
Influencer compliance sweep.

Influencers keep their relaxed MOQ only while they settle enough paid
orders in the trailing 30 days. This job revokes relaxation from those
below ``settings.INFLUENCER_MIN_PAID_ORDERS_30D``. Revocation is a
conditional UPDATE guarded by ``influencer_moq_enabled = True``, so an
admin re-enabling or a concurrent run never gets overwritten.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from django.conf import settings
from django.utils import timezone

from apps.accounts.models import User
from apps.checkout.exceptions import ComplianceEvaluationError
from apps.checkout.signals import influencer_moq_revoked
from .lookups import PAID_ORDERS_WINDOW, paid_orders_since

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComplianceDecision:
    user_id: object
    paid_orders_last_30d: int
    required_paid_orders: int
    revoked: bool


@dataclass
class ComplianceResult:
    """Outcome of one compliance sweep."""

    targeted: int = 0
    processed: int = 0
    revoked: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def success(self) -> bool:
        return not self.failures

    def as_dict(self) -> dict:
        return {
            'success': self.success,
            'targeted': self.targeted,
            'processed': self.processed,
            'revoked': self.revoked,
            'failed': self.failed,
            'failures': list(self.failures),
        }


def active_influencers():
    """Influencers currently benefiting from MOQ relaxation."""
    return User.objects.filter(is_influencer=True, influencer_moq_enabled=True)


def evaluate_influencer_compliance(*, user_id, now=None, required_paid_orders=None) -> ComplianceDecision:
    """
    Check one influencer and revoke relaxation if they fall short.

    Raises:
        ComplianceEvaluationError: If the user does not exist.
    """
    now = now or timezone.now()
    if required_paid_orders is None:
        required_paid_orders = settings.INFLUENCER_MIN_PAID_ORDERS_30D

    if not User.objects.filter(id=user_id).exists():
        raise ComplianceEvaluationError(f"User {user_id} not found")

    paid = paid_orders_since(user_id=user_id, since=now - PAID_ORDERS_WINDOW)
    revoked = False

    if paid < required_paid_orders:
        updated = (
            User.objects
            .filter(id=user_id, is_influencer=True, influencer_moq_enabled=True)
            .update(influencer_moq_enabled=False)
        )
        revoked = updated == 1

    return ComplianceDecision(
        user_id=user_id,
        paid_orders_last_30d=paid,
        required_paid_orders=required_paid_orders,
        revoked=revoked,
    )


def process_influencer_compliance(*, now: Optional[datetime] = None) -> ComplianceResult:
    """
    Evaluate every active influencer once.

    A failure on one influencer is logged and recorded in ``failures``; the
    sweep carries on with the rest.
    """
    now = now or timezone.now()
    required_paid_orders = settings.INFLUENCER_MIN_PAID_ORDERS_30D

    influencers = list(active_influencers().values_list('id', 'email'))
    result = ComplianceResult(targeted=len(influencers))
    logger.info(
        "Evaluating %d influencers (threshold %d paid orders in 30 days)",
        result.targeted, required_paid_orders,
    )

    for user_id, email in influencers:
        try:
            decision = evaluate_influencer_compliance(
                user_id=user_id,
                now=now,
                required_paid_orders=required_paid_orders,
            )
        except Exception as e:
            logger.exception("Error evaluating influencer %s", user_id)
            result.failures.append(f"{user_id}: {e}")
            continue

        result.processed += 1
        if not decision.revoked:
            continue

        result.revoked += 1
        logger.info(
            "Revoked MOQ relaxation for %s (%d paid orders)",
            user_id, decision.paid_orders_last_30d,
        )
        responses = influencer_moq_revoked.send_robust(
            sender=User,
            user_id=user_id,
            email=email,
            paid_orders_last_30d=decision.paid_orders_last_30d,
            required_paid_orders=required_paid_orders,
        )
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error("influencer_moq_revoked receiver %r failed for %s: %s", receiver, user_id, response)
                result.failures.append(f"{user_id}: notify_failed:{response}")

    logger.info(
        "Influencer compliance processed: targeted=%d processed=%d revoked=%d failed=%d",
        result.targeted, result.processed, result.revoked, result.failed,
    )
    return result
