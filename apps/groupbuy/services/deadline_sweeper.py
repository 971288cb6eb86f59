"""
Commitment deadline sweeper.

Moves commitments whose payment window has lapsed from ``committed_unpaid``
to ``payment_window_expired``. Each invocation is one bounded pass:

    1. Fix the cutoff (``now``) once for the whole invocation.
    2. Select at most ``batch_size`` eligible ids per page, oldest deadline first.
    3. Expire each id with a conditional UPDATE guarded by
       ``status = committed_unpaid``.
    4. Stop after ``max_batches`` pages. Any remaining backlog is drained by
       the scheduler's next tick.

The guarded UPDATE is the only concurrency control. A payment that lands
between selection and write makes the UPDATE match zero rows, which is
counted as ``skipped``. Overlapping invocations therefore expire each
commitment exactly once between them.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from django.conf import settings
from django.utils import timezone

from apps.groupbuy.models import Commitment, CommitmentStatus
from apps.groupbuy.exceptions import InvalidSweepConfigurationError
from apps.groupbuy.signals import commitment_expired

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Outcome of one sweep invocation."""

    cutoff: datetime
    expired: int = 0
    skipped: int = 0
    failed: int = 0
    batches: int = 0
    failed_ids: List[UUID] = field(default_factory=list)


def expirable_commitments(*, cutoff: datetime):
    """Queryset of commitments the sweeper may act on at ``cutoff``."""
    return Commitment.objects.filter(
        status=CommitmentStatus.COMMITTED_UNPAID,
        payment_deadline__isnull=False,
        payment_deadline__lt=cutoff,
    )


def select_expired_commitment_ids(
    *,
    cutoff: datetime,
    limit: int,
    exclude_ids=(),
) -> List[UUID]:
    """Return up to ``limit`` eligible ids, oldest deadline first."""
    queryset = expirable_commitments(cutoff=cutoff)
    if exclude_ids:
        queryset = queryset.exclude(id__in=list(exclude_ids))

    return list(
        queryset
        .order_by('payment_deadline', 'id')
        .values_list('id', flat=True)[:limit]
    )


def expire_commitment(*, commitment_id: UUID, cutoff: datetime) -> bool:
    """
    Conditionally expire a single commitment.

    Returns True if this call won the transition, False if the row had
    already left ``committed_unpaid`` (paid or expired concurrently).
    """
    updated = (
        Commitment.objects
        .filter(
            id=commitment_id,
            status=CommitmentStatus.COMMITTED_UNPAID,
            payment_deadline__lt=cutoff,
        )
        .update(
            status=CommitmentStatus.PAYMENT_WINDOW_EXPIRED,
            updated_at=timezone.now(),
        )
    )
    return updated == 1


def sweep_payment_deadlines(
    *,
    now: Optional[datetime] = None,
    batch_size: Optional[int] = None,
    max_batches: Optional[int] = None,
) -> SweepResult:
    """
    Expire every commitment whose payment deadline is before ``now``.

    Args:
        now: Cutoff for this invocation. Defaults to the current time.
        batch_size: Ids selected per page. Defaults to
            ``settings.GROUPBUY_SWEEP_BATCH_SIZE``.
        max_batches: Pages processed per invocation. Defaults to
            ``settings.GROUPBUY_SWEEP_MAX_BATCHES``.

    Returns:
        SweepResult with expired/skipped/failed counts.

    Raises:
        InvalidSweepConfigurationError: If batch_size or max_batches < 1.
        DatabaseError: If selecting a page fails. Row-level update
            failures are logged and counted instead.
    """
    cutoff = now or timezone.now()
    if batch_size is None:
        batch_size = settings.GROUPBUY_SWEEP_BATCH_SIZE
    if max_batches is None:
        max_batches = settings.GROUPBUY_SWEEP_MAX_BATCHES

    if batch_size < 1 or max_batches < 1:
        raise InvalidSweepConfigurationError(
            f"batch_size and max_batches must be positive "
            f"(got {batch_size}, {max_batches})"
        )

    result = SweepResult(cutoff=cutoff)
    logger.info("Processing payment deadlines before %s", cutoff.isoformat())

    while result.batches < max_batches:
        commitment_ids = select_expired_commitment_ids(
            cutoff=cutoff,
            limit=batch_size,
            exclude_ids=result.failed_ids,
        )
        if not commitment_ids:
            break

        result.batches += 1
        logger.info(
            "Batch %d: found %d expired commitments",
            result.batches, len(commitment_ids),
        )

        for commitment_id in commitment_ids:
            try:
                won = expire_commitment(commitment_id=commitment_id, cutoff=cutoff)
            except Exception:
                logger.exception("Error updating commitment %s", commitment_id)
                result.failed += 1
                result.failed_ids.append(commitment_id)
                continue

            if not won:
                logger.debug("Commitment %s already handled", commitment_id)
                result.skipped += 1
                continue

            result.expired += 1
            logger.info("Expired commitment %s", commitment_id)
            _notify_expired(commitment_id, cutoff)

        if len(commitment_ids) < batch_size:
            break

    logger.info(
        "Payment deadlines processed: expired=%d skipped=%d failed=%d batches=%d",
        result.expired, result.skipped, result.failed, result.batches,
    )
    return result


def _notify_expired(commitment_id, cutoff):
    responses = commitment_expired.send_robust(
        sender=Commitment,
        commitment_id=commitment_id,
        cutoff=cutoff,
    )
    for receiver, response in responses:
        if isinstance(response, Exception):
            logger.error(
                "commitment_expired receiver %r failed for %s: %s",
                receiver, commitment_id, response,
            )
