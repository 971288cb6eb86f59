from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from datetime import timedelta
from decimal import Decimal
import uuid


class CampaignStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACTIVE = 'active', 'Active'
    GOAL_MET_PENDING_PAYMENT = 'goal_met_pending_payment', 'Goal met, awaiting payment'
    GOAL_MET_FINALIZED = 'goal_met_finalized', 'Goal met, finalized'
    FAILED_EXPIRED = 'failed_expired', 'Failed (expired)'
    FAILED_CANCELLED = 'failed_cancelled', 'Failed (cancelled)'


class CommitmentStatus(models.TextChoices):
    COMMITTED_UNPAID = 'committed_unpaid', 'Committed, unpaid'
    PAID = 'paid', 'Paid'
    PAYMENT_WINDOW_EXPIRED = 'payment_window_expired', 'Payment window expired'
    REFUNDED = 'refunded', 'Refunded'


# No transition out of these is performed here
TERMINAL_COMMITMENT_STATUSES = frozenset({
    CommitmentStatus.PAID,
    CommitmentStatus.PAYMENT_WINDOW_EXPIRED,
    CommitmentStatus.REFUNDED,
})


class Campaign(models.Model):
    """Group-buy campaign buyers commit to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)

    status = models.CharField(
        max_length=30,
        choices=CampaignStatus.choices,
        default=CampaignStatus.PENDING
    )

    goal_quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    current_quantity = models.PositiveIntegerField(default=0)
    discount_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    # Hours a committed buyer has to pay once payment is requested
    payment_window_hours = models.PositiveIntegerField(default=24)
    expiry_at = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groupbuy_campaigns'
        indexes = [
            models.Index(fields=['status', 'expiry_at'], name='groupbuy_ca_status_2d0c7b_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.current_quantity}/{self.goal_quantity})"

    def payment_deadline_from(self, moment=None):
        """Return the payment deadline for a window opening at ``moment``."""
        moment = moment or timezone.now()
        return moment + timedelta(hours=self.payment_window_hours)


class Commitment(models.Model):
    """
    A buyer's commitment to a campaign.

    Status moves forward only. The deadline sweeper is the sole writer of
    ``payment_window_expired`` and only ever from ``committed_unpaid``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    campaign = models.ForeignKey(
        Campaign,
        on_delete=models.CASCADE,
        related_name='commitments'
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='commitments'
    )

    status = models.CharField(
        max_length=30,
        choices=CommitmentStatus.choices,
        default=CommitmentStatus.COMMITTED_UNPAID
    )

    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    committed_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    # Null means no enforceable deadline; such rows are never swept
    payment_deadline = models.DateTimeField(null=True, blank=True)
    payment_ref = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groupbuy_commitments'
        indexes = [
            models.Index(fields=['status', 'payment_deadline'], name='groupbuy_co_status_9b41e3_idx'),
            models.Index(fields=['campaign', 'status'], name='groupbuy_co_campaig_6f2a8d_idx'),
            models.Index(fields=['user', 'status'], name='groupbuy_co_user_id_1c5e47_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user} -> {self.campaign.title} x{self.quantity} ({self.status})"

    @property
    def total_price(self):
        return self.committed_price * self.quantity

    @property
    def is_terminal(self):
        return self.status in TERMINAL_COMMITMENT_STATUSES

    def can_expire(self, now=None):
        """Whether the deadline sweeper would act on this commitment."""
        now = now or timezone.now()
        return (
            self.status == CommitmentStatus.COMMITTED_UNPAID
            and self.payment_deadline is not None
            and self.payment_deadline < now
        )
