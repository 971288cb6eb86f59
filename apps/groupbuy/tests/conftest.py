import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.groupbuy.models import Campaign, CampaignStatus, Commitment, CommitmentStatus


CRON_SECRET = 'test-cron-secret'


@pytest.fixture
def api_client():
    """Return an API client without credentials."""
    return APIClient()


@pytest.fixture
def cron_secret(settings):
    """Configure the scheduler secret and return it."""
    settings.CRON_SECRET = CRON_SECRET
    return CRON_SECRET


@pytest.fixture
def cron_client(cron_secret):
    """Return an API client sending a valid X-Cron-Secret header."""
    client = APIClient()
    client.credentials(HTTP_X_CRON_SECRET=cron_secret)
    return client


@pytest.fixture
def buyer(db):
    """Create and return a buyer."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        display_name='Buyer',
    )


@pytest.fixture
def other_buyer(db):
    """Create and return a second buyer."""
    return User.objects.create_user(
        email='buyer2@example.com',
        password='TestPass123!',
        display_name='Second Buyer',
    )


@pytest.fixture
def campaign(db):
    """Create and return an active campaign."""
    return Campaign.objects.create(
        title='Rice 50kg bag',
        status=CampaignStatus.GOAL_MET_PENDING_PAYMENT,
        goal_quantity=10,
        current_quantity=10,
        discount_price=Decimal('45000.00'),
        payment_window_hours=24,
        expiry_at=timezone.now() + timedelta(days=7),
    )


@pytest.fixture
def make_commitment(campaign, buyer):
    """Factory creating commitments with a deadline relative to now."""
    def _make(deadline_offset=timedelta(hours=-1), status=CommitmentStatus.COMMITTED_UNPAID,
              user=None, quantity=1, no_deadline=False, deadline=None):
        if deadline is None and not no_deadline:
            deadline = timezone.now() + deadline_offset
        return Commitment.objects.create(
            campaign=campaign,
            user=user or buyer,
            status=status,
            quantity=quantity,
            committed_price=campaign.discount_price,
            payment_deadline=deadline,
        )
    return _make


@pytest.fixture
def overdue_commitment(make_commitment):
    """Unpaid commitment whose deadline passed an hour ago."""
    return make_commitment(deadline_offset=timedelta(hours=-1))


@pytest.fixture
def current_commitment(make_commitment):
    """Unpaid commitment still inside its payment window."""
    return make_commitment(deadline_offset=timedelta(hours=5))


@pytest.fixture
def paid_commitment(make_commitment):
    """Paid commitment whose deadline has passed."""
    return make_commitment(deadline_offset=timedelta(hours=-3), status=CommitmentStatus.PAID)
