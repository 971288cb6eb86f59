import pytest
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.orders.models import Order, PaymentStatus


CRON_SECRET = 'test-cron-secret'


def authenticate(user):
    """Return an API client carrying a bearer token for ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def cron_secret(settings):
    settings.CRON_SECRET = CRON_SECRET
    return CRON_SECRET


@pytest.fixture
def cron_client(cron_secret):
    client = APIClient()
    client.credentials(HTTP_X_CRON_SECRET=cron_secret)
    return client


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def buyer(db):
    """Create a regular buyer."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        display_name='Buyer',
    )


@pytest.fixture
def influencer(db):
    """Create an influencer with a relaxed MOQ of 2."""
    return User.objects.create_user(
        email='influencer@example.com',
        password='TestPass123!',
        display_name='Influencer',
        is_influencer=True,
        influencer_moq_enabled=True,
        influencer_moq=2,
    )


@pytest.fixture
def second_influencer(db):
    """Create another influencer with relaxation enabled."""
    return User.objects.create_user(
        email='influencer2@example.com',
        password='TestPass123!',
        is_influencer=True,
        influencer_moq_enabled=True,
        influencer_moq=1,
    )


@pytest.fixture
def dormant_influencer(db):
    """Influencer whose relaxation is already switched off."""
    return User.objects.create_user(
        email='dormant@example.com',
        password='TestPass123!',
        is_influencer=True,
        influencer_moq_enabled=False,
        influencer_moq=2,
    )


@pytest.fixture
def buyer_client(buyer):
    return authenticate(buyer)


@pytest.fixture
def influencer_client(influencer):
    return authenticate(influencer)


# =============================================================================
# Orders
# =============================================================================

@pytest.fixture
def make_order(db):
    """Factory creating orders; paid orders settle at ``paid_at`` (default now)."""
    def _make(user, *, paid=True, paid_at=None, subtotal=Decimal('1000.00')):
        return Order.objects.create(
            user=user,
            customer_email=user.email,
            subtotal=subtotal,
            total_amount=subtotal,
            payment_status=PaymentStatus.PAID if paid else PaymentStatus.UNPAID,
            paid_at=(paid_at or timezone.now()) if paid else None,
        )
    return _make
