import pytest
from apps.accounts.models import User


@pytest.fixture
def user(db):
    """Create and return a regular buyer."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def influencer(db):
    """Create and return an influencer with relaxation enabled."""
    return User.objects.create_user(
        email='influencer@example.com',
        password='TestPass123!',
        is_influencer=True,
        influencer_moq_enabled=True,
        influencer_moq=2,
    )


@pytest.fixture
def admin_user(db):
    """Create and return a superuser."""
    return User.objects.create_superuser(
        email='admin@example.com',
        password='TestPass123!',
    )
