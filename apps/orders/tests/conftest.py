import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.orders.models import Order


def authenticate(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def customer(db):
    return User.objects.create_user(
        email='customer@example.com',
        password='TestPass123!',
        display_name='Customer',
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def staff_client(staff_user):
    return authenticate(staff_user)


@pytest.fixture
def customer_client(customer):
    return authenticate(customer)


@pytest.fixture
def make_order(customer):
    """Factory creating an order stamped at ``created`` (UTC)."""
    def _make(created, tax='75.00', subtotal='1000.00'):
        order = Order.objects.create(
            user=customer,
            customer_email=customer.email,
            subtotal=Decimal(subtotal),
            tax=None if tax is None else Decimal(tax),
            total_amount=Decimal(subtotal) + Decimal(tax or '0'),
        )
        # created_at is auto_now_add; backdate through the queryset
        Order.objects.filter(id=order.id).update(created_at=created)
        order.refresh_from_db()
        return order
    return _make


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


@pytest.fixture
def report_orders(make_order):
    """Orders spread over two months of 2025, plus untaxed and out-of-range ones."""
    return [
        make_order(utc(2025, 1, 6, 10), tax='75.00'),
        make_order(utc(2025, 1, 6, 15), tax='25.00'),
        make_order(utc(2025, 1, 20, 9), tax='50.00'),
        make_order(utc(2025, 2, 3, 12), tax='150.00'),
        make_order(utc(2025, 2, 4, 12), tax=None),
        make_order(utc(2024, 12, 31, 12), tax='999.00'),
    ]
