from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from .vat import calculate_vat, quantize_money


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PROCESSING = 'processing', 'Processing'
    SHIPPED = 'shipped', 'Shipped'
    DELIVERED = 'delivered', 'Delivered'
    CANCELLED = 'cancelled', 'Cancelled'


class PaymentStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PAID = 'paid', 'Paid'
    FAILED = 'failed', 'Failed'
    REFUNDED = 'refunded', 'Refunded'


class Order(models.Model):
    """Storefront or group-buy order with its VAT breakdown."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Buyer (nullable for guest checkout)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )
    customer_email = models.EmailField(max_length=255)

    # Set when the order settles a group-buy commitment
    commitment = models.ForeignKey(
        'groupbuy.Commitment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID
    )

    # Financial details
    subtotal = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    vat_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00')
    )
    # Null for orders placed before VAT was collected
    tax = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    shipping_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='NGN')

    payment_reference = models.CharField(max_length=100, blank=True, db_index=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['user', 'payment_status', 'paid_at'], name='orders_user_id_3f1b9e_idx'),
            models.Index(fields=['created_at'], name='orders_created_8a2c4d_idx'),
            models.Index(fields=['status'], name='orders_status_5e7f10_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {str(self.id)[:8]} - {self.total_amount} {self.currency} ({self.payment_status})"

    def apply_vat(self, rate):
        """Fill tax and total from subtotal, rate and shipping."""
        self.vat_rate = quantize_money(rate)
        self.tax = quantize_money(calculate_vat(self.subtotal, rate))
        self.total_amount = self.subtotal + self.tax + self.shipping_cost

    def mark_paid(self, reference=''):
        """Mark order as paid."""
        self.payment_status = PaymentStatus.PAID
        self.paid_at = timezone.now()
        if reference:
            self.payment_reference = reference
        self.save(update_fields=['payment_status', 'paid_at', 'payment_reference', 'updated_at'])
