from django.conf import settings
from django.contrib import admin

from apps.orders.models import Order, PaymentStatus


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for orders."""

    list_display = [
        'id',
        'customer_email',
        'status',
        'payment_status',
        'subtotal',
        'tax',
        'total_amount',
        'paid_at',
        'created_at',
    ]
    list_filter = ['status', 'payment_status', 'created_at']
    search_fields = ['customer_email', 'payment_reference', 'user__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'commitment']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Customer', {
            'fields': ('id', 'user', 'customer_email', 'commitment')
        }),
        ('Status', {
            'fields': ('status', 'payment_status', 'payment_reference', 'paid_at')
        }),
        ('Amounts', {
            'fields': ('subtotal', 'vat_rate', 'tax', 'shipping_cost', 'total_amount', 'currency')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_as_paid', 'recalculate_vat']

    def mark_as_paid(self, request, queryset):
        """Mark selected unpaid orders as paid."""
        updated = 0
        for order in queryset.exclude(payment_status=PaymentStatus.PAID):
            order.mark_paid()
            updated += 1
        self.message_user(request, f"Marked {updated} orders as paid")
    mark_as_paid.short_description = "Mark as paid"

    def recalculate_vat(self, request, queryset):
        """Recompute tax and total at the current VAT rate."""
        for order in queryset:
            order.apply_vat(settings.VAT_RATE_PERCENT)
            order.save(update_fields=['vat_rate', 'tax', 'total_amount', 'updated_at'])
        self.message_user(request, f"Recalculated VAT for {queryset.count()} orders")
    recalculate_vat.short_description = "Recalculate VAT at current rate"
