from django.contrib import admin
from django.utils import timezone

from apps.groupbuy.models import Campaign, Commitment
from apps.groupbuy.services import expire_commitment


class CommitmentInline(admin.TabularInline):
    """Inline admin for campaign commitments."""
    model = Commitment
    extra = 0
    fields = ['user', 'quantity', 'committed_price', 'status', 'payment_deadline']
    readonly_fields = ['status']
    raw_id_fields = ['user']


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
    """Admin interface for group-buy campaigns."""

    list_display = [
        'title',
        'status',
        'progress',
        'discount_price',
        'payment_window_hours',
        'expiry_at',
    ]
    list_filter = ['status', 'expiry_at']
    search_fields = ['title']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [CommitmentInline]
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Campaign', {
            'fields': ('title', 'status', 'expiry_at')
        }),
        ('Quantities & Pricing', {
            'fields': ('goal_quantity', 'current_quantity', 'discount_price', 'payment_window_hours')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def progress(self, obj):
        return f"{obj.current_quantity}/{obj.goal_quantity}"
    progress.short_description = 'Progress'


@admin.register(Commitment)
class CommitmentAdmin(admin.ModelAdmin):
    """Admin interface for commitments."""

    list_display = [
        'id',
        'campaign',
        'user',
        'quantity',
        'committed_price',
        'status',
        'payment_deadline',
    ]
    list_filter = ['status', 'payment_deadline']
    search_fields = ['user__email', 'campaign__title', 'payment_ref']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'campaign']
    date_hierarchy = 'created_at'

    actions = ['expire_overdue']

    def expire_overdue(self, request, queryset):
        """Expire selected commitments whose payment deadline has passed."""
        now = timezone.now()
        expired = 0
        for commitment_id in queryset.values_list('id', flat=True):
            if expire_commitment(commitment_id=commitment_id, cutoff=now):
                expired += 1
        self.message_user(request, f"Expired {expired} of {queryset.count()} commitments")
    expire_overdue.short_description = "Expire overdue commitments"
