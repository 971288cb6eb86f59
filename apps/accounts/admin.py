# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for buyer accounts.

    Provides:
    - User listing with staff and influencer status
    - Filtering by influencer programme flags
    - Bulk actions to grant or revoke influencer MOQ relaxation
    """

    list_display = [
        'email',
        'display_name',
        'is_staff_badge',
        'influencer_badge',
        'influencer_moq',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_influencer',
        'influencer_moq_enabled',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Influencer Programme', {
            'fields': ('is_influencer', 'influencer_moq_enabled', 'influencer_moq'),
            'description': 'Relaxed MOQ applies only while both flags are set.',
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def is_staff_badge(self, obj):
        """Display staff status as colored badge."""
        if obj.is_staff:
            return format_html(
                '<span style="background: #A47449; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Staff</span>'
            )
        return format_html(
            '<span style="background: #ccc; color: #666; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">User</span>'
        )
    is_staff_badge.short_description = 'Role'
    is_staff_badge.admin_order_field = 'is_staff'

    def influencer_badge(self, obj):
        """Display influencer programme status as colored badge."""
        if not obj.is_influencer:
            return '-'
        if obj.influencer_moq_enabled:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Relaxed MOQ</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Standard MOQ</span>'
        )
    influencer_badge.short_description = 'Influencer'
    influencer_badge.admin_order_field = 'influencer_moq_enabled'

    actions = [
        'enable_influencer_moq',
        'disable_influencer_moq',
    ]

    @admin.action(description='Enable influencer MOQ relaxation')
    def enable_influencer_moq(self, request, queryset):
        """Grant relaxation to selected influencers only."""
        count = queryset.filter(is_influencer=True).update(influencer_moq_enabled=True)
        skipped = queryset.count() - count
        msg = f'Enabled relaxed MOQ for {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} non-influencer(s).'
        self.message_user(request, msg)

    @admin.action(description='Disable influencer MOQ relaxation')
    def disable_influencer_moq(self, request, queryset):
        """Revoke relaxation from selected users."""
        count = queryset.update(influencer_moq_enabled=False)
        self.message_user(request, f'Disabled relaxed MOQ for {count} user(s).')
