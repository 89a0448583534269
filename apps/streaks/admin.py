from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html
from .models import StreakRecord, Voucher


class VoucherInline(admin.TabularInline):
    """Read-only reward ledger within a streak record."""
    model = Voucher
    extra = 0
    fields = [
        'sequence',
        'kind',
        'earned_at',
        'expires_at',
        'state_badge',
        'used_at',
    ]
    readonly_fields = fields
    ordering = ['sequence']

    def state_badge(self, obj):
        """Display voucher state as colored badge."""
        if obj.used:
            bg, fg, label = '#A47449', 'white', 'Used'
        elif obj.is_active(timezone.now()):
            bg, fg, label = '#6B8E5E', 'white', 'Active'
        else:
            bg, fg, label = '#B85C5C', 'white', 'Expired'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, label
        )
    state_badge.short_description = 'State'

    def has_add_permission(self, request, obj=None):
        """Vouchers are only minted by the streak engine."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(StreakRecord)
class StreakRecordAdmin(admin.ModelAdmin):
    """
    Admin interface for streak records.

    Counters are read-only: they only move through purchase transitions,
    and editing them here would bypass the version stamp.
    """

    list_display = [
        'user',
        'current_streak',
        'longest_streak',
        'completed_streaks',
        'free_credits',
        'last_qualifying_date',
        'updated_at',
    ]

    list_filter = [
        'last_reset_date',
        'updated_at',
    ]

    search_fields = [
        'user__email',
        'user__display_name',
    ]

    readonly_fields = [
        'user',
        'current_streak',
        'longest_streak',
        'completed_streaks',
        'free_credits',
        'last_qualifying_date',
        'last_reset_date',
        'version',
        'created_at',
        'updated_at',
    ]

    inlines = [VoucherInline]

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user')
