from django.contrib import admin
from django.utils.html import format_html
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """
    Admin interface for expenses.

    Editing an expense here does not touch the owner's streak.
    """

    list_display = [
        'date',
        'user',
        'description',
        'category',
        'amount',
        'currency',
        'impulse_badge',
        'created_at',
    ]

    list_filter = [
        'is_impulse',
        'need_or_want',
        'time_of_day',
        'category',
        'date',
    ]

    search_fields = [
        'description',
        'category',
        'user__email',
        'user__display_name',
    ]

    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'date'
    ordering = ['-date', '-created_at']
    raw_id_fields = ['user']

    fieldsets = (
        ('Expense', {
            'fields': (
                'user',
                'date',
                'description',
                'category',
                'time_of_day',
            )
        }),
        ('Money', {
            'fields': (
                'amount',
                'currency',
                'payment_mode',
            )
        }),
        ('Classification', {
            'fields': (
                'need_or_want',
                'is_impulse',
                'source_app',
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def impulse_badge(self, obj):
        if not obj.is_impulse:
            return '-'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            '#B85C5C', 'white', 'Impulse'
        )
    impulse_badge.short_description = 'Impulse'
    impulse_badge.admin_order_field = 'is_impulse'
