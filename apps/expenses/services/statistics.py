"""Statistics service - spending totals for a user."""

from datetime import date
from decimal import Decimal
from typing import Optional

from django.db.models import Count, Q, Sum

from apps.accounts.models import User
from apps.expenses.models import Expense


def get_expense_summary(
    *,
    user: User,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None
) -> dict:
    """
    Summarize a user's spending, optionally within a date range.

    Returns:
        Dictionary with:
        - total_count: int
        - total_amount: Decimal
        - impulse_count: int
        - impulse_amount: Decimal
        - by_category: list of {category, count, amount}, largest amount first
    """
    queryset = Expense.objects.filter(user=user)

    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)

    totals = queryset.aggregate(
        total_count=Count('id'),
        total_amount=Sum('amount'),
        impulse_count=Count('id', filter=Q(is_impulse=True)),
        impulse_amount=Sum('amount', filter=Q(is_impulse=True)),
    )

    by_category = list(
        queryset
        .values('category')
        .annotate(count=Count('id'), amount=Sum('amount'))
        .order_by('-amount', 'category')
    )

    return {
        'total_count': totals['total_count'],
        'total_amount': totals['total_amount'] or Decimal('0.00'),
        'impulse_count': totals['impulse_count'],
        'impulse_amount': totals['impulse_amount'] or Decimal('0.00'),
        'by_category': by_category,
    }
