"""
Expenses services - Business logic layer.

- Expense creation (with one streak transition per new expense)
- Streak sync with retry on version conflicts
- Spending statistics
"""

from .expense_management import create_expense
from .streak_sync import StreakUpdate, sync_streak_for_expense
from .statistics import get_expense_summary

from .exceptions import (
    ExpensesServiceError,
    InvalidExpenseError,
    StreakSyncError,
)

__all__ = [
    'create_expense',
    'StreakUpdate',
    'sync_streak_for_expense',
    'get_expense_summary',
    'ExpensesServiceError',
    'InvalidExpenseError',
    'StreakSyncError',
]
