"""Domain exceptions for expenses app."""


class ExpensesServiceError(Exception):
    """Base exception for all expense service errors."""
    pass


class InvalidExpenseError(ExpensesServiceError):
    """Expense data is incomplete or inconsistent."""
    pass


class StreakSyncError(ExpensesServiceError):
    """Streak kept conflicting after every retry; the expense was not saved."""
    pass
