"""Expense management service - creating expenses and triggering streaks."""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.accounts.models import User
from apps.accounts.validators import normalize_currency
from apps.expenses.models import Expense
from .exceptions import InvalidExpenseError
from .streak_sync import StreakUpdate, sync_streak_for_expense

logger = logging.getLogger(__name__)


@transaction.atomic
def create_expense(
    *,
    user: User,
    use_free_credit: bool = False,
    **fields
) -> tuple[Expense, StreakUpdate]:
    """
    Create an expense and apply it to the user's streak.

    This operation:
    1. Fills the currency from the user's default when omitted and
       upper-cases it
    2. Saves the expense
    3. Runs exactly one streak transition for it
    4. Commits both together; a streak failure rolls the expense back

    Edits and deletions of expenses never touch the streak.

    Args:
        user: Owner of the expense
        use_free_credit: Spend a free credit if the expense is an impulse purchase
        **fields: Expense model fields (date, description, amount, category,
            need_or_want, time_of_day, payment_mode, is_impulse, ...)

    Returns:
        (expense, streak_update)

    Raises:
        InvalidExpenseError: Missing user or date, or a bad currency code
        StreakSyncError: Streak kept conflicting (expense not saved)
        StreaksServiceError: Streak transition failed (expense not saved)
    """
    if user is None:
        raise InvalidExpenseError("Expense must belong to a user")
    if fields.get('date') is None:
        raise InvalidExpenseError("Expense date is required")

    currency = fields.get('currency') or user.default_currency
    try:
        fields['currency'] = normalize_currency(currency)
    except ValidationError as e:
        raise InvalidExpenseError(f"Invalid currency: {currency!r}") from e

    expense = Expense.objects.create(user=user, **fields)
    update = sync_streak_for_expense(expense=expense, use_free_credit=use_free_credit)

    logger.debug(
        "Created expense %s (impulse=%s) for user %s, reward=%s",
        expense.id, expense.is_impulse, user.id, update.reward.kind.value
    )
    return expense, update
