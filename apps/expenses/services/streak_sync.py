"""
Streak sync - feeds newly created expenses into the streak engine.

This is the engine's caller. The engine reports version conflicts and never
retries, so the retry loop lives here: on a conflict the whole transition is
re-run from a fresh load, up to ``STREAK_MAX_RETRIES`` attempts, then
``StreakSyncError`` is raised.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from apps.expenses.models import Expense
from apps.streaks.services import (
    NO_REWARD,
    ConcurrentModificationError,
    project_stats,
    record_impulse_purchase,
    record_non_impulse_purchase,
)
from apps.streaks.services.results import RewardResult
from .exceptions import StreakSyncError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakUpdate:
    reward: RewardResult
    credit_spent: bool
    stats: dict

    def as_dict(self) -> dict:
        return {
            'reward': self.reward.kind,
            'credit_spent': self.credit_spent,
            'voucher': getattr(self.reward, 'voucher', None),
            'stats': self.stats,
        }


def _apply(expense: Expense, use_free_credit: bool):
    if expense.is_impulse:
        outcome = record_impulse_purchase(
            user_id=expense.user_id,
            purchase_date=expense.date,
            spend_credit=use_free_credit,
        )
        return NO_REWARD, outcome.credit_spent

    outcome = record_non_impulse_purchase(
        user_id=expense.user_id,
        purchase_date=expense.date,
    )
    return outcome.reward, False


def sync_streak_for_expense(
    *,
    expense: Expense,
    use_free_credit: bool = False,
    max_attempts: Optional[int] = None
) -> StreakUpdate:
    """
    Run the streak transition for a newly created expense.

    Args:
        expense: Saved expense; its user, date and impulse flag drive the transition
        use_free_credit: Spend a free credit instead of breaking the streak
            (impulse expenses only)
        max_attempts: Override for ``settings.STREAK_MAX_RETRIES``

    Returns:
        StreakUpdate with the reward, whether a credit was spent and fresh stats

    Raises:
        StreakSyncError: Still conflicting after the last attempt
        StreaksServiceError: Any other engine failure, propagated unchanged
    """
    attempts = max(1, max_attempts or getattr(settings, 'STREAK_MAX_RETRIES', 3))

    for attempt in range(1, attempts + 1):
        try:
            reward, credit_spent = _apply(expense, use_free_credit)
            break
        except ConcurrentModificationError as e:
            if attempt == attempts:
                logger.error(
                    "Giving up streak sync for expense %s after %d conflicting attempts",
                    expense.id, attempts
                )
                raise StreakSyncError(
                    "Streak was modified concurrently, please retry"
                ) from e
            logger.warning(
                "Streak conflict for expense %s (attempt %d/%d), retrying",
                expense.id, attempt, attempts
            )

    stats = project_stats(user_id=expense.user_id)
    return StreakUpdate(reward=reward, credit_spent=credit_spent, stats=stats)
