"""
Streak engine - purchase-driven streak and reward transitions.

Two layers:

* ``apply_*`` functions are pure: they mutate an in-memory ``StreakRecord``
  and hand back whatever the transition produced. No queries, no clock.
* ``record_*`` functions load the record, run the pure transition and save
  it through the store with the version that was loaded. A version conflict
  surfaces as ``ConcurrentModificationError``; this module never retries,
  callers re-run the whole operation from a fresh load.

Rules for a non-impulse (qualifying) purchase, first match wins:

    1. no record          -> new record, streak 1, anchor = purchase day
    2. no anchor          -> streak restarts at 1, anchor = purchase day
    3. anchor + 1 day     -> streak += 1; on reaching STREAK_TARGET_DAYS a
                             voucher is issued, completed_streaks += 1 and the
                             streak drops to 0; every STREAKS_PER_FREE_CREDIT
                             completions also grant a free credit
    4. same day as anchor -> no change
    5. anything else      -> streak restarts at 1, anchor = purchase day
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from apps.streaks.models import RewardKind, StreakRecord, Voucher, VoucherKind
from . import store
from .calendar_days import to_canonical_date, is_next_day, is_same_day, voucher_expiry
from .exceptions import InvalidInputError
from .results import (
    NO_REWARD,
    FreeCredit,
    ImpulseOutcome,
    NonImpulseOutcome,
    RewardResult,
    WeeklyVoucher,
)

logger = logging.getLogger(__name__)


def streak_target() -> int:
    target = getattr(settings, 'STREAK_TARGET_DAYS', 7)
    if target < 2:
        raise ImproperlyConfigured(f"STREAK_TARGET_DAYS must be at least 2, got {target!r}")
    return target


def streaks_per_free_credit() -> int:
    per_credit = getattr(settings, 'STREAKS_PER_FREE_CREDIT', 3)
    if per_credit < 1:
        raise ImproperlyConfigured(f"STREAKS_PER_FREE_CREDIT must be at least 1, got {per_credit!r}")
    return per_credit


def validate_user_id(user_id) -> UUID:
    """Coerce a user identifier to UUID, rejecting anything else."""
    if user_id is None:
        raise InvalidInputError("User id is required")
    if isinstance(user_id, UUID):
        return user_id
    if isinstance(user_id, str):
        try:
            return UUID(user_id)
        except ValueError as e:
            raise InvalidInputError(f"Invalid user id: {user_id!r}") from e
    raise InvalidInputError(f"Invalid user id type: {type(user_id).__name__}")


def validate_purchase_date(purchase_date) -> date:
    if purchase_date is None:
        raise InvalidInputError("Purchase date is required")
    return to_canonical_date(purchase_date)


# =============================================================================
# Pure transitions
# =============================================================================

def _start_streak(record: StreakRecord, purchase_date: date) -> None:
    record.current_streak = 1
    record.longest_streak = max(record.longest_streak, 1)
    record.last_qualifying_date = purchase_date


def issue_voucher(record: StreakRecord, earned_on: date) -> Voucher:
    """Build the voucher for the record's latest completion (unsaved)."""
    return Voucher(
        record=record,
        sequence=record.completed_streaks,
        kind=VoucherKind.WEEKLY_REWARD,
        earned_at=earned_on,
        expires_at=voucher_expiry(earned_on),
        used=False,
    )


def apply_non_impulse_purchase(
    record: StreakRecord,
    purchase_date: date
) -> tuple[RewardResult, list[Voucher]]:
    """
    Advance, keep or restart the streak for a qualifying purchase.

    ``purchase_date`` must already be a canonical calendar day.

    Returns:
        (reward, new_vouchers) - new_vouchers are unsaved and belong to
        ``record``; the store inserts them with the record update.
    """
    anchor = record.last_qualifying_date

    if anchor is None:
        _start_streak(record, purchase_date)
        return NO_REWARD, []

    # Only a day strictly after the anchor extends; an earlier day is out of order
    if purchase_date > anchor and is_next_day(anchor, purchase_date):
        record.current_streak += 1
        record.last_qualifying_date = purchase_date
        record.longest_streak = max(record.longest_streak, record.current_streak)

        if record.current_streak < streak_target():
            return NO_REWARD, []

        record.completed_streaks += 1
        voucher = issue_voucher(record, purchase_date)
        record.current_streak = 0

        reward = WeeklyVoucher(voucher)
        if record.completed_streaks % streaks_per_free_credit() == 0:
            record.free_credits += 1
            reward = FreeCredit(voucher)

        return reward, [voucher]

    if is_same_day(anchor, purchase_date):
        record.last_qualifying_date = purchase_date
        return NO_REWARD, []

    _start_streak(record, purchase_date)
    return NO_REWARD, []


def apply_impulse_purchase(
    record: StreakRecord,
    purchase_date: date,
    spend_credit: bool = False
) -> bool:
    """
    Break the streak, or forgive the purchase with a free credit.

    Returns:
        True if a credit was spent (streak and anchor untouched).
    """
    if spend_credit and record.free_credits > 0:
        record.free_credits -= 1
        return True

    record.current_streak = 0
    record.last_qualifying_date = None
    record.last_reset_date = purchase_date
    return False


# =============================================================================
# Service operations
# =============================================================================

def record_non_impulse_purchase(*, user_id, purchase_date) -> NonImpulseOutcome:
    """
    Apply a qualifying purchase to the user's streak.

    Args:
        user_id: UUID (or UUID string) of the purchasing user
        purchase_date: date, datetime or ISO string of the purchase

    Returns:
        NonImpulseOutcome with the saved record and the reward

    Raises:
        InvalidInputError: Missing or malformed id/date, or unknown user
        ConcurrentModificationError: Record changed since it was loaded
        StoreUnavailableError: Load or save failed
    """
    user_id = validate_user_id(user_id)
    day = validate_purchase_date(purchase_date)

    record = store.load_by_user(user_id)
    if record is None:
        record = store.create_default(user_id)
        expected_version = record.version
        _start_streak(record, day)
        reward, new_vouchers = NO_REWARD, []
    else:
        expected_version = record.version
        reward, new_vouchers = apply_non_impulse_purchase(record, day)

    record = store.save_atomic(record, expected_version, new_vouchers)

    if reward.kind != RewardKind.NONE:
        logger.info(
            "User %s completed streak #%d on %s, reward=%s",
            user_id, record.completed_streaks, day, reward.kind.value
        )

    return NonImpulseOutcome(record=record, reward=reward)


def record_impulse_purchase(*, user_id, purchase_date, spend_credit: bool = False) -> ImpulseOutcome:
    """
    Apply an impulse purchase to the user's streak.

    A first-ever purchase only creates the record. Otherwise a credit is
    spent when requested and available, else the streak resets.

    Raises:
        InvalidInputError: Missing or malformed id/date, or unknown user
        ConcurrentModificationError: Record changed since it was loaded
        StoreUnavailableError: Load or save failed
    """
    user_id = validate_user_id(user_id)
    day = validate_purchase_date(purchase_date)

    had_streak = 0
    record = store.load_by_user(user_id)
    if record is None:
        record = store.create_default(user_id)
        expected_version = record.version
        credit_spent = False
    else:
        expected_version = record.version
        had_streak = record.current_streak
        credit_spent = apply_impulse_purchase(record, day, spend_credit=bool(spend_credit))

    record = store.save_atomic(record, expected_version)

    if credit_spent:
        logger.info("User %s spent a free credit on %s, %d left", user_id, day, record.free_credits)
    elif had_streak:
        logger.info("User %s streak of %d reset by impulse purchase on %s", user_id, had_streak, day)

    return ImpulseOutcome(record=record, credit_spent=credit_spent)


def get_streak_record(*, user_id) -> Optional[StreakRecord]:
    """Read-only access to a user's record (None before the first purchase)."""
    return store.load_by_user(validate_user_id(user_id))
