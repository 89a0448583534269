"""Statistics service - read-only projections of a user's streak record."""

from django.utils import timezone

from . import store
from .calendar_days import to_canonical_datetime
from .streak_engine import validate_user_id


def _empty_stats(as_of) -> dict:
    return {
        'current_streak': 0,
        'longest_streak': 0,
        'completed_streaks': 0,
        'free_credits': 0,
        'active_vouchers': [],
        'used_vouchers': [],
        'as_of': as_of,
    }


def project_stats(*, user_id, as_of=None) -> dict:
    """
    Project a user's streak record for display.

    Voucher partitions are computed at query time: a voucher is active when
    it is unused and ``expires_at > as_of``; used vouchers are listed
    regardless of expiry. Expired unused vouchers appear in neither list.
    Nothing is written.

    Args:
        user_id: UUID of the user
        as_of: Moment to evaluate expiry at (date, datetime or ISO string).
            Defaults to now; a bare date means 00:00 in the streak zone.

    Returns:
        Dictionary with:
        - current_streak, longest_streak, completed_streaks, free_credits: int
        - active_vouchers: list[Voucher] in earn order
        - used_vouchers: list[Voucher] in earn order
        - as_of: datetime the partitions were computed at

    Example:
        >>> stats = project_stats(user_id=user.id)
        >>> stats['current_streak'], len(stats['active_vouchers'])
        (3, 1)
    """
    user_id = validate_user_id(user_id)
    moment = timezone.now() if as_of is None else to_canonical_datetime(as_of)

    record = store.load_by_user(user_id)
    if record is None:
        return _empty_stats(moment)

    ledger = record.reward_ledger

    return {
        'current_streak': record.current_streak,
        'longest_streak': record.longest_streak,
        'completed_streaks': record.completed_streaks,
        'free_credits': record.free_credits,
        'active_vouchers': [v for v in ledger if v.is_active(moment)],
        'used_vouchers': [v for v in ledger if v.used],
        'as_of': moment,
    }


def get_reward_ledger(*, user_id) -> list:
    """Every voucher the user has earned, in earn order."""
    record = store.load_by_user(validate_user_id(user_id))
    if record is None:
        return []
    return record.reward_ledger

