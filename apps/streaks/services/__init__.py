"""
Streaks services - Business logic layer.

This package holds the streak and reward core:
- Calendar-day normalization and comparison
- Streak record store (optimistic concurrency)
- Streak engine transitions
- Stats projection and voucher redemption
"""

from .calendar_days import (
    to_canonical_date,
    to_canonical_datetime,
    is_same_day,
    is_next_day,
)

from .streak_engine import (
    record_non_impulse_purchase,
    record_impulse_purchase,
    apply_non_impulse_purchase,
    apply_impulse_purchase,
    get_streak_record,
)

from .statistics import (
    project_stats,
    get_reward_ledger,
)

from .voucher_redemption import redeem_voucher

from .results import (
    NO_REWARD,
    NoReward,
    WeeklyVoucher,
    FreeCredit,
    NonImpulseOutcome,
    ImpulseOutcome,
)

# Domain Exceptions
from .exceptions import (
    StreaksServiceError,
    InvalidInputError,
    UnknownUserError,
    StoreUnavailableError,
    ConcurrentModificationError,
    VoucherNotFoundError,
    VoucherAlreadyUsedError,
    VoucherExpiredError,
)

__all__ = [
    # Calendar
    'to_canonical_date',
    'to_canonical_datetime',
    'is_same_day',
    'is_next_day',
    # Engine
    'record_non_impulse_purchase',
    'record_impulse_purchase',
    'apply_non_impulse_purchase',
    'apply_impulse_purchase',
    'get_streak_record',
    # Projections
    'project_stats',
    'get_reward_ledger',
    # Redemption
    'redeem_voucher',
    # Results
    'NO_REWARD',
    'NoReward',
    'WeeklyVoucher',
    'FreeCredit',
    'NonImpulseOutcome',
    'ImpulseOutcome',
    # Exceptions
    'StreaksServiceError',
    'InvalidInputError',
    'UnknownUserError',
    'StoreUnavailableError',
    'ConcurrentModificationError',
    'VoucherNotFoundError',
    'VoucherAlreadyUsedError',
    'VoucherExpiredError',
]
