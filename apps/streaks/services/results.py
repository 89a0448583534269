"""Result types returned by the streak engine."""

from dataclasses import dataclass
from typing import Union

from apps.streaks.models import RewardKind, StreakRecord, Voucher


@dataclass(frozen=True)
class NoReward:
    kind = RewardKind.NONE


@dataclass(frozen=True)
class WeeklyVoucher:
    """A streak completed and ``voucher`` was appended to the ledger."""
    voucher: Voucher
    kind = RewardKind.WEEKLY_REWARD


@dataclass(frozen=True)
class FreeCredit:
    """
    A streak completed on a credit-granting multiple.

    The voucher is still issued; the credit is what gets reported.
    """
    voucher: Voucher
    kind = RewardKind.FREE_CREDIT


RewardResult = Union[NoReward, WeeklyVoucher, FreeCredit]

NO_REWARD = NoReward()


@dataclass(frozen=True)
class NonImpulseOutcome:
    record: StreakRecord
    reward: RewardResult


@dataclass(frozen=True)
class ImpulseOutcome:
    record: StreakRecord
    credit_spent: bool
