"""Voucher redemption - the single operation that marks a voucher used."""

import logging
from uuid import UUID

from django.db import DatabaseError
from django.utils import timezone

from apps.streaks.models import Voucher
from . import store
from .calendar_days import to_canonical_datetime
from .exceptions import (
    InvalidInputError,
    StoreUnavailableError,
    VoucherAlreadyUsedError,
    VoucherExpiredError,
    VoucherNotFoundError,
)
from .streak_engine import validate_user_id

logger = logging.getLogger(__name__)


def redeem_voucher(*, user_id, voucher_id, as_of=None) -> Voucher:
    """
    Redeem one of the user's vouchers.

    Expiry never marks a voucher used on its own; only this call does.
    Streak counters and free credits are left alone.

    Args:
        user_id: UUID of the voucher owner
        voucher_id: UUID of the voucher
        as_of: Redemption moment, defaults to now

    Returns:
        The voucher with ``used=True`` and ``used_at`` set

    Raises:
        InvalidInputError: Malformed ids
        VoucherNotFoundError: No such voucher for this user
        VoucherAlreadyUsedError: Already redeemed (including a concurrent redeem)
        VoucherExpiredError: ``expires_at <= as_of``
    """
    user_id = validate_user_id(user_id)
    if voucher_id is None:
        raise InvalidInputError("Voucher id is required")
    try:
        voucher_id = UUID(str(voucher_id))
    except ValueError as e:
        raise InvalidInputError(f"Invalid voucher id: {voucher_id!r}") from e

    moment = timezone.now() if as_of is None else to_canonical_datetime(as_of)

    try:
        voucher = Voucher.objects.select_related('record').get(
            id=voucher_id,
            record__user_id=user_id,
        )
    except Voucher.DoesNotExist:
        raise VoucherNotFoundError("Voucher not found")
    except DatabaseError as e:
        raise StoreUnavailableError("Voucher could not be loaded") from e

    if voucher.used:
        raise VoucherAlreadyUsedError("Voucher has already been redeemed")

    if voucher.is_expired(moment):
        raise VoucherExpiredError(f"Voucher expired at {voucher.expires_at.isoformat()}")

    voucher = store.mark_voucher_used(voucher, used_at=moment)
    logger.info("User %s redeemed voucher %s", user_id, voucher.id)
    return voucher
