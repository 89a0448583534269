"""
Streak record store - persistence adapter for the streak engine.

The engine only relies on the three contract functions below. Saves use
optimistic concurrency: every record carries a ``version`` stamp and an
update only lands if the stored version still equals the one that was
loaded. The record update and any new vouchers commit in one atomic block.
"""

import logging
from typing import Iterable, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction, DatabaseError, IntegrityError
from django.utils import timezone

from apps.streaks.models import StreakRecord, Voucher
from .exceptions import (
    ConcurrentModificationError,
    StoreUnavailableError,
    UnknownUserError,
    VoucherAlreadyUsedError,
)

User = get_user_model()

logger = logging.getLogger(__name__)

# Everything a transition may change on the record itself
MUTABLE_FIELDS = (
    'current_streak',
    'longest_streak',
    'completed_streaks',
    'free_credits',
    'last_qualifying_date',
    'last_reset_date',
)


def load_by_user(user_id: UUID) -> Optional[StreakRecord]:
    """Return the user's record with its ledger prefetched, or None."""
    try:
        return (
            StreakRecord.objects
            .prefetch_related('vouchers')
            .filter(user_id=user_id)
            .first()
        )
    except DatabaseError as e:
        logger.error("Failed to load streak record for user %s: %s", user_id, e)
        raise StoreUnavailableError("Streak record could not be loaded") from e


def create_default(user_id: UUID) -> StreakRecord:
    """
    Build an unsaved record with neutral defaults.

    The record only reaches the database through ``save_atomic``.

    Raises:
        UnknownUserError: If no user has this id
        StoreUnavailableError: If the user lookup fails
    """
    try:
        exists = User.objects.filter(pk=user_id).exists()
    except DatabaseError as e:
        raise StoreUnavailableError("User lookup failed") from e

    if not exists:
        raise UnknownUserError(f"No user with id {user_id}")

    return StreakRecord(user_id=user_id, version=0)


def save_atomic(
    record: StreakRecord,
    expected_version: int,
    new_vouchers: Iterable[Voucher] = ()
) -> StreakRecord:
    """
    Persist a transition as a single unit.

    New records are inserted; existing ones are updated only if their stored
    version still equals ``expected_version``. New vouchers are inserted in
    the same transaction, so either everything commits or nothing does.

    Args:
        record: Record mutated by a transition
        expected_version: Version the record had when it was loaded
        new_vouchers: Unsaved vouchers issued by the transition

    Returns:
        The same record with ``version`` and ``updated_at`` advanced

    Raises:
        ConcurrentModificationError: Another writer got there first
        StoreUnavailableError: The database rejected the write
    """
    new_vouchers = list(new_vouchers)
    now = timezone.now()
    new_version = expected_version + 1
    is_new = record._state.adding

    try:
        with transaction.atomic():
            if is_new:
                record.version = new_version
                record.updated_at = now
                record.save(force_insert=True)
            else:
                updated = StreakRecord.objects.filter(
                    pk=record.pk,
                    version=expected_version,
                ).update(
                    version=new_version,
                    updated_at=now,
                    **{field: getattr(record, field) for field in MUTABLE_FIELDS}
                )
                if updated == 0:
                    raise ConcurrentModificationError(
                        f"Streak record {record.pk} changed since version {expected_version}"
                    )

            for voucher in new_vouchers:
                voucher.record = record
                voucher.save(force_insert=True)
    except ConcurrentModificationError:
        logger.warning("Version conflict saving streak record for user %s", record.user_id)
        raise
    except IntegrityError as e:
        # Unique user or voucher sequence taken by a concurrent writer
        logger.warning("Integrity conflict saving streak record for user %s: %s", record.user_id, e)
        raise ConcurrentModificationError("Streak record was created concurrently") from e
    except DatabaseError as e:
        logger.error("Failed to save streak record for user %s: %s", record.user_id, e)
        raise StoreUnavailableError("Streak record could not be saved") from e

    record.version = new_version
    record.updated_at = now
    if new_vouchers:
        # Prefetched ledger no longer matches the table
        getattr(record, '_prefetched_objects_cache', {}).pop('vouchers', None)
    return record


def mark_voucher_used(voucher: Voucher, used_at) -> Voucher:
    """Flip ``used`` on an unused voucher; the only ledger mutation allowed."""
    try:
        updated = Voucher.objects.filter(pk=voucher.pk, used=False).update(
            used=True,
            used_at=used_at,
        )
    except DatabaseError as e:
        raise StoreUnavailableError("Voucher could not be updated") from e

    if updated == 0:
        raise VoucherAlreadyUsedError("Voucher has already been redeemed")

    voucher.used = True
    voucher.used_at = used_at
    return voucher
