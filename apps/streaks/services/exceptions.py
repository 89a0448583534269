"""Domain exceptions for streaks app."""


class StreaksServiceError(Exception):
    """Base exception for all streak service errors."""
    pass


class InvalidInputError(StreaksServiceError):
    """User identifier or date is missing or malformed."""
    pass


class UnknownUserError(InvalidInputError):
    """No user exists for the given identifier."""
    pass


class StoreUnavailableError(StreaksServiceError):
    """Streak record could not be loaded or saved; nothing was applied."""
    pass


class ConcurrentModificationError(StreaksServiceError):
    """
    Streak record changed between load and save.

    Retry the whole transition from a fresh load, never the stale record.
    """
    pass


class VoucherNotFoundError(StreaksServiceError):
    """Voucher does not exist or belongs to another user."""
    pass


class VoucherAlreadyUsedError(StreaksServiceError):
    """Voucher was already redeemed."""
    pass


class VoucherExpiredError(StreaksServiceError):
    """Voucher expired before redemption."""
    pass
