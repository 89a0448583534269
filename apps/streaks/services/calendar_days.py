"""
Calendar-day arithmetic in the canonical streak time zone.

Every value crossing into the streak engine is normalized here first, so
"same day" and "next day" never depend on the server's local zone. The zone
comes from ``settings.STREAK_TIME_ZONE`` (UTC unless configured).

Normalization rules:
    - ``date``: already a canonical calendar day.
    - aware ``datetime``: converted into the canonical zone, then truncated.
    - naive ``datetime``: taken as wall-clock time in the canonical zone.
    - ``str``: ISO-8601 date or datetime, parsed and then handled as above.
"""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .exceptions import InvalidInputError


def canonical_zone() -> ZoneInfo:
    name = getattr(settings, 'STREAK_TIME_ZONE', 'UTC')
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ImproperlyConfigured(f"Unknown STREAK_TIME_ZONE: {name!r}") from e


def _parse(value: str):
    try:
        parsed = parse_datetime(value) or parse_date(value)
    except ValueError as e:
        raise InvalidInputError(f"Invalid date: {value!r}") from e
    if parsed is None:
        raise InvalidInputError(f"Invalid date: {value!r}")
    return parsed


def to_canonical_date(value) -> date:
    """Return the calendar day ``value`` falls on in the canonical zone."""
    if isinstance(value, str):
        value = _parse(value)

    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return value.date()
        return value.astimezone(canonical_zone()).date()

    if isinstance(value, date):
        return value

    raise InvalidInputError(f"Expected a date, got {type(value).__name__}")


def to_canonical_datetime(value) -> datetime:
    """Return an aware datetime in the canonical zone; dates map to 00:00."""
    if isinstance(value, str):
        value = _parse(value)

    zone = canonical_zone()

    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value, zone)
        return value.astimezone(zone)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=zone)

    raise InvalidInputError(f"Expected a date or datetime, got {type(value).__name__}")


def day_difference(a, b) -> int:
    """Signed number of calendar days from ``a`` to ``b``."""
    return (to_canonical_date(b) - to_canonical_date(a)).days


def is_same_day(a, b) -> bool:
    return day_difference(a, b) == 0


def is_next_day(a, b) -> bool:
    """True when ``a`` and ``b`` are exactly one calendar day apart, either way."""
    return abs(day_difference(a, b)) == 1


def voucher_expiry(earned_on: date) -> datetime:
    """Start of the day ``VOUCHER_LIFETIME_DAYS`` after ``earned_on``."""
    lifetime = getattr(settings, 'VOUCHER_LIFETIME_DAYS', 30)
    return to_canonical_datetime(to_canonical_date(earned_on) + timedelta(days=lifetime))
