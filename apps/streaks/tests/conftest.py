import pytest
from datetime import date, timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.streaks.models import StreakRecord, Voucher, VoucherKind
from apps.streaks.services.calendar_days import voucher_expiry


@pytest.fixture(autouse=True)
def streak_settings(settings):
    """Pin the streak tunables so tests don't depend on the environment."""
    settings.STREAK_TARGET_DAYS = 7
    settings.STREAKS_PER_FREE_CREDIT = 3
    settings.VOUCHER_LIFETIME_DAYS = 30
    settings.STREAK_TIME_ZONE = 'UTC'
    settings.STREAK_MAX_RETRIES = 3
    return settings


@pytest.fixture
def day1():
    """First day of a streak run."""
    return date(2024, 3, 1)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def streak_user(db):
    """Create and return a user who keeps a streak."""
    return User.objects.create_user(
        email='streaker@example.com',
        password='TestPass123!',
        display_name='Streaker',
    )


@pytest.fixture
def other_user(db):
    """Create and return an unrelated user."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def streak_client(api_client, streak_user):
    """Return API client authenticated as streak_user."""
    refresh = RefreshToken.for_user(streak_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(other_user):
    """Return a separate API client authenticated as other_user."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def make_record(db):
    """Factory for persisted streak records."""
    def _make(user, **fields):
        fields.setdefault('version', 1)
        return StreakRecord.objects.create(user=user, **fields)
    return _make


@pytest.fixture
def make_voucher(db):
    """Factory for ledger vouchers; earned today unless told otherwise."""
    def _make(record, sequence, earned_at=None, **fields):
        earned_at = earned_at or timezone.now().date()
        return Voucher.objects.create(
            record=record,
            sequence=sequence,
            kind=VoucherKind.WEEKLY_REWARD,
            earned_at=earned_at,
            expires_at=voucher_expiry(earned_at),
            **fields
        )
    return _make


@pytest.fixture
def streak_in_progress(make_record, streak_user, day1):
    """Record four days into a streak, anchored on day 4, no credits."""
    return make_record(
        streak_user,
        current_streak=4,
        longest_streak=4,
        last_qualifying_date=day1 + timedelta(days=3),
    )
