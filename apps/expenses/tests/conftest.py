import pytest
from datetime import date, timedelta
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.expenses.models import Expense, NeedOrWant, TimeOfDay
from apps.streaks.models import StreakRecord


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
    return date(2024, 3, 1)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def spender(db):
    """Create and return a user who records expenses."""
    return User.objects.create_user(
        email='spender@example.com',
        password='TestPass123!',
        display_name='Spender',
        default_currency='EUR',
    )


@pytest.fixture
def other_spender(db):
    """Create and return another user with their own expenses."""
    return User.objects.create_user(
        email='other.spender@example.com',
        password='TestPass123!',
        display_name='Other Spender',
    )


@pytest.fixture
def spender_client(api_client, spender):
    """Return API client authenticated as spender."""
    refresh = RefreshToken.for_user(spender)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(other_spender):
    """Return a separate API client authenticated as other_spender."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_spender)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def expense_payload(day1):
    """Valid request body for a non-impulse expense on day 1."""
    return {
        'date': str(day1),
        'description': 'Weekly groceries',
        'category': 'groceries',
        'time_of_day': TimeOfDay.MORNING,
        'amount': '42.50',
        'payment_mode': 'card',
        'need_or_want': NeedOrWant.NEED,
        'is_impulse': False,
    }


@pytest.fixture
def make_expense(db):
    """Factory for expenses saved directly, without touching the streak."""
    def _make(user, day, **fields):
        defaults = {
            'description': 'Coffee',
            'category': 'food',
            'time_of_day': TimeOfDay.AFTERNOON,
            'amount': Decimal('4.20'),
            'payment_mode': 'cash',
            'need_or_want': NeedOrWant.WANT,
        }
        defaults.update(fields)
        return Expense.objects.create(user=user, date=day, **defaults)
    return _make


@pytest.fixture
def spender_streak(db, spender, day1):
    """Record four days into a streak, anchored on day 4, one free credit."""
    return StreakRecord.objects.create(
        user=spender,
        current_streak=4,
        longest_streak=4,
        free_credits=1,
        last_qualifying_date=day1 + timedelta(days=3),
        version=1,
    )
