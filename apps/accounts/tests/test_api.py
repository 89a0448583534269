import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User
from apps.streaks.models import StreakRecord


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_does_not_create_streak_record(self, api_client):
        """Streak records are created lazily by the first purchase."""
        url = reverse('users:register')
        data = {
            'email': 'lazy@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert not StreakRecord.objects.filter(user__email='lazy@example.com').exists()

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'email': 'weak@example.com',
            'password': '123',
            'password_confirm': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_normalizes_default_currency(self, api_client):
        """Lower-case currency codes are stored upper-cased."""
        url = reverse('users:register')
        data = {
            'email': 'euro@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'default_currency': 'eur',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['default_currency'] == 'EUR'
        assert User.objects.get(email='euro@example.com').default_currency == 'EUR'

    def test_register_invalid_default_currency(self, api_client):
        """Registration fails when the currency is not a 3-letter code."""
        url = reverse('users:register')
        data = {
            'email': 'badcurrency@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'default_currency': 'E1',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'default_currency' in response.data
        assert not User.objects.filter(email='badcurrency@example.com').exists()


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['email'] == user.email

    def test_login_wrong_password(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'WrongPassword123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data

    def test_login_inactive_user(self, api_client, user_inactive):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.last_login is not None


@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['default_currency'] == 'USD'

    def test_get_current_user_unauthenticated(self, api_client):
        response = api_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
