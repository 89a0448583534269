import pytest
from datetime import date
from django.urls import reverse
from rest_framework import status
from apps.streaks.models import Voucher


# =============================================================================
# Stats Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestMyStreak:
    """Tests for GET /api/streaks/me/"""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('streaks:my-streak'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_defaults_without_record(self, streak_client):
        response = streak_client.get(reverse('streaks:my-streak'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['current_streak'] == 0
        assert response.data['longest_streak'] == 0
        assert response.data['active_vouchers'] == []
        assert response.data['used_vouchers'] == []

    def test_reports_counters_and_vouchers(self, streak_client, streak_in_progress, make_voucher):
        make_voucher(streak_in_progress, 1)

        response = streak_client.get(reverse('streaks:my-streak'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['current_streak'] == 4
        assert len(response.data['active_vouchers']) == 1
        assert response.data['active_vouchers'][0]['is_active'] is True

    def test_as_of_after_expiry(self, streak_client, streak_in_progress, make_voucher):
        make_voucher(streak_in_progress, 1, earned_at=date(2024, 3, 7))

        response = streak_client.get(reverse('streaks:my-streak'), {'as_of': '2024-04-06'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['active_vouchers'] == []

    def test_as_of_before_expiry(self, streak_client, streak_in_progress, make_voucher):
        make_voucher(streak_in_progress, 1, earned_at=date(2024, 3, 7))

        response = streak_client.get(reverse('streaks:my-streak'), {'as_of': '2024-03-20'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['active_vouchers']) == 1

    def test_invalid_as_of(self, streak_client):
        response = streak_client.get(reverse('streaks:my-streak'), {'as_of': 'someday'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_only_own_record(self, other_client, streak_in_progress):
        response = other_client.get(reverse('streaks:my-streak'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['current_streak'] == 0


@pytest.mark.django_db
class TestMyVouchers:
    """Tests for GET /api/streaks/me/vouchers/"""

    def test_full_ledger_in_order(self, streak_client, streak_in_progress, make_voucher):
        make_voucher(streak_in_progress, 1, earned_at=date(2024, 3, 7))
        make_voucher(streak_in_progress, 2)

        response = streak_client.get(reverse('streaks:my-vouchers'))

        assert response.status_code == status.HTTP_200_OK
        assert [v['sequence'] for v in response.data] == [1, 2]
        assert [v['is_active'] for v in response.data] == [False, True]

    def test_empty_ledger(self, streak_client):
        response = streak_client.get(reverse('streaks:my-vouchers'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []


# =============================================================================
# Redemption Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestRedeemVoucher:
    """Tests for POST /api/streaks/vouchers/{id}/redeem/"""

    def _url(self, voucher_id):
        return reverse('streaks:voucher-redeem', kwargs={'voucher_id': voucher_id})

    def test_redeem(self, streak_client, streak_in_progress, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)

        response = streak_client.post(self._url(voucher.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['used'] is True
        assert response.data['is_active'] is False
        assert Voucher.objects.get(pk=voucher.pk).used is True

    def test_redeem_twice(self, streak_client, streak_in_progress, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)
        streak_client.post(self._url(voucher.id))

        response = streak_client.post(self._url(voucher.id))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_redeem_expired(self, streak_client, streak_in_progress, make_voucher):
        voucher = make_voucher(streak_in_progress, 1, earned_at=date(2024, 3, 7))

        response = streak_client.post(self._url(voucher.id))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_redeem_other_users_voucher(self, other_client, streak_in_progress, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)

        response = other_client.post(self._url(voucher.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Voucher.objects.get(pk=voucher.pk).used is False

    def test_requires_authentication(self, api_client, streak_in_progress, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)

        response = api_client.post(self._url(voucher.id))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
