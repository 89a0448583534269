import pytest
import uuid
from datetime import date, timedelta
from django.utils import timezone
from apps.streaks.models import StreakRecord
from apps.streaks.services import (
    project_stats,
    redeem_voucher,
    InvalidInputError,
    VoucherAlreadyUsedError,
    VoucherExpiredError,
    VoucherNotFoundError,
)


@pytest.mark.django_db
class TestRedeemVoucher:
    """Tests for redeem_voucher()"""

    def test_redeem_marks_voucher_used(self, streak_in_progress, streak_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)

        redeemed = redeem_voucher(user_id=streak_user.id, voucher_id=voucher.id)

        assert redeemed.used is True
        assert redeemed.used_at is not None
        voucher.refresh_from_db()
        assert voucher.used is True

    def test_redeemed_voucher_moves_to_used_partition(self, streak_in_progress, streak_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)

        redeem_voucher(user_id=streak_user.id, voucher_id=voucher.id)
        stats = project_stats(user_id=streak_user.id)

        assert stats['active_vouchers'] == []
        assert [v.id for v in stats['used_vouchers']] == [voucher.id]

    def test_redeem_leaves_counters_alone(self, streak_in_progress, streak_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)

        redeem_voucher(user_id=streak_user.id, voucher_id=str(voucher.id))

        record = StreakRecord.objects.get(user=streak_user)
        assert record.current_streak == 4
        assert record.free_credits == 0
        assert record.version == 1

    def test_redeem_twice(self, streak_in_progress, streak_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)
        redeem_voucher(user_id=streak_user.id, voucher_id=voucher.id)

        with pytest.raises(VoucherAlreadyUsedError):
            redeem_voucher(user_id=streak_user.id, voucher_id=voucher.id)

    def test_redeem_expired(self, streak_in_progress, streak_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1, earned_at=date(2024, 3, 7))

        with pytest.raises(VoucherExpiredError):
            redeem_voucher(user_id=streak_user.id, voucher_id=voucher.id, as_of='2024-04-06')

        voucher.refresh_from_db()
        assert voucher.used is False

    def test_redeem_just_before_expiry(self, streak_in_progress, streak_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1, earned_at=date(2024, 3, 7))

        redeemed = redeem_voucher(
            user_id=streak_user.id,
            voucher_id=voucher.id,
            as_of='2024-04-05T23:59:00Z',
        )

        assert redeemed.used is True

    def test_cannot_redeem_someone_elses_voucher(self, streak_in_progress, other_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)

        with pytest.raises(VoucherNotFoundError):
            redeem_voucher(user_id=other_user.id, voucher_id=voucher.id)

    def test_unknown_voucher(self, streak_user):
        with pytest.raises(VoucherNotFoundError):
            redeem_voucher(user_id=streak_user.id, voucher_id=uuid.uuid4())

    @pytest.mark.parametrize('voucher_id', [None, 'nope'])
    def test_invalid_voucher_id(self, streak_user, voucher_id):
        with pytest.raises(InvalidInputError):
            redeem_voucher(user_id=streak_user.id, voucher_id=voucher_id)

    def test_redeem_uses_given_moment(self, streak_in_progress, streak_user, make_voucher):
        voucher = make_voucher(streak_in_progress, 1)
        moment = timezone.now() + timedelta(days=1)

        redeemed = redeem_voucher(user_id=streak_user.id, voucher_id=voucher.id, as_of=moment)

        assert redeemed.used_at == moment
