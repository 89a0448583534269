from django.utils import timezone
from rest_framework import serializers
from .models import Voucher, RewardKind


# =============================================================================
# Input Serializers
# =============================================================================

class StatsQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the stats projection.

    Query Parameters:
        as_of (str): ISO date or datetime to evaluate voucher expiry at
    """

    as_of = serializers.CharField(required=False, max_length=40)


# =============================================================================
# Output Serializers
# =============================================================================

class VoucherSerializer(serializers.ModelSerializer):
    """Voucher with its activity evaluated at ``context['as_of']`` (or now)."""

    is_active = serializers.SerializerMethodField()

    class Meta:
        model = Voucher
        fields = [
            'id',
            'sequence',
            'kind',
            'earned_at',
            'expires_at',
            'used',
            'used_at',
            'is_active',
        ]
        read_only_fields = fields

    def get_is_active(self, obj):
        as_of = self.context.get('as_of') or timezone.now()
        return obj.is_active(as_of)


class StreakStatsSerializer(serializers.Serializer):
    """Serializer for the stats projection."""

    current_streak = serializers.IntegerField()
    longest_streak = serializers.IntegerField()
    completed_streaks = serializers.IntegerField()
    free_credits = serializers.IntegerField()
    active_vouchers = VoucherSerializer(many=True)
    used_vouchers = VoucherSerializer(many=True)
    as_of = serializers.DateTimeField()


class StreakUpdateSerializer(serializers.Serializer):
    """Outcome of one purchase, merged into the expense response."""

    reward = serializers.ChoiceField(choices=RewardKind.choices)
    credit_spent = serializers.BooleanField()
    voucher = VoucherSerializer(allow_null=True)
    stats = StreakStatsSerializer()
