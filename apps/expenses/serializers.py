from rest_framework import serializers
from apps.accounts.serializers import CurrencyField
from .models import Expense


# =============================================================================
# Input Serializers
# =============================================================================

class ExpenseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for expense filtering.

    Query Parameters:
        date_from (date): Expenses on or after this date
        date_to (date): Expenses on or before this date
        category (str): Exact category match
        is_impulse (bool): Only impulse / only non-impulse expenses
    """

    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    category = serializers.CharField(required=False, max_length=100)
    is_impulse = serializers.BooleanField(required=False, allow_null=True)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


class ExpenseSummaryQuerySerializer(ExpenseFilterSerializer):
    """Date range for the spending summary; category and impulse filters are ignored."""
    pass


class ExpenseCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating expenses."""

    use_free_credit = serializers.BooleanField(
        write_only=True,
        required=False,
        default=False,
        help_text='Spend a free credit instead of breaking the streak (impulse only)'
    )
    currency = CurrencyField(required=False)

    class Meta:
        model = Expense
        fields = [
            'date',
            'description',
            'category',
            'time_of_day',
            'amount',
            'currency',
            'payment_mode',
            'need_or_want',
            'is_impulse',
            'source_app',
            'use_free_credit',
        ]
        extra_kwargs = {
            'source_app': {'required': False},
        }


# =============================================================================
# Output Serializers
# =============================================================================

class ExpenseSerializer(serializers.ModelSerializer):
    """Main serializer for expenses; also used for updates."""

    currency = CurrencyField(required=False)

    class Meta:
        model = Expense
        fields = [
            'id',
            'date',
            'description',
            'category',
            'time_of_day',
            'amount',
            'currency',
            'payment_mode',
            'need_or_want',
            'is_impulse',
            'source_app',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class CategoryTotalSerializer(serializers.Serializer):
    category = serializers.CharField()
    count = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class ExpenseSummarySerializer(serializers.Serializer):
    """Serializer for spending totals."""

    total_count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    impulse_count = serializers.IntegerField()
    impulse_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    by_category = CategoryTotalSerializer(many=True)
