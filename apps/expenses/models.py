from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid

from apps.accounts.validators import validate_currency_code


class NeedOrWant(models.TextChoices):
    NEED = 'need', 'Need'
    WANT = 'want', 'Want'


class TimeOfDay(models.TextChoices):
    MORNING = 'morning', 'Morning'
    AFTERNOON = 'afternoon', 'Afternoon'
    EVENING = 'evening', 'Evening'
    NIGHT = 'night', 'Night'


class Expense(models.Model):
    """A single spending record in a user's ledger."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='expenses'
    )

    # What and when
    date = models.DateField()
    description = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    time_of_day = models.CharField(max_length=20, choices=TimeOfDay.choices)

    # Money
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    currency = models.CharField(
        max_length=3, default='USD', validators=[validate_currency_code]
    )
    payment_mode = models.CharField(max_length=50)

    # Classification supplied by the client
    need_or_want = models.CharField(max_length=10, choices=NeedOrWant.choices)
    is_impulse = models.BooleanField(default=False)

    # Importing app, if any
    source_app = models.CharField(max_length=100, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['user', '-date'], name='expenses_user_date_idx'),
            models.Index(fields=['category'], name='expenses_category_idx'),
            models.Index(fields=['user', 'is_impulse'], name='expenses_user_impulse_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        tag = ' [impulse]' if self.is_impulse else ''
        return f"{self.date} {self.description} - {self.amount} {self.currency}{tag}"
