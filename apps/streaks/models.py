from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid


class VoucherKind(models.TextChoices):
    WEEKLY_REWARD = 'weekly-reward', 'Weekly reward'


class RewardKind(models.TextChoices):
    """Reward reported to the caller after a qualifying purchase."""
    NONE = 'none', 'None'
    WEEKLY_REWARD = 'weekly-reward', 'Weekly reward'
    FREE_CREDIT = 'free-credit', 'Free credit'


class StreakRecord(models.Model):
    """Per-user streak counters and reward currency."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='streak_record'
    )

    # Streak counters
    current_streak = models.PositiveIntegerField(default=0)
    longest_streak = models.PositiveIntegerField(default=0)
    completed_streaks = models.PositiveIntegerField(default=0)

    # Reward currency, spent to forgive an impulse purchase
    free_credits = models.PositiveIntegerField(default=0)

    # Calendar days in the canonical streak zone
    last_qualifying_date = models.DateField(null=True, blank=True)
    last_reset_date = models.DateField(null=True, blank=True)

    # Optimistic concurrency stamp, bumped on every committed transition
    version = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'streak_records'
        indexes = [
            models.Index(fields=['completed_streaks'], name='streak_rec_completed_idx'),
        ]

    def __str__(self):
        return (
            f"{self.user} - streak {self.current_streak} "
            f"(best {self.longest_streak}, credits {self.free_credits})"
        )

    @property
    def reward_ledger(self):
        """Vouchers in earn order."""
        return list(self.vouchers.all())


class Voucher(models.Model):
    """Time-limited reward minted when a streak completes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    record = models.ForeignKey(
        StreakRecord,
        on_delete=models.CASCADE,
        related_name='vouchers'
    )

    # 1-based earn order within the record; equals the completion number
    sequence = models.PositiveIntegerField()

    kind = models.CharField(
        max_length=20,
        choices=VoucherKind.choices,
        default=VoucherKind.WEEKLY_REWARD
    )

    earned_at = models.DateField()
    expires_at = models.DateTimeField()

    # Redemption (the only mutable part of a voucher)
    used = models.BooleanField(default=False)
    used_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'streak_vouchers'
        ordering = ['sequence']
        constraints = [
            models.UniqueConstraint(
                fields=['record', 'sequence'],
                name='unique_voucher_sequence_per_record'
            ),
        ]
        indexes = [
            models.Index(fields=['record', 'used'], name='streak_vou_record_used_idx'),
            models.Index(fields=['expires_at'], name='streak_vou_expires_idx'),
        ]

    def __str__(self):
        state = 'used' if self.used else f"expires {self.expires_at:%Y-%m-%d}"
        return f"{self.get_kind_display()} #{self.sequence} ({state})"

    def is_active(self, as_of):
        return not self.used and self.expires_at > as_of

    def is_expired(self, as_of):
        return self.expires_at <= as_of
