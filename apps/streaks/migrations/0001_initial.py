# Generated manually for streak records and the voucher ledger

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StreakRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('current_streak', models.PositiveIntegerField(default=0)),
                ('longest_streak', models.PositiveIntegerField(default=0)),
                ('completed_streaks', models.PositiveIntegerField(default=0)),
                ('free_credits', models.PositiveIntegerField(default=0)),
                ('last_qualifying_date', models.DateField(blank=True, null=True)),
                ('last_reset_date', models.DateField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='streak_record', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'streak_records',
            },
        ),
        migrations.CreateModel(
            name='Voucher',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sequence', models.PositiveIntegerField()),
                ('kind', models.CharField(choices=[('weekly-reward', 'Weekly reward')], default='weekly-reward', max_length=20)),
                ('earned_at', models.DateField()),
                ('expires_at', models.DateTimeField()),
                ('used', models.BooleanField(default=False)),
                ('used_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('record', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='vouchers', to='streaks.streakrecord')),
            ],
            options={
                'db_table': 'streak_vouchers',
                'ordering': ['sequence'],
            },
        ),
        migrations.AddIndex(
            model_name='streakrecord',
            index=models.Index(fields=['completed_streaks'], name='streak_rec_completed_idx'),
        ),
        migrations.AddIndex(
            model_name='voucher',
            index=models.Index(fields=['record', 'used'], name='streak_vou_record_used_idx'),
        ),
        migrations.AddIndex(
            model_name='voucher',
            index=models.Index(fields=['expires_at'], name='streak_vou_expires_idx'),
        ),
        migrations.AddConstraint(
            model_name='voucher',
            constraint=models.UniqueConstraint(fields=('record', 'sequence'), name='unique_voucher_sequence_per_record'),
        ),
    ]
