# apps/time_tracking/models.py
from decimal import Decimal

from django.db import models
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.utils import timezone


class TimeEntry(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)

    # PROTECT: bucketu z wpisami czasu nie da się usunąć
    bucket = models.ForeignKey('buckets.Bucket', on_delete=models.PROTECT, related_name='time_entries')
    task = models.ForeignKey('tasks.Task', null=True, blank=True, on_delete=models.SET_NULL, related_name='time_entries')

    entry_date = models.DateField(default=timezone.localdate)
    hours = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01')), MaxValueValidator(Decimal('24'))]
    )
    description = models.CharField(max_length=255, blank=True)

    class EntryType(models.TextChoices):
        MANUAL = 'manual', 'Ręcznie'
        TIMER = 'timer', 'Stoper'

    entry_type = models.CharField(max_length=10, choices=EntryType.choices, default=EntryType.MANUAL)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-entry_date', '-created_at']
        verbose_name_plural = 'time entries'

    def __str__(self):
        return f"{self.entry_date} {self.bucket} {self.hours}h"


class TimeTarget(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    bucket = models.OneToOneField('buckets.Bucket', on_delete=models.CASCADE, related_name='time_target')
    target_percent = models.DecimalField(
        max_digits=4,
        decimal_places=1,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
        help_text="Procent dostępnego czasu (godziny na jawie)"
    )

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.bucket}: {self.target_percent}%"
